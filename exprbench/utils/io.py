"""File IO helpers for exprbench inputs and outputs."""
from __future__ import annotations

from pathlib import Path

from exprbench.errors import DocumentReadError, ParseError

__all__ = ["read_bytes", "decode_text"]


def read_bytes(path: str | Path) -> bytes:
    """Return the full content of ``path``; the handle is closed on return."""

    file_path = Path(path)
    try:
        return file_path.read_bytes()
    except OSError as exc:
        raise DocumentReadError(file_path, exc) from exc


def decode_text(data: bytes, source: str) -> str:
    """Decode ``data`` as UTF-8 or raise :class:`ParseError`."""

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(source, exc) from exc
