"""Expression file splitting."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from exprbench.config import DELIMITER
from exprbench.utils.io import decode_text, read_bytes

__all__ = ["Expression", "split_expressions", "number_expressions", "load_expressions"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Expression:
    """One non-empty expression source and its 1-based position in the raw split."""

    source: str
    ordinal: int


def split_expressions(text: str, delimiter: str = DELIMITER) -> List[str]:
    """Split ``text`` on ``delimiter`` and trim every segment.

    Empty segments are kept so positions stay stable; consumers skip them.
    """

    if not delimiter:
        raise ValueError("Expression delimiter must not be empty")
    return [segment.strip() for segment in text.strip().split(delimiter)]


def number_expressions(segments: Sequence[str]) -> List[Expression]:
    """Return the non-empty ``segments`` tagged with their raw ordinal."""

    return [
        Expression(source=segment, ordinal=idx)
        for idx, segment in enumerate(segments, start=1)
        if segment
    ]


def load_expressions(path: str | Path, delimiter: str = DELIMITER) -> List[str]:
    """Read ``path`` and return its raw expression split."""

    text = decode_text(read_bytes(path), source=str(path))
    segments = split_expressions(text, delimiter)
    logger.debug(
        "Loaded %d expression segment(s) (%d non-empty) from %s",
        len(segments),
        sum(1 for segment in segments if segment),
        path,
    )
    return segments
