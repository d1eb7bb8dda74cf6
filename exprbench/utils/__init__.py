"""Utility helpers for exprbench."""

from .io import decode_text, read_bytes
from .mathx import safe_div

__all__ = ["decode_text", "read_bytes", "safe_div"]
