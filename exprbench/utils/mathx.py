"""Arithmetic helpers for benchmark statistics."""
from __future__ import annotations

__all__ = ["safe_div"]


def safe_div(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Return ``numerator / denominator``, or ``default`` for a zero denominator."""

    if not denominator:
        return float(default)
    return float(numerator) / float(denominator)
