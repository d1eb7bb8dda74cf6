"""Command-line interface for exprbench."""

from .main import app, run

__all__ = ["app", "run"]
