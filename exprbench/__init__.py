"""exprbench: evaluate and benchmark expressions against YAML test data."""

__version__ = "0.1.0"

__all__ = ["__version__"]
