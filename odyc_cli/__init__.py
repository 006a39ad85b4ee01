"""Command-line helpers for Odyc.js developers: sprite configuration from PNG images."""

__version__ = "0.1.0"
__all__ = ["__version__"]