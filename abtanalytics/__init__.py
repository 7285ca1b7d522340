"""Streaming aggregation of sales transactions, served as a small JSON API over WSGI."""

__version__ = "1.0.0"

__all__ = ["__version__"]