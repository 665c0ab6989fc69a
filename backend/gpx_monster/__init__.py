"""GPX Monster: merge and normalize GPX tracks."""

__version__ = "0.1.0"
