"""Nearest emergency shelter navigation: region lookup, ranking, and live pointer tracking."""

__version__ = "0.1.0"
