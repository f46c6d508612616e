"""Fetch, order and group the hiring item list for display."""

__version__ = "0.1.0"
