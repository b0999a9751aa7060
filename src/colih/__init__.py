"""Colih - attendance tracking for regional groups."""

__version__ = "0.1.0"
