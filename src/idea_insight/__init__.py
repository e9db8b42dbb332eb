"""Idea classification and market evidence synthesis."""

__version__ = "0.1.0"
