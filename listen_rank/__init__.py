"""Rank albums and artists from a plain-text listening log."""

__version__ = "0.1.0"
