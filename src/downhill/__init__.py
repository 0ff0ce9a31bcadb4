"""Downhill: a top-down skiing arcade simulation."""

__version__ = "0.1.0"
