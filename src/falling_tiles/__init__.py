"""Falling tiles: a falling tile-group puzzle engine."""

__version__ = "0.1.0"
