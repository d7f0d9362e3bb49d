"""Collaborative trip planning core."""

__version__ = "1.0.0"
