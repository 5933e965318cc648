"""Slop Score - statistical fingerprinting of AI writing patterns."""

__version__ = "0.1.0"
