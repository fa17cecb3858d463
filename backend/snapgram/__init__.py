"""Snapgram social media backend."""

__version__ = "1.0.0"
