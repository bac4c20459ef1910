"""Animated rain and lightning effect."""

__version__ = "0.1.0"
