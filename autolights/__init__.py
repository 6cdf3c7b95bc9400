"""Automatic high-beam control built from small nodes on an in-process publish/subscribe session."""

__version__ = "0.1.0"