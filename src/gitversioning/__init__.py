"""Derive reproducible versions from the state of a git repository."""

__version__ = "0.3.0"
