"""Acquire, cache and load Python packages on demand."""

__version__ = "0.1.0"
