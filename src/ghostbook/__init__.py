"""Ghostbook - a shared ghost hunting journal."""

__version__ = "0.1.0"
