"""Command-line interface for the 0x45 client."""

from .app import app, main

__all__ = [
    "app",
    "main",
]
