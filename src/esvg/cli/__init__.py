"""Command-line interface for esvg."""

from .main import main

__all__ = ["main"]
