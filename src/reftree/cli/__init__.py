"""Command line interface for reftree."""

from .main import main

__all__ = ["main"]
