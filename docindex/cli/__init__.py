"""Command line interface for docindex."""
from .main import main

__all__ = ["main"]
