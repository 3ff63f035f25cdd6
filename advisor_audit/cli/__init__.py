"""Command line interface for advisor audits."""

from .app import main

__all__ = ["main"]
