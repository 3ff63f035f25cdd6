"""Utility functions and helpers."""

from .paths import ensure_directory, normalize_title, screenshot_path
from .retry import RetryPolicy

__all__ = [
    "ensure_directory",
    "normalize_title",
    "screenshot_path",
    "RetryPolicy",
]
