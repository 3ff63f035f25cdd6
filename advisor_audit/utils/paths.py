"""Filesystem helpers for run artifacts."""

import logging
import re
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^a-z0-9\-_]")


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Create a directory if it does not exist.

    Safe to call repeatedly.

    Args:
        path: Directory path

    Returns:
        The directory as a Path
    """
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    logger.debug(f"Ensured directory: {directory}")
    return directory


def normalize_title(title: str) -> str:
    """
    Normalize a page title into a filename stem.

    "Credit Cards" -> "credit-cards"

    Args:
        title: Page title

    Returns:
        Lowercase, hyphen-separated stem
    """
    stem = "-".join(title.strip().lower().split())
    stem = _UNSAFE_CHARS.sub("", stem)
    return stem or "page"


def screenshot_path(directory: Union[str, Path], title: str) -> Path:
    """Path of the full-page screenshot for a page title."""
    return Path(directory) / f"{normalize_title(title)}.png"
