"""Utility functions for image and file handling."""

from __future__ import annotations

import os
from pathlib import Path
from typing import FrozenSet, List, Union

from PIL import Image


def supported_extensions() -> FrozenSet[str]:
    """Return the lower-case file extensions Pillow can open."""

    registered = Image.registered_extensions()
    return frozenset(
        extension.lower() for extension, fmt in registered.items() if fmt in Image.OPEN
    )


def find_images(directory: Union[str, os.PathLike]) -> List[Path]:
    """
    List the image files directly inside *directory*, sorted by file name.

    Args:
        directory: Directory to scan

    Returns:
        Sorted list of image paths

    Raises:
        FileNotFoundError: If the directory does not exist
        NotADirectoryError: If the path is not a directory
    """
    path = Path(directory)
    if not path.exists():
        raise FileNotFoundError(f"Directory not found: {directory}")
    if not path.is_dir():
        raise NotADirectoryError(f"Not a directory: {directory}")

    extensions = supported_extensions()
    return sorted(
        (entry for entry in path.iterdir() if entry.is_file() and entry.suffix.lower() in extensions),
        key=lambda entry: entry.name,
    )


def format_file_size(size_bytes: float) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB", "500 KB")
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} PB"


def format_points(points: float) -> str:
    """Format a length in points, trimming trailing zeros (``144.0`` -> ``"144"``)."""

    text = f"{points:.2f}".rstrip("0").rstrip(".")
    return text or "0"
