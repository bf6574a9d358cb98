"""Image file collection utilities."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

# Supported image file extensions
SUPPORTED_IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.gif', '.bmp', '.webp', '.tiff', '.heic'}


def is_image_file(path: Path) -> bool:
    return path.is_file() and path.suffix.lower() in SUPPORTED_IMAGE_EXTENSIONS


def collect_image_files(folder_path: Path) -> list[Path]:
    """
    Collect all image files from a folder with supported extensions.

    Args:
        folder_path: Path to the folder to scan

    Returns:
        list[Path]: List of image file paths, sorted by name
    """
    if not folder_path.exists() or not folder_path.is_dir():
        logger.warning("Folder does not exist or is not a directory: %s", folder_path)
        return []

    image_files = [p for p in folder_path.iterdir() if is_image_file(p)]

    # Sort files by name for consistent ordering
    image_files.sort(key=lambda x: x.name.lower())

    if not image_files:
        logger.warning("No image files found in folder: %s", folder_path)

    return image_files


def expand_image_paths(paths: Iterable[Path]) -> list[Path]:
    """
    Turn a mix of image files and folders into a flat list of images.

    Folders are expanded with collect_image_files(); files are kept in the
    order given. Missing paths and non-image files are skipped with a warning.

    Args:
        paths: Files and/or folders picked by the user

    Returns:
        list[Path]: Image paths in selection order
    """
    images: list[Path] = []
    for path in paths:
        path = Path(path).expanduser()
        if path.is_dir():
            images.extend(collect_image_files(path))
        elif is_image_file(path):
            images.append(path)
        elif not path.exists():
            logger.warning("Skipping missing path: %s", path)
        else:
            logger.warning("Skipping unsupported file: %s", path)
    return images
