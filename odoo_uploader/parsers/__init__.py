"""Image file discovery utilities."""

from .image_collector import SUPPORTED_IMAGE_EXTENSIONS, collect_image_files, expand_image_paths

__all__ = ["SUPPORTED_IMAGE_EXTENSIONS", "collect_image_files", "expand_image_paths"]
