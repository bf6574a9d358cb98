"""Data models for the image uploader."""

from .credentials import Credentials
from .upload import CANCELLED, Cancelled, UploadOutcome

__all__ = ["CANCELLED", "Cancelled", "Credentials", "UploadOutcome"]
