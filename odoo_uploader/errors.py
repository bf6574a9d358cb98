"""Exceptions raised by the upload pipeline."""

from __future__ import annotations


class UploaderError(Exception):
    """Base class for all uploader errors."""


class ValidationError(UploaderError):
    """Raised when an upload attempt is missing images or a folder name."""


class ConfigurationError(UploaderError):
    """Raised when credentials or settings are missing or malformed."""


class UploadInProgressError(UploaderError):
    """Raised when an upload is started while another one is still pending."""


class CollectionBusyError(UploaderError):
    """Raised when the image collection is modified during an upload."""
