"""Uploader implementations."""

from .multipart import NOT_CONFIGURED, MultipartUploader

__all__ = ["NOT_CONFIGURED", "MultipartUploader"]
