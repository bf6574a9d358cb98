"""Upload orchestration."""

from .upload_coordinator import (
    FAILURE_MESSAGE,
    NO_FOLDER_MESSAGE,
    NO_IMAGES_MESSAGE,
    SUCCESS_MESSAGE,
    Confirmer,
    Notifier,
    Uploader,
    UploadCoordinator,
)

__all__ = [
    "FAILURE_MESSAGE",
    "NO_FOLDER_MESSAGE",
    "NO_IMAGES_MESSAGE",
    "SUCCESS_MESSAGE",
    "Confirmer",
    "Notifier",
    "UploadCoordinator",
    "Uploader",
]
