"""Coordinates a single confirmed batch upload."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Protocol, final

from odoo_uploader.errors import UploadInProgressError, ValidationError
from odoo_uploader.models.credentials import Credentials
from odoo_uploader.models.upload import CANCELLED, Cancelled, UploadOutcome
from odoo_uploader.state.collection import ImageCollection

logger = logging.getLogger(__name__)

NO_IMAGES_MESSAGE = "No images selected"
NO_FOLDER_MESSAGE = "Please enter a folder name"
SUCCESS_MESSAGE = "All images uploaded successfully"
FAILURE_MESSAGE = "Failed to upload images"


class Uploader(Protocol):
    def upload(
        self, images: Sequence[Path], folder_name: str, credentials: Credentials
    ) -> UploadOutcome: ...


class Confirmer(Protocol):
    async def confirm(self, message: str) -> bool: ...


class Notifier(Protocol):
    def notify(self, message: str) -> None: ...


def confirmation_message(image_count: int, folder_name: str) -> str:
    return f'Do you want to upload {image_count} image(s) to Odoo in folder "{folder_name}"?'


@final
class UploadCoordinator:
    """Validates, confirms and runs one upload attempt at a time.

    The uploader is blocking and runs on a worker thread, so the event loop
    stays free while the request is in flight. The image collection is frozen
    for the duration of the call and cleared only when the whole batch
    succeeded.
    """

    def __init__(self, uploader: Uploader, confirmer: Confirmer, notifier: Notifier) -> None:
        """Initialize the coordinator.

        Args:
            uploader: Performs the network call
            confirmer: Asks the user to approve the upload
            notifier: Receives the terminal status message of each attempt
        """
        self.uploader = uploader
        self.confirmer = confirmer
        self.notifier = notifier
        self._pending = False

    @property
    def is_busy(self) -> bool:
        """True while an attempt is between validation and its final message."""
        return self._pending

    @staticmethod
    def _validate(collection: ImageCollection, folder_name: str) -> str:
        """Check the preconditions in order.

        Returns:
            The trimmed folder name

        Raises:
            ValidationError: With the message to show the user
        """
        if collection.is_empty:
            raise ValidationError(NO_IMAGES_MESSAGE)
        folder = folder_name.strip()
        if not folder:
            raise ValidationError(NO_FOLDER_MESSAGE)
        return folder

    async def attempt_upload(
        self,
        collection: ImageCollection,
        folder_name: str,
        credentials: Credentials,
        on_start: Callable[[], None] | None = None,
    ) -> UploadOutcome | Cancelled:
        """Upload every image in ``collection`` to ``folder_name``.

        Args:
            collection: Images to send; cleared on success, untouched otherwise
            folder_name: Destination folder as typed by the user
            credentials: API key and endpoint
            on_start: Called once the user confirmed and the request is about to
                be sent, while the collection is frozen

        Returns:
            The uploader's outcome, a failed outcome for validation errors, or
            CANCELLED if the user declined

        Raises:
            UploadInProgressError: If another attempt has not finished yet
        """
        if self._pending:
            raise UploadInProgressError("An upload is already in progress")

        self._pending = True
        try:
            return await self._run_attempt(collection, folder_name, credentials, on_start)
        finally:
            self._pending = False

    async def _run_attempt(
        self,
        collection: ImageCollection,
        folder_name: str,
        credentials: Credentials,
        on_start: Callable[[], None] | None,
    ) -> UploadOutcome | Cancelled:
        try:
            folder = self._validate(collection, folder_name)
        except ValidationError as e:
            self.notifier.notify(str(e))
            return UploadOutcome.failure(str(e), total_images=len(collection))

        if not await self.confirmer.confirm(confirmation_message(len(collection), folder)):
            logger.debug("Upload to %r cancelled by user", folder)
            return CANCELLED

        with collection.frozen_during_upload() as images:
            if on_start is not None:
                on_start()
            outcome = await asyncio.to_thread(self.uploader.upload, images, folder, credentials)

        if outcome.succeeded:
            collection.clear()
            self.notifier.notify(SUCCESS_MESSAGE)
        else:
            logger.error(
                "Upload of %d image(s) to %r failed: %s",
                len(images),
                folder,
                outcome.error_detail,
            )
            self.notifier.notify(FAILURE_MESSAGE)
        return outcome
