"""Multipart batch uploader for the Odoo image endpoint."""

from __future__ import annotations

import logging
import mimetypes
from collections.abc import Sequence
from contextlib import ExitStack
from pathlib import Path
from typing import cast

import requests
from requests.exceptions import HTTPError, RequestException
from requests_toolbelt.multipart.encoder import MultipartEncoder

from odoo_uploader.config import DEFAULT_TIMEOUT
from odoo_uploader.errors import ConfigurationError
from odoo_uploader.models.credentials import Credentials
from odoo_uploader.models.upload import UploadOutcome

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "not configured"

FOLDER_FIELD = "folder_name"
PHOTOS_FIELD = "photos"


def _response_body(response: requests.Response) -> object:
    """Decode a response body as JSON, falling back to text."""
    try:
        return response.json()
    except ValueError:
        return response.text


class MultipartUploader:
    """Posts a batch of images as one multipart/form-data request.

    Each call to upload() performs at most one POST and is never retried.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        accept_any_status: bool = False,
    ) -> None:
        """Initialize the uploader.

        Args:
            session: HTTP session to send requests with (a new one by default)
            timeout: Request timeout in seconds
            accept_any_status: Count every HTTP response as success, even 4xx/5xx.
                By default non-2xx responses are failures.
        """
        self.session: requests.Session = session or requests.Session()
        self.timeout: float = timeout
        self.accept_any_status: bool = accept_any_status

    @staticmethod
    def _require_credentials(credentials: Credentials) -> tuple[str, str]:
        if not credentials.is_configured:
            raise ConfigurationError(NOT_CONFIGURED)
        return cast(str, credentials.api_key).strip(), cast(str, credentials.api_endpoint).strip()

    @staticmethod
    def _build_encoder(
        images: Sequence[Path], folder_name: str, files: ExitStack
    ) -> MultipartEncoder:
        """Build a streaming multipart body.

        Image handles are registered on ``files`` so the caller closes them
        once the request is done. File contents are read as the body streams.

        Raises:
            OSError: If an image cannot be opened
        """
        fields: list[tuple[str, object]] = [(FOLDER_FIELD, folder_name)]
        for img_path in images:
            mime_type = mimetypes.guess_type(img_path.name)[0] or "application/octet-stream"
            handle = files.enter_context(open(img_path, "rb"))
            fields.append((PHOTOS_FIELD, (img_path.name, handle, mime_type)))
        return MultipartEncoder(fields=fields)

    def _post(self, endpoint: str, api_key: str, encoder: MultipartEncoder) -> requests.Response:
        """Send the multipart POST.

        Raises:
            requests.exceptions.RequestException: On transport failure, or on a
                non-2xx status unless accept_any_status is set
        """
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": encoder.content_type,
        }
        response = self.session.post(endpoint, data=encoder, headers=headers, timeout=self.timeout)
        if not self.accept_any_status:
            response.raise_for_status()
        return response

    def upload(
        self, images: Sequence[Path], folder_name: str, credentials: Credentials
    ) -> UploadOutcome:
        """Upload all images to the configured endpoint in a single request.

        Args:
            images: Image paths, sent in this order as repeated ``photos`` parts
            folder_name: Destination folder, sent as the ``folder_name`` field
            credentials: API key and endpoint

        Returns:
            UploadOutcome describing the result. This method never raises.
        """
        total = len(images)
        try:
            api_key, endpoint = self._require_credentials(credentials)
        except ConfigurationError as e:
            logger.warning("Upload skipped: API settings are %s", e)
            return UploadOutcome.failure(str(e), total_images=total)

        try:
            with ExitStack() as files:
                encoder = self._build_encoder(images, folder_name, files)
                logger.debug("Posting %d image(s) to %s (folder %r)", total, endpoint, folder_name)
                response = self._post(endpoint, api_key, encoder)
        except HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            body = _response_body(e.response) if e.response is not None else None
            logger.error("Upload rejected with status %s: %s", status_code, body)
            return UploadOutcome(
                succeeded=False,
                status_code=status_code,
                response_body=body,
                error_detail=str(e),
                total_images=total,
            )
        except RequestException as e:
            logger.error("Error uploading images: %s", e)
            return UploadOutcome.failure(str(e), total_images=total)
        except OSError as e:
            logger.error("Could not read image for upload: %s", e)
            return UploadOutcome.failure(str(e), total_images=total)
        except Exception as e:
            logger.exception("Unexpected error while uploading images")
            return UploadOutcome.failure(str(e), total_images=total)

        body = _response_body(response)
        logger.info("Status code: %s", response.status_code)
        logger.debug("Response body: %s", body)
        return UploadOutcome(
            succeeded=True,
            status_code=response.status_code,
            response_body=body,
            total_images=total,
        )
