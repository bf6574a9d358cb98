"""
Pytest configuration and fixtures for the uploader tests.
"""

from __future__ import annotations

import threading
from pathlib import Path
from unittest.mock import Mock

import pytest
import requests

from odoo_uploader.models import Credentials, UploadOutcome


class RecordingNotifier:
    """Collects every status message."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)


class StubConfirmer:
    """Answers every confirmation with a fixed value."""

    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.prompts: list[str] = []

    async def confirm(self, message: str) -> bool:
        self.prompts.append(message)
        return self.answer


class FakeUploader:
    """Returns a canned outcome and records its calls."""

    def __init__(self, outcome: UploadOutcome | None = None) -> None:
        self.outcome = outcome or UploadOutcome(succeeded=True, status_code=200)
        self.calls: list[tuple[list[Path], str, Credentials]] = []

    def upload(self, images, folder_name, credentials) -> UploadOutcome:
        self.calls.append((list(images), folder_name, credentials))
        return self.outcome


class BlockingUploader:
    """Holds the upload open until released from the test."""

    def __init__(self) -> None:
        self.started = threading.Event()
        self.release = threading.Event()

    def upload(self, images, folder_name, credentials) -> UploadOutcome:
        self.started.set()
        _ = self.release.wait(5)
        return UploadOutcome(succeeded=True, status_code=200, total_images=len(images))

@pytest.fixture
def image_files(tmp_path):
    """Three small JPEG-named files A, B and C."""
    paths = []
    for name in ("A.jpg", "B.png", "C.jpeg"):
        path = tmp_path / name
        _ = path.write_bytes(b"\xff\xd8fake-" + name.encode())
        paths.append(path)
    return paths


@pytest.fixture
def credentials():
    return Credentials(api_key="secret-token", api_endpoint="https://odoo.example.com/api/upload")


@pytest.fixture
def make_response():
    """Factory for fake HTTP responses."""

    def _make(status_code: int = 200, json_body=None, text: str = ""):
        response = Mock()
        response.status_code = status_code
        response.text = text
        if json_body is None:
            response.json.side_effect = ValueError("No JSON object could be decoded")
        else:
            response.json.return_value = json_body
        if status_code >= 400:
            response.raise_for_status.side_effect = requests.HTTPError(
                f"{status_code} Server Error", response=response
            )
        return response

    return _make


@pytest.fixture
def mock_session(make_response):
    """HTTP session whose POST returns a 200 response."""
    session = Mock(spec=requests.Session)
    session.post.return_value = make_response(200, json_body={"status": "ok"})
    return session


@pytest.fixture
def notifier():
    return RecordingNotifier()
