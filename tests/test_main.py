"""Tests for the command-line entry point."""

from __future__ import annotations

from pathlib import Path

import pytest

import main
from odoo_uploader.config import AppConfig
from odoo_uploader.settings import CredentialStore
from odoo_uploader.uploaders import MultipartUploader


@pytest.fixture
def store(tmp_path):
    return CredentialStore(tmp_path / "settings.json", use_environment=False)


@pytest.fixture
def uploader_with_session(monkeypatch, mock_session):
    def _factory(**kwargs):
        return MultipartUploader(session=mock_session, **kwargs)

    monkeypatch.setattr(main, "MultipartUploader", _factory)
    return mock_session


def test_parse_upload_arguments():
    args = main.parse_arguments(["upload", "PKG-1", "a.jpg", "photos", "--yes"])

    assert args.command == "upload"
    assert args.folder_name == "PKG-1"
    assert args.paths == [Path("a.jpg"), Path("photos")]
    assert args.yes is True


def test_parse_defaults_to_shell():
    args = main.parse_arguments([])

    assert args.command is None
    assert args.verbose is False


def test_run_upload_success(tmp_path, image_files, store, credentials, uploader_with_session):
    _ = store.save(credentials.api_key, credentials.api_endpoint)
    args = main.parse_arguments(["upload", "PKG-1", str(tmp_path), "--yes"])

    exit_code = main.run_upload(args, AppConfig(settings_file=store.settings_file), store)

    assert exit_code == 0
    encoder = uploader_with_session.post.call_args.kwargs["data"]
    assert [value[0] for _, value in encoder.fields[1:]] == ["A.jpg", "B.png", "C.jpeg"]


def test_run_upload_without_settings_reports_through_coordinator(
    tmp_path, image_files, store, uploader_with_session, capsys
):
    args = main.parse_arguments(["upload", "PKG-1", str(tmp_path), "--yes"])

    exit_code = main.run_upload(args, AppConfig(settings_file=store.settings_file), store)

    assert exit_code == 1
    uploader_with_session.post.assert_not_called()
    output = capsys.readouterr().out
    assert output.count("Failed to upload images") == 1
    assert "not configured" in output
    assert "main.py settings" in output


def test_run_upload_with_no_images(tmp_path, store, credentials, uploader_with_session):
    _ = store.save(credentials.api_key, credentials.api_endpoint)
    empty = tmp_path / "empty"
    empty.mkdir()
    args = main.parse_arguments(["upload", "PKG-1", str(empty), "--yes"])

    exit_code = main.run_upload(args, AppConfig(settings_file=store.settings_file), store)

    assert exit_code == 1
    uploader_with_session.post.assert_not_called()
