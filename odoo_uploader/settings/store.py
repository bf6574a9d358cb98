"""JSON-backed storage for the API key and endpoint."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from odoo_uploader.models.credentials import Credentials

logger = logging.getLogger(__name__)

# Preference keys in the settings file
API_KEY_KEY = "apiKey"
API_ENDPOINT_KEY = "apiEndpoint"

# Environment overrides, also read from .env
API_KEY_ENV = "ODOO_UPLOADER_API_KEY"
API_ENDPOINT_ENV = "ODOO_UPLOADER_API_ENDPOINT"


class CredentialStore:
    """Loads and saves the API credentials in a small JSON preferences file."""

    def __init__(self, settings_file: Path, use_environment: bool = True) -> None:
        """Initialize CredentialStore.

        Args:
            settings_file: Path to the JSON preferences file
            use_environment: Let environment variables override stored values
        """
        self.settings_file: Path = settings_file
        self.use_environment: bool = use_environment

    def _read_preferences(self) -> dict[str, str]:
        """Read the preferences file, returning an empty mapping when unusable."""
        if not self.settings_file.exists():
            return {}

        try:
            with self.settings_file.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            # A corrupted file behaves like an unconfigured one
            logger.warning("Could not load settings from %s: %s", self.settings_file, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring settings file %s: expected a JSON object", self.settings_file)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_preferences(self, preferences: dict[str, str]) -> None:
        """Write the preferences file.

        Raises:
            OSError: If the file cannot be written
        """
        try:
            self.settings_file.parent.mkdir(parents=True, exist_ok=True)
            with self.settings_file.open("w", encoding="utf-8") as f:
                json.dump(preferences, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise OSError(f"Failed to write settings to {self.settings_file}: {e}") from e

    def load(self) -> Credentials:
        """Load the current credentials.

        Returns:
            Credentials, with None for any value that is unset
        """
        preferences = self._read_preferences()
        api_key = preferences.get(API_KEY_KEY) or None
        api_endpoint = preferences.get(API_ENDPOINT_KEY) or None

        if self.use_environment:
            api_key = os.getenv(API_KEY_ENV) or api_key
            api_endpoint = os.getenv(API_ENDPOINT_ENV) or api_endpoint

        return Credentials(api_key=api_key, api_endpoint=api_endpoint)

    def save(self, api_key: str, api_endpoint: str) -> Credentials:
        """Persist new credentials.

        Args:
            api_key: Bearer token for the upload endpoint
            api_endpoint: Full URL the images are posted to

        Returns:
            The credentials as they will be seen by the next load()
        """
        preferences = self._read_preferences()
        preferences[API_KEY_KEY] = api_key.strip()
        preferences[API_ENDPOINT_KEY] = api_endpoint.strip()
        self._write_preferences(preferences)
        logger.info("Saved API settings to %s", self.settings_file)
        return self.load()
