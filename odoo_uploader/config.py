"""Application configuration loaded from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from odoo_uploader.errors import ConfigurationError

SETTINGS_FILE_ENV = "ODOO_UPLOADER_SETTINGS_FILE"
TIMEOUT_ENV = "ODOO_UPLOADER_TIMEOUT"
ACCEPT_ANY_STATUS_ENV = "ODOO_UPLOADER_ACCEPT_ANY_STATUS"

DEFAULT_SETTINGS_FILE = Path.home() / ".odoo_uploader" / "settings.json"
DEFAULT_TIMEOUT = 60.0

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AppConfig:
    """Runtime settings that are not credentials.

    Attributes:
        settings_file: JSON preferences file holding the API key and endpoint
        timeout: Request timeout in seconds for the upload POST
        accept_any_status: Treat any HTTP response as success, whatever its status code
    """

    settings_file: Path = DEFAULT_SETTINGS_FILE
    timeout: float = DEFAULT_TIMEOUT
    accept_any_status: bool = False

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> AppConfig:
        """Build the configuration from environment variables.

        Args:
            load_env_file: Load a ``.env`` file into the environment first

        Returns:
            AppConfig populated from the environment, with defaults for unset values

        Raises:
            ConfigurationError: If the timeout is not a positive number
        """
        if load_env_file:
            _ = load_dotenv()

        settings_file = os.getenv(SETTINGS_FILE_ENV)
        raw_timeout = os.getenv(TIMEOUT_ENV)

        timeout = DEFAULT_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ConfigurationError(
                    f"{TIMEOUT_ENV} must be a number of seconds, got {raw_timeout!r}"
                ) from e
            if timeout <= 0:
                raise ConfigurationError(f"{TIMEOUT_ENV} must be positive, got {raw_timeout!r}")

        accept_any_status = os.getenv(ACCEPT_ANY_STATUS_ENV, "").strip().lower() in _TRUTHY

        return cls(
            settings_file=Path(settings_file).expanduser() if settings_file else DEFAULT_SETTINGS_FILE,
            timeout=timeout,
            accept_any_status=accept_any_status,
        )
