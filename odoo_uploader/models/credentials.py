"""API credentials data model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Credentials:
    """API key and endpoint used to authorize and address an upload."""

    api_key: str | None = None
    api_endpoint: str | None = None

    @property
    def is_configured(self) -> bool:
        """True when both the key and the endpoint are non-blank."""
        return bool(
            self.api_key and self.api_key.strip()
            and self.api_endpoint and self.api_endpoint.strip()
        )

    @property
    def masked_key(self) -> str:
        """API key with everything but the last four characters hidden."""
        if not self.api_key:
            return "<not set>"
        if len(self.api_key) <= 4:
            return "*" * len(self.api_key)
        return "*" * (len(self.api_key) - 4) + self.api_key[-4:]
