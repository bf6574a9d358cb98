"""Upload outcome data model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import final


@dataclass(frozen=True)
class UploadOutcome:
    """Result of one upload attempt."""

    succeeded: bool
    status_code: int | None = None
    response_body: object | None = None
    error_detail: str | None = None
    total_images: int = 0

    @classmethod
    def failure(cls, error_detail: str, total_images: int = 0) -> UploadOutcome:
        """Build a failed outcome that never reached the server."""
        return cls(succeeded=False, error_detail=error_detail, total_images=total_images)


@final
class Cancelled:
    """Marker returned when the user declines the upload confirmation."""

    _instance: Cancelled | None = None

    def __new__(cls) -> Cancelled:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CANCELLED"

    def __bool__(self) -> bool:
        return False


CANCELLED = Cancelled()
