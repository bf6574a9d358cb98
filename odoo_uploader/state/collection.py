"""Ordered collection of images waiting to be uploaded."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import final

from odoo_uploader.errors import CollectionBusyError


@final
class ImageCollection:
    """Images selected for the next upload, in upload order.

    Duplicates are allowed. While frozen (an upload is in flight) every
    mutation raises CollectionBusyError.
    """

    def __init__(self, images: Iterable[Path] | None = None) -> None:
        self._images: list[Path] = [Path(p) for p in images] if images else []
        self._frozen = False

    def __len__(self) -> int:
        return len(self._images)

    def __iter__(self) -> Iterator[Path]:
        return iter(list(self._images))

    def __getitem__(self, index: int) -> Path:
        return self._images[index]

    def __repr__(self) -> str:
        return f"ImageCollection({[str(p) for p in self._images]!r})"

    @property
    def is_empty(self) -> bool:
        return not self._images

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            raise CollectionBusyError("Cannot change the image list while an upload is running")

    def append(self, image: Path) -> None:
        """Add a single image (e.g. a camera capture) to the end."""
        self._check_mutable()
        self._images.append(Path(image))

    def extend(self, images: Iterable[Path]) -> int:
        """Add several images to the end.

        Returns:
            Number of images added
        """
        self._check_mutable()
        added = [Path(p) for p in images]
        self._images.extend(added)
        return len(added)

    def remove_at(self, index: int) -> Path:
        """Remove and return the image at ``index``.

        Raises:
            IndexError: If ``index`` is out of range
        """
        self._check_mutable()
        return self._images.pop(index)

    def clear(self) -> None:
        self._check_mutable()
        self._images.clear()

    def snapshot(self) -> list[Path]:
        """Return a copy of the current images."""
        return list(self._images)

    @contextmanager
    def frozen_during_upload(self) -> Iterator[list[Path]]:
        """Freeze the collection and yield a snapshot of it."""
        self._frozen = True
        try:
            yield self.snapshot()
        finally:
            self._frozen = False
