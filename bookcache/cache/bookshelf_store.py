"""Persistence for the bookshelf index, a single JSON array at the cache root."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Sequence

from pydantic import ValidationError

from bookcache import logging_manager
from bookcache.fsutils import atomic_write_text

from .cache_models import BookshelfEntry
from .cache_paths import CacheLayout
from .cache_results import LoadResult, LoadStatus, SaveResult

logger = logging_manager.get_logger().getChild("cache.bookshelf")


class BookshelfStore:
    """Read and fully replace the list of :class:`BookshelfEntry` records."""

    def __init__(self, layout: CacheLayout) -> None:
        self._layout = layout

    @property
    def path(self) -> Path:
        return self._layout.bookshelf_path

    def load_result(self) -> LoadResult[List[BookshelfEntry]]:
        path = self.path
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return LoadResult(LoadStatus.NOT_FOUND, value=[], path=path)
        except OSError as exc:
            logger.warning(
                "Failed to read bookshelf %s: %s",
                path,
                exc,
                extra={"event": "cache.bookshelf.read_error"},
            )
            return LoadResult(LoadStatus.IO_ERROR, path=path, error=str(exc))

        try:
            payload = json.loads(raw)
            if not isinstance(payload, list):
                raise ValueError(f"expected a JSON array, got {type(payload).__name__}")
            entries = [BookshelfEntry.model_validate(item) for item in payload]
        except (ValueError, ValidationError) as exc:
            logger.warning(
                "Bookshelf %s is corrupt: %s",
                path,
                exc,
                extra={"event": "cache.bookshelf.corrupt"},
            )
            return LoadResult(LoadStatus.CORRUPT, path=path, error=str(exc))
        return LoadResult(LoadStatus.OK, value=entries, path=path)

    def load(self) -> List[BookshelfEntry]:
        """Return the stored entries; an absent or unreadable index yields ``[]``."""

        return self.load_result().value_or([])

    def save(self, entries: Sequence[BookshelfEntry]) -> SaveResult:
        """Replace the whole index with ``entries``.

        Failures are logged and reported through the returned
        :class:`SaveResult`; nothing is raised.
        """

        path = self.path
        try:
            payload = json.dumps([entry.to_payload() for entry in entries], ensure_ascii=False)
            atomic_write_text(path, payload)
        except (OSError, TypeError, ValueError) as exc:
            logger.error(
                "Failed to save bookshelf %s: %s",
                path,
                exc,
                extra={"event": "cache.bookshelf.save_error"},
            )
            return SaveResult(ok=False, path=path, error=str(exc))
        logger.debug(
            "Bookshelf saved with %d entries",
            len(entries),
            extra={"event": "cache.bookshelf.saved"},
        )
        return SaveResult(ok=True, path=path)


__all__ = ["BookshelfStore"]
