"""Persistence for per-book detail records stored as ``<id>/<id>.json``."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from bookcache import logging_manager
from bookcache.fsutils import atomic_write_text

from .cache_models import Book
from .cache_paths import CacheLayout
from .cache_results import LoadResult, LoadStatus

logger = logging_manager.get_logger().getChild("cache.detail")


class DetailStore:
    """Load and save the full :class:`Book` record for a single identifier."""

    def __init__(self, layout: CacheLayout) -> None:
        self._layout = layout

    def path_for(self, book_id: str) -> Path:
        return self._layout.detail_path(book_id)

    def load_result(self, book_id: str) -> LoadResult[Book]:
        path = self.path_for(book_id)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return LoadResult(LoadStatus.NOT_FOUND, path=path)
        except OSError as exc:
            logger.warning(
                "Failed to read detail for book %s: %s",
                book_id,
                exc,
                extra={"event": "cache.detail.read_error", "book_id": book_id},
            )
            return LoadResult(LoadStatus.IO_ERROR, path=path, error=str(exc))

        try:
            book = Book.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as exc:
            logger.warning(
                "Detail for book %s is corrupt: %s",
                book_id,
                exc,
                extra={"event": "cache.detail.corrupt", "book_id": book_id},
            )
            return LoadResult(LoadStatus.CORRUPT, path=path, error=str(exc))
        return LoadResult(LoadStatus.OK, value=book, path=path)

    def load(self, book_id: str) -> Optional[Book]:
        """Return the stored book, or ``None`` when missing or unreadable."""

        return self.load_result(book_id).value

    def save(self, book: Book) -> Path:
        """Write ``book`` into its existing directory and return the file path.

        Raises :class:`FileNotFoundError` when the book directory does not exist.
        """

        path = self.path_for(book.id)
        if not path.parent.is_dir():
            raise FileNotFoundError(f"Book directory {path.parent} does not exist")
        atomic_write_text(path, json.dumps(book.to_payload(), ensure_ascii=False))
        logger.debug(
            "Detail saved to %s",
            path,
            extra={"event": "cache.detail.saved", "book_id": book.id},
        )
        return path


__all__ = ["DetailStore"]
