"""Identity allocation and content import for newly cached books."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Callable, Optional
from uuid import uuid4

from bookcache import logging_manager
from bookcache.fsutils import atomic_copy

from .cache_paths import CacheLayout
from .cache_results import BookIdCollisionError, CacheInfrastructure

logger = logging_manager.get_logger().getChild("cache.allocator")


def _new_book_id() -> str:
    return str(uuid4())


def import_content(source_path: Path | str, destination: Path) -> Path:
    """Copy ``source_path`` to ``destination``; the destination is complete or absent."""

    return atomic_copy(source_path, destination)


class BookAllocator:
    """Create book identities, their private directories and imported content."""

    def __init__(
        self,
        layout: CacheLayout,
        *,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self._layout = layout
        self._id_factory = id_factory or _new_book_id

    def create_book_cache_infrastructure(self, source_path: Path | str) -> CacheInfrastructure:
        """Allocate a new book for ``source_path`` and import its content.

        The book directory is created without parents, so a missing cache root
        raises :class:`FileNotFoundError`. When the import fails the new
        directory is removed before the error propagates.
        """

        book_id = self._id_factory()
        directory = self._layout.book_dir(book_id)
        try:
            directory.mkdir(parents=False, exist_ok=False)
        except FileExistsError as exc:
            raise BookIdCollisionError(
                f"Book directory already exists for generated id {book_id}"
            ) from exc

        content_path = self._layout.content_path(book_id, source_path)
        try:
            import_content(source_path, content_path)
        except BaseException:
            shutil.rmtree(directory, ignore_errors=True)
            logger.warning(
                "Content import failed; removed directory %s",
                directory,
                extra={"event": "cache.allocate.rollback", "book_id": book_id},
            )
            raise

        logger.info(
            "Allocated book %s from %s",
            book_id,
            source_path,
            extra={"event": "cache.allocate", "book_id": book_id},
        )
        return CacheInfrastructure(book_id=book_id, content_path=content_path, directory=directory)


__all__ = ["BookAllocator", "import_content"]
