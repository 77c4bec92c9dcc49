"""Service facade over the book cache: allocation, stores, sub-directories and removal.

Every public coroutine offloads its blocking filesystem work to a worker
thread, so awaiting callers never stall the event loop. Operations on the same
book are not serialized; concurrent writers to one file resolve as last write
wins.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from fastapi.concurrency import run_in_threadpool

from bookcache import logging_manager
from bookcache.config_manager import BookCacheSettings, CacheContext, build_cache_context

from .allocator import BookAllocator
from .bookshelf_store import BookshelfStore
from .cache_models import Book, BookshelfEntry
from .cache_paths import CacheLayout
from .cache_results import CacheInfrastructure, LoadResult, LoadStatus, SaveResult
from .detail_store import DetailStore

logger = logging_manager.get_logger().getChild("cache.manager")


class BookCacheManager:
    """Coordinate the on-disk cache of book projects for one cache root."""

    def __init__(
        self,
        context: CacheContext,
        *,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self._context = context
        self._layout = CacheLayout(context)
        self._allocator = BookAllocator(self._layout, id_factory=id_factory)
        self._bookshelf = BookshelfStore(self._layout)
        self._details = DetailStore(self._layout)

    @classmethod
    def from_settings(cls, settings: Optional[BookCacheSettings] = None) -> "BookCacheManager":
        """Resolve the cache root described by ``settings`` and build a manager."""

        return cls(build_cache_context(settings))

    @property
    def context(self) -> CacheContext:
        return self._context

    @property
    def cache_root(self) -> Path:
        return self._context.cache_root

    @property
    def bookshelf(self) -> BookshelfStore:
        return self._bookshelf

    @property
    def details(self) -> DetailStore:
        return self._details

    def book_dir(self, book_id: str) -> Path:
        return self._layout.book_dir(book_id)

    # Allocation

    async def create_book_cache_infrastructure(self, source_path: Path | str) -> CacheInfrastructure:
        """Allocate an identifier and directory for ``source_path`` and import its content.

        No bookshelf entry or detail file is written.
        """

        return await run_in_threadpool(
            self._allocator.create_book_cache_infrastructure, source_path
        )

    # Bookshelf index

    async def load_bookshelf(self) -> List[BookshelfEntry]:
        return await run_in_threadpool(self._bookshelf.load)

    async def load_bookshelf_result(self) -> LoadResult[List[BookshelfEntry]]:
        return await run_in_threadpool(self._bookshelf.load_result)

    async def save_bookshelf(self, entries: Sequence[BookshelfEntry]) -> SaveResult:
        return await run_in_threadpool(self._bookshelf.save, list(entries))

    def _entries_for_edit(self) -> tuple[Optional[List[BookshelfEntry]], Optional[SaveResult]]:
        """Load the index for a read-modify-write, refusing damaged documents."""

        result = self._bookshelf.load_result()
        if result.status in (LoadStatus.OK, LoadStatus.NOT_FOUND):
            return list(result.value_or([])), None
        logger.error(
            "Refusing to rewrite bookshelf %s (%s): %s",
            result.path,
            result.status.value,
            result.error,
            extra={"event": "cache.bookshelf.edit_refused", "status": result.status.value},
        )
        return None, SaveResult(
            ok=False,
            path=self._bookshelf.path,
            error=f"bookshelf is {result.status.value}: {result.error}",
        )

    async def upsert_bookshelf_entry(self, entry: BookshelfEntry) -> SaveResult:
        """Replace the entry with the same id in place, or append it.

        A corrupt or unreadable index is left untouched and reported as a
        failed save.
        """

        def _upsert() -> SaveResult:
            entries, refused = self._entries_for_edit()
            if entries is None:
                return refused
            for index, existing in enumerate(entries):
                if existing.id == entry.id:
                    entries[index] = entry
                    break
            else:
                entries.append(entry)
            return self._bookshelf.save(entries)

        return await run_in_threadpool(_upsert)

    async def remove_bookshelf_entry(self, book_id: str) -> SaveResult:
        """Drop the entry for ``book_id`` from the index; the book directory is untouched.

        A corrupt or unreadable index is left untouched and reported as a
        failed save.
        """

        def _remove() -> SaveResult:
            entries, refused = self._entries_for_edit()
            if entries is None:
                return refused
            return self._bookshelf.save([entry for entry in entries if entry.id != book_id])

        return await run_in_threadpool(_remove)

    async def find_dangling_entries(self) -> List[BookshelfEntry]:
        """Return bookshelf entries whose book directory no longer exists.

        The index is only inspected, never repaired.
        """

        def _scan() -> List[BookshelfEntry]:
            dangling = []
            for entry in self._bookshelf.load():
                try:
                    present = self._layout.book_dir(entry.id).is_dir()
                except ValueError:
                    present = False
                if not present:
                    dangling.append(entry)
            return dangling

        return await run_in_threadpool(_scan)

    # Book detail

    async def load_book_detail(self, book_id: str) -> Optional[Book]:
        return await run_in_threadpool(self._details.load, book_id)

    async def load_book_detail_result(self, book_id: str) -> LoadResult[Book]:
        return await run_in_threadpool(self._details.load_result, book_id)

    async def save_book_detail(self, book: Book) -> Path:
        return await run_in_threadpool(self._details.save, book)

    # Sub-resources and removal

    def _get_or_create_sub_dir(self, book_id: str, name: str) -> Path:
        sub_dir = self._layout.sub_dir(book_id, name)
        sub_dir.parent.mkdir(parents=True, exist_ok=True)
        sub_dir.mkdir(exist_ok=True)
        return sub_dir

    async def get_or_create_book_sub_dir(self, book_id: str, name: str) -> Path:
        """Return ``<book dir>/<name>``, creating the book directory and the sub-directory if needed."""

        return await run_in_threadpool(self._get_or_create_sub_dir, book_id, name)

    def _remove_book_dir(self, book_id: str) -> bool:
        directory = self._layout.book_dir(book_id)
        if not directory.is_dir():
            return False
        try:
            shutil.rmtree(directory)
        except FileNotFoundError:
            return False
        logger.info(
            "Removed cache folder %s",
            directory,
            extra={"event": "cache.remove", "book_id": book_id},
        )
        return True

    async def remove_book_cache_folder(self, book_id: str) -> bool:
        """Delete the whole directory of ``book_id``; missing directories are a no-op.

        Returns ``True`` when something was removed. The bookshelf index is not
        modified.
        """

        return await run_in_threadpool(self._remove_book_dir, book_id)


__all__ = ["BookCacheManager"]
