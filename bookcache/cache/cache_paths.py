"""Compute per-book paths inside the cache root."""

from __future__ import annotations

from pathlib import Path, PurePath

from bookcache.config_manager import CONTENT_FILE_STEM, DETAIL_FILE_SUFFIX, CacheContext

from .cache_results import InvalidBookIdError


def ensure_path_component(value: str, *, label: str = "book_id") -> str:
    """Return ``value`` if it names exactly one entry inside a directory."""

    if not isinstance(value, str) or not value:
        raise InvalidBookIdError(f"{label} must be a non-empty string")
    if value in {".", ".."} or "/" in value or "\\" in value or "\x00" in value:
        raise InvalidBookIdError(f"{label} must be a single path component: {value!r}")
    if PurePath(value).is_absolute():
        raise InvalidBookIdError(f"{label} must be relative: {value!r}")
    return value


class CacheLayout:
    """Resolve filesystem locations for book directories under a cache root."""

    def __init__(self, context: CacheContext) -> None:
        self._context = context

    @property
    def cache_root(self) -> Path:
        return self._context.cache_root

    @property
    def bookshelf_path(self) -> Path:
        return self._context.bookshelf_path

    def book_dir(self, book_id: str) -> Path:
        return self.cache_root / ensure_path_component(book_id)

    def detail_path(self, book_id: str) -> Path:
        return self.book_dir(book_id) / f"{book_id}{DETAIL_FILE_SUFFIX}"

    def content_path(self, book_id: str, source_path: Path | str) -> Path:
        """Return ``content<ext>`` inside the book directory, keeping the source suffix."""

        return self.book_dir(book_id) / f"{CONTENT_FILE_STEM}{Path(source_path).suffix}"

    def sub_dir(self, book_id: str, name: str) -> Path:
        return self.book_dir(book_id) / ensure_path_component(name, label="sub-directory name")


__all__ = ["CacheLayout", "ensure_path_component"]
