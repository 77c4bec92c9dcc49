"""Result types and errors returned by the cache stores."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class BookCacheError(RuntimeError):
    """Base class for cache-layer failures."""


class BookIdCollisionError(BookCacheError, FileExistsError):
    """Raised when a freshly generated identifier already has a directory."""


class InvalidBookIdError(BookCacheError, ValueError):
    """Raised when an identifier or sub-resource name would escape the cache root."""


class LoadStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    CORRUPT = "corrupt"
    IO_ERROR = "io_error"


@dataclass(frozen=True)
class LoadResult(Generic[T]):
    """Outcome of reading a cached JSON document."""

    status: LoadStatus
    value: Optional[T] = None
    path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.OK

    def value_or(self, default: T) -> T:
        """Return the loaded value, or ``default`` for any non-OK status."""

        if self.status is LoadStatus.OK and self.value is not None:
            return self.value
        return default


@dataclass(frozen=True)
class SaveResult:
    """Outcome of a best-effort write."""

    ok: bool
    path: Path
    error: Optional[str] = None


@dataclass(frozen=True)
class CacheInfrastructure:
    """Identity and on-disk locations allocated for a newly imported book."""

    book_id: str
    content_path: Path
    directory: Path


__all__ = [
    "BookCacheError",
    "BookIdCollisionError",
    "CacheInfrastructure",
    "InvalidBookIdError",
    "LoadResult",
    "LoadStatus",
    "SaveResult",
]
