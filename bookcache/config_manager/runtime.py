"""Resolved cache context shared by the cache stores."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from bookcache import logging_manager

from .constants import DEFAULT_BASE_RELATIVE
from .loader import load_settings
from .paths import resolve_directory
from .settings import BookCacheSettings

logger = logging_manager.get_logger().getChild("config.runtime")


@dataclass(frozen=True)
class CacheContext:
    """Immutable container describing the resolved cache location.

    Built once at startup and handed to every store, so the cache root is
    resolved a single time without module-level state.
    """

    base_dir: Path
    cache_root: Path
    bookshelf_file_name: str

    @property
    def bookshelf_path(self) -> Path:
        return self.cache_root / self.bookshelf_file_name

    def as_dict(self) -> Dict[str, Any]:
        """Return a mapping representation of the context for serialization/debugging."""

        return {
            "base_dir": str(self.base_dir),
            "cache_root": str(self.cache_root),
            "bookshelf_path": str(self.bookshelf_path),
        }


def build_cache_context(settings: Optional[BookCacheSettings] = None) -> CacheContext:
    """Resolve directories described by ``settings`` and return a :class:`CacheContext`.

    The base directory and the cache root are created when absent.
    """

    if settings is None:
        settings = load_settings()

    base_dir = resolve_directory(settings.base_dir, DEFAULT_BASE_RELATIVE)
    cache_root = base_dir / settings.cache_dir_name
    cache_root.mkdir(parents=True, exist_ok=True)

    context = CacheContext(
        base_dir=base_dir,
        cache_root=cache_root,
        bookshelf_file_name=settings.bookshelf_file_name,
    )
    logger.debug(
        "Cache context resolved",
        extra={"event": "config.context.resolved", **context.as_dict()},
    )
    return context


__all__ = ["CacheContext", "build_cache_context"]
