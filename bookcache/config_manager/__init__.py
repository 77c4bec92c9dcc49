"""High-level configuration management for bookcache."""
from __future__ import annotations

from .constants import (
    BOOKSHELF_FILE_NAME,
    CACHE_DIR_NAME,
    CONTENT_FILE_STEM,
    DEFAULT_BASE_RELATIVE,
    DETAIL_FILE_SUFFIX,
)
from .loader import load_settings
from .paths import normalize_path, resolve_directory
from .runtime import CacheContext, build_cache_context
from .settings import BookCacheSettings, EnvironmentOverrides, apply_settings_updates

__all__ = [
    "BOOKSHELF_FILE_NAME",
    "BookCacheSettings",
    "CACHE_DIR_NAME",
    "CONTENT_FILE_STEM",
    "CacheContext",
    "DEFAULT_BASE_RELATIVE",
    "DETAIL_FILE_SUFFIX",
    "EnvironmentOverrides",
    "apply_settings_updates",
    "build_cache_context",
    "load_settings",
    "normalize_path",
    "resolve_directory",
]
