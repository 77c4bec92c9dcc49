"""Shared constants for the configuration manager package."""
from __future__ import annotations

from pathlib import Path

MODULE_DIR = Path(__file__).resolve().parent
SCRIPT_DIR = MODULE_DIR.parent.resolve()
CONF_DIR = SCRIPT_DIR.parent / "conf"
DEFAULT_CONFIG_PATH = CONF_DIR / "config.json"
DEFAULT_LOCAL_CONFIG_PATH = CONF_DIR / "config.local.json"

DEFAULT_BASE_RELATIVE = Path("storage")
CACHE_DIR_NAME = "BookProjectsCache"
BOOKSHELF_FILE_NAME = "bookshelf.json"
CONTENT_FILE_STEM = "content"
DETAIL_FILE_SUFFIX = ".json"
DEFAULT_LOG_LEVEL_NAME = "INFO"

CONFIG_FILE_ENV = "BOOKCACHE_CONFIG_FILE"

__all__ = [
    "BOOKSHELF_FILE_NAME",
    "CACHE_DIR_NAME",
    "CONFIG_FILE_ENV",
    "CONF_DIR",
    "CONTENT_FILE_STEM",
    "DEFAULT_BASE_RELATIVE",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_LOCAL_CONFIG_PATH",
    "DEFAULT_LOG_LEVEL_NAME",
    "DETAIL_FILE_SUFFIX",
    "MODULE_DIR",
    "SCRIPT_DIR",
]
