"""Utilities for resolving cache directories on the local file system."""
from __future__ import annotations

import errno
import os
from pathlib import Path
from typing import Optional, Union

from bookcache import logging_manager

logger = logging_manager.get_logger().getChild("config.paths")

PathLikeStr = Union[str, os.PathLike[str]]


def normalize_path(path_value: PathLikeStr) -> Path:
    """Expand ``~`` and anchor relative paths at the current working directory."""

    expanded = Path(os.path.expanduser(str(path_value)))
    if expanded.is_absolute():
        return expanded
    return Path.cwd() / expanded


def resolve_directory(path_value: Optional[PathLikeStr], default_relative: Path) -> Path:
    """Resolve a directory path and ensure it exists.

    When the requested directory cannot be created because of a permission or
    read-only error, ``default_relative`` is tried instead. Any other error, or
    a failure of the fallback itself, propagates.
    """

    base_value = path_value if path_value not in (None, "") else default_relative
    candidate = normalize_path(base_value)
    fallback = normalize_path(default_relative)

    try:
        candidate.mkdir(parents=True, exist_ok=True)
        return candidate
    except OSError as exc:
        if candidate == fallback or exc.errno not in {errno.EPERM, errno.EACCES, errno.EROFS}:
            raise
        logger.warning(
            "Unable to prepare directory %s (%s); falling back to %s",
            candidate,
            exc,
            fallback,
            extra={"event": "config.paths.fallback"},
        )

    fallback.mkdir(parents=True, exist_ok=True)
    return fallback


__all__ = ["normalize_path", "resolve_directory"]
