"""Load ``.env`` files for the cache before its settings are read."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

ENV_FILE_VARIABLE = "BOOKCACHE_ENV_FILE"
DEFAULT_ENV_FILE_NAME = ".env"


def dotenv_candidates(root: Optional[Path] = None) -> List[Path]:
    """Return the dotenv files to consult, highest precedence first.

    ``BOOKCACHE_ENV_FILE`` names an explicit file; ``.env`` under ``root``
    (the directory holding the package by default) comes after it.
    """

    base = Path(root) if root is not None else Path(__file__).resolve().parents[1]
    candidates: List[Path] = []
    explicit = os.environ.get(ENV_FILE_VARIABLE, "").strip()
    if explicit:
        candidates.append(Path(explicit).expanduser())
    default = base / DEFAULT_ENV_FILE_NAME
    if default not in candidates:
        candidates.append(default)
    return candidates


def load_environment(root: Optional[Path] = None) -> List[Path]:
    """Apply every existing candidate file and return the ones that set values.

    Files are loaded with ``override=False``: variables already present in the
    process win, and an earlier file wins over a later one.
    """

    loaded: List[Path] = []
    for path in dotenv_candidates(root):
        if path.is_file() and load_dotenv(path, override=False):
            loaded.append(path)
    return loaded


__all__ = ["ENV_FILE_VARIABLE", "dotenv_candidates", "load_environment"]
