"""Filesystem utility helpers for bookcache."""

from __future__ import annotations

from .atomic_write import atomic_copy, atomic_write_text

__all__ = [
    "atomic_copy",
    "atomic_write_text",
]
