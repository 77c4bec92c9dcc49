"""All-or-nothing file writes built on temporary siblings and ``os.replace``."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import Union
from uuid import uuid4

PathLikeStr = Union[str, os.PathLike[str]]


def _discard(temp_path: Path | None) -> None:
    if temp_path is None:
        return
    try:
        temp_path.unlink()
    except OSError:
        pass


def atomic_write_text(destination: PathLikeStr, payload: str, *, encoding: str = "utf-8") -> Path:
    """Write ``payload`` to ``destination`` so readers never observe a partial file.

    The parent directory must already exist; a missing parent raises
    :class:`FileNotFoundError`.
    """

    path = Path(destination)
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", encoding=encoding, dir=path.parent, prefix=f".{path.name}.", delete=False
        ) as handle:
            temp_path = Path(handle.name)
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_path, path)
    except BaseException:
        _discard(temp_path)
        raise
    return path


def atomic_copy(source: PathLikeStr, destination: PathLikeStr) -> Path:
    """Copy the bytes of ``source`` to ``destination`` as a single visible step."""

    src_path = Path(source)
    dst_path = Path(destination)

    if not src_path.is_file():
        raise FileNotFoundError(f"Source file {src_path} does not exist")

    temp_path: Path | None = dst_path.parent / f".{dst_path.name}.tmp-{uuid4().hex}"
    try:
        shutil.copyfile(src_path, temp_path)
        os.replace(temp_path, dst_path)
    except BaseException:
        _discard(temp_path)
        raise
    return dst_path


__all__ = ["atomic_copy", "atomic_write_text"]
