from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep the rotating log file out of the source tree while tests run.
os.environ.setdefault("BOOKCACHE_LOG_DIR", tempfile.mkdtemp(prefix="bookcache-test-logs-"))

from bookcache.cache import (  # noqa: E402
    Book,
    BookCacheManager,
    BookshelfEntry,
    CacheLayout,
    ChapterStructure,
    ChunkStatus,
    IllustrationTaskChunk,
    LineStructure,
    TaskStatus,
)
from bookcache.config_manager import BookCacheSettings, CacheContext, build_cache_context  # noqa: E402


@pytest.fixture
def cache_context(tmp_path: Path) -> CacheContext:
    return build_cache_context(BookCacheSettings(base_dir=str(tmp_path / "app")))


@pytest.fixture
def cache_layout(cache_context: CacheContext) -> CacheLayout:
    return CacheLayout(cache_context)


@pytest.fixture
def cache_manager(cache_context: CacheContext) -> BookCacheManager:
    return BookCacheManager(cache_context)


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    path = tmp_path / "incoming" / "source.txt"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("Chapter 1\nIt was a dark and stormy night.\n", encoding="utf-8")
    return path


def build_book(book_id: str, *, title: str = "T1", cached_path: str = "content.txt") -> Book:
    return Book(
        id=book_id,
        title=title,
        file_type="txt",
        original_path="/books/source.txt",
        cached_path=cached_path,
        cover_image_path=None,
        chapters=[
            ChapterStructure(
                id="chapter-1",
                title="Chapter 1",
                source_file="content.txt",
                lines=[
                    LineStructure(
                        id=1,
                        text="It was a dark and stormy night.",
                        source_info="content.txt:2",
                        original_content="It was a dark and stormy night.",
                        illustration_paths=["illustrations/1.png"],
                        scene_description="A storm over a castle",
                    ),
                    LineStructure(
                        id=2,
                        text="The rain fell.",
                        source_info="content.txt:3",
                        original_content="The rain fell.",
                        translated_text="Il pleuvait.",
                    ),
                ],
            )
        ],
    )


def build_entry(book_id: str, *, title: str = "T1") -> BookshelfEntry:
    return BookshelfEntry(
        id=book_id,
        title=title,
        original_path="/books/source.txt",
        file_type="txt",
        sub_cache_path=f"/cache/{book_id}/{book_id}.json",
        status=TaskStatus.RUNNING,
        task_chunks=[
            IllustrationTaskChunk(
                id="chunk-1",
                chapter_id="chapter-1",
                start_line_id=1,
                end_line_id=10,
                scenes_to_generate=2,
                status=ChunkStatus.COMPLETED,
            )
        ],
    )


@pytest.fixture
def make_book():
    return build_book


@pytest.fixture
def make_entry():
    return build_entry
