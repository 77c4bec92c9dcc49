"""Book cache package exports."""

from .allocator import BookAllocator, import_content
from .bookshelf_store import BookshelfStore
from .cache_manager import BookCacheManager
from .cache_models import (
    Book,
    BookshelfEntry,
    ChapterStructure,
    ChunkStatus,
    IllustrationTaskChunk,
    LineStructure,
    TaskStatus,
    TranslationTaskChunk,
    VideoGenerationTaskChunk,
)
from .cache_paths import CacheLayout, ensure_path_component
from .cache_results import (
    BookCacheError,
    BookIdCollisionError,
    CacheInfrastructure,
    InvalidBookIdError,
    LoadResult,
    LoadStatus,
    SaveResult,
)
from .detail_store import DetailStore

__all__ = [
    "Book",
    "BookAllocator",
    "BookCacheError",
    "BookCacheManager",
    "BookIdCollisionError",
    "BookshelfEntry",
    "BookshelfStore",
    "CacheInfrastructure",
    "CacheLayout",
    "ChapterStructure",
    "ChunkStatus",
    "DetailStore",
    "IllustrationTaskChunk",
    "InvalidBookIdError",
    "LineStructure",
    "LoadResult",
    "LoadStatus",
    "SaveResult",
    "TaskStatus",
    "TranslationTaskChunk",
    "VideoGenerationTaskChunk",
    "ensure_path_component",
]
