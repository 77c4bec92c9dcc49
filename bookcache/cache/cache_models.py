"""Pydantic schemas for the bookshelf index and per-book detail records."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from bookcache import logging_manager

logger = logging_manager.get_logger().getChild("cache.models")


class _CacheModel(BaseModel):
    """Base model using the camelCase key style of the on-disk JSON documents."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class TaskStatus(str, Enum):
    """Lifecycle state of a generation task attached to a bookshelf entry."""

    NOT_STARTED = "notStarted"
    QUEUED = "queued"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELED = "canceled"


class ChunkStatus(str, Enum):
    """State of a single task chunk."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class IllustrationTaskChunk(_CacheModel):
    id: str
    chapter_id: str
    start_line_id: int
    end_line_id: int
    scenes_to_generate: int
    status: ChunkStatus = ChunkStatus.PENDING


class TranslationTaskChunk(_CacheModel):
    id: str
    chapter_id: str
    start_line_id: int
    end_line_id: int
    status: ChunkStatus = ChunkStatus.PENDING


class VideoGenerationTaskChunk(_CacheModel):
    id: str
    chapter_id: str
    line_id: int
    source_image_path: str
    status: ChunkStatus = ChunkStatus.PENDING


def _chunk_progress(chunks: Sequence[Any], status: TaskStatus) -> float:
    if not chunks:
        return 1.0 if status == TaskStatus.COMPLETED else 0.0
    completed = sum(1 for chunk in chunks if chunk.status == ChunkStatus.COMPLETED)
    return completed / len(chunks)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BookshelfEntry(_CacheModel):
    """Lightweight projection of a cached book stored in the bookshelf index."""

    id: str
    title: str
    original_path: str
    file_type: str
    sub_cache_path: str
    cover_image_path: Optional[str] = None

    status: TaskStatus = TaskStatus.NOT_STARTED
    task_chunks: List[IllustrationTaskChunk] = Field(default_factory=list)
    error_message: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    translation_status: TaskStatus = TaskStatus.NOT_STARTED
    translation_task_chunks: List[TranslationTaskChunk] = Field(default_factory=list)
    translation_error_message: Optional[str] = None
    translation_created_at: Optional[datetime] = None
    translation_updated_at: Optional[datetime] = None

    video_generation_status: TaskStatus = TaskStatus.NOT_STARTED
    video_generation_task_chunks: List[VideoGenerationTaskChunk] = Field(default_factory=list)
    video_generation_error_message: Optional[str] = None
    video_generation_created_at: Optional[datetime] = None
    video_generation_updated_at: Optional[datetime] = None

    @property
    def illustration_progress(self) -> float:
        return _chunk_progress(self.task_chunks, self.status)

    @property
    def translation_progress(self) -> float:
        return _chunk_progress(self.translation_task_chunks, self.translation_status)

    @property
    def video_generation_progress(self) -> float:
        return _chunk_progress(self.video_generation_task_chunks, self.video_generation_status)

    def with_updates(
        self,
        *,
        clear_error_message: bool = False,
        clear_translation_error_message: bool = False,
        clear_video_generation_error_message: bool = False,
        **changes: Any,
    ) -> "BookshelfEntry":
        """Return a copy with ``changes`` applied.

        Identity fields cannot change. Every ``*_updated_at`` timestamp is
        refreshed unless given explicitly, and the ``clear_*`` flags reset the
        matching error message even when a new value is supplied.
        """

        frozen = {"id", "title", "original_path", "file_type", "sub_cache_path"}
        unknown = set(changes) - set(type(self).model_fields)
        if unknown:
            raise TypeError(f"Unknown bookshelf entry fields: {sorted(unknown)}")
        forbidden = frozen & set(changes)
        if forbidden:
            raise TypeError(f"Bookshelf entry fields are immutable: {sorted(forbidden)}")

        update = {key: value for key, value in changes.items() if value is not None}
        now = _utcnow()
        for stamp in ("updated_at", "translation_updated_at", "video_generation_updated_at"):
            update.setdefault(stamp, now)
        if clear_error_message:
            update["error_message"] = None
        if clear_translation_error_message:
            update["translation_error_message"] = None
        if clear_video_generation_error_message:
            update["video_generation_error_message"] = None

        payload = self.model_dump()
        payload.update(update)
        return BookshelfEntry.model_validate(payload)


class LineStructure(_CacheModel):
    """A single text line of a chapter with its generated assets."""

    id: int
    text: str
    source_info: str
    original_content: str
    illustration_paths: List[str] = Field(default_factory=list)
    video_paths: List[str] = Field(default_factory=list)
    scene_description: Optional[str] = None
    translated_text: Optional[str] = None


class ChapterStructure(_CacheModel):
    id: str
    title: str
    source_file: str
    lines: List[LineStructure]

    def find_line(self, line_id: int) -> Optional[LineStructure]:
        for line in self.lines:
            if line.id == line_id:
                return line
        return None

    def add_illustrations_to_line(
        self, line_id: int, paths: Sequence[str], description: Optional[str] = None
    ) -> bool:
        """Append ``paths`` to the illustrations of line ``line_id``.

        Returns ``False`` and logs a warning when no such line exists.
        """

        for index, line in enumerate(self.lines):
            if line.id != line_id:
                continue
            self.lines[index] = line.model_copy(
                update={
                    "illustration_paths": [*line.illustration_paths, *paths],
                    "scene_description": (
                        description if description is not None else line.scene_description
                    ),
                }
            )
            return True
        logger.warning(
            "Cannot add illustrations: line %s not found in chapter %s",
            line_id,
            self.id,
            extra={"event": "cache.models.line_missing"},
        )
        return False


class Book(_CacheModel):
    """Full detail record of a cached book."""

    id: str
    title: str
    file_type: str
    original_path: str
    cached_path: str
    cover_image_path: Optional[str] = None
    chapters: List[ChapterStructure]


__all__ = [
    "Book",
    "BookshelfEntry",
    "ChapterStructure",
    "ChunkStatus",
    "IllustrationTaskChunk",
    "LineStructure",
    "TaskStatus",
    "TranslationTaskChunk",
    "VideoGenerationTaskChunk",
]
