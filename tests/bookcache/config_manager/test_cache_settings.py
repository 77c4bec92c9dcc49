from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from bookcache.config_manager import (
    BookCacheSettings,
    build_cache_context,
    load_settings,
    resolve_directory,
)
from bookcache.config_manager import loader as loader_module


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(loader_module, "DEFAULT_CONFIG_PATH", tmp_path / "absent-default.json")
    monkeypatch.setattr(loader_module, "DEFAULT_LOCAL_CONFIG_PATH", tmp_path / "absent-local.json")
    for name in (
        "BOOKCACHE_BASE_DIR",
        "BOOKCACHE_APP_DIR",
        "BOOKCACHE_CACHE_DIR_NAME",
        "BOOKCACHE_LOG_LEVEL",
        "BOOKCACHE_CONFIG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = load_settings()

    assert settings.base_dir == "storage"
    assert settings.cache_dir_name == "BookProjectsCache"
    assert settings.bookshelf_file_name == "bookshelf.json"
    assert settings.log_level == "INFO"


def test_layering_file_environment_and_explicit(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    config_file = tmp_path / "config.json"
    config_file.write_text(
        json.dumps({"base_dir": "/from/file", "cache_dir_name": "FileCache", "log_level": "debug"}),
        encoding="utf-8",
    )
    monkeypatch.setenv("BOOKCACHE_CONFIG_FILE", str(config_file))
    monkeypatch.setenv("BOOKCACHE_BASE_DIR", "/from/env")

    settings = load_settings(log_level="warning")

    assert settings.base_dir == "/from/env"
    assert settings.cache_dir_name == "FileCache"
    assert settings.log_level == "WARNING"


def test_invalid_environment_value_is_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BOOKCACHE_LOG_LEVEL", "chatty")

    assert load_settings().log_level == "INFO"


def test_malformed_config_file_is_skipped(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    config_file = tmp_path / "broken.json"
    config_file.write_text("{", encoding="utf-8")

    assert load_settings(config_file=str(config_file)).base_dir == "storage"


def test_cache_dir_name_must_be_single_component() -> None:
    with pytest.raises(ValidationError):
        BookCacheSettings(cache_dir_name="../escape")


def test_build_cache_context_creates_root(tmp_path: Path) -> None:
    context = build_cache_context(BookCacheSettings(base_dir=str(tmp_path / "nested" / "app")))

    assert context.cache_root == tmp_path / "nested" / "app" / "BookProjectsCache"
    assert context.cache_root.is_dir()
    assert context.as_dict()["bookshelf_path"].endswith("bookshelf.json")


def test_build_cache_context_is_idempotent(tmp_path: Path) -> None:
    settings = BookCacheSettings(base_dir=str(tmp_path))

    assert build_cache_context(settings) == build_cache_context(settings)


def test_resolve_directory_anchors_relative_paths(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)

    resolved = resolve_directory("relative/dir", Path("fallback"))

    assert resolved == tmp_path / "relative" / "dir"
    assert resolved.is_dir()


def test_resolve_directory_falls_back_on_permission_error(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    blocked = tmp_path / "blocked"
    original_mkdir = Path.mkdir

    def _mkdir(self, *args, **kwargs):
        if self == blocked:
            raise PermissionError(13, "Permission denied", str(self))
        return original_mkdir(self, *args, **kwargs)

    monkeypatch.setattr(Path, "mkdir", _mkdir)

    resolved = resolve_directory(str(blocked), tmp_path / "fallback")

    assert resolved == tmp_path / "fallback"
    assert resolved.is_dir()


def test_resolve_directory_propagates_when_fallback_is_blocked(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    def _mkdir(self, *args, **kwargs):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "mkdir", _mkdir)

    with pytest.raises(PermissionError):
        resolve_directory(str(tmp_path / "blocked"), tmp_path / "fallback")


def test_resolve_directory_does_not_mask_other_errors(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    def _mkdir(self, *args, **kwargs):
        raise OSError(28, "No space left on device", str(self))

    monkeypatch.setattr(Path, "mkdir", _mkdir)

    with pytest.raises(OSError) as excinfo:
        resolve_directory(str(tmp_path / "full"), tmp_path / "fallback")

    assert excinfo.value.errno == 28
