from __future__ import annotations

import os
from pathlib import Path

import pytest

from bookcache import environment

_KEYS = ("BOOKCACHE_TEST_SHARED", "BOOKCACHE_TEST_DEFAULT_ONLY", "BOOKCACHE_TEST_PRESET")


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv(environment.ENV_FILE_VARIABLE, raising=False)
    for key in _KEYS:
        monkeypatch.delenv(key, raising=False)
    yield
    for key in _KEYS:
        os.environ.pop(key, None)


def test_default_file_only(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("BOOKCACHE_TEST_DEFAULT_ONLY=base\n", encoding="utf-8")

    loaded = environment.load_environment(tmp_path)

    assert loaded == [tmp_path / ".env"]
    assert os.environ["BOOKCACHE_TEST_DEFAULT_ONLY"] == "base"


def test_explicit_file_takes_precedence(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    explicit = tmp_path / "custom.env"
    explicit.write_text("BOOKCACHE_TEST_SHARED=explicit\n", encoding="utf-8")
    (tmp_path / ".env").write_text(
        "BOOKCACHE_TEST_SHARED=default\nBOOKCACHE_TEST_DEFAULT_ONLY=default\n",
        encoding="utf-8",
    )
    monkeypatch.setenv(environment.ENV_FILE_VARIABLE, str(explicit))

    assert environment.dotenv_candidates(tmp_path) == [explicit, tmp_path / ".env"]
    environment.load_environment(tmp_path)

    assert os.environ["BOOKCACHE_TEST_SHARED"] == "explicit"
    assert os.environ["BOOKCACHE_TEST_DEFAULT_ONLY"] == "default"


def test_process_environment_is_not_overridden(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("BOOKCACHE_TEST_PRESET", "process")
    (tmp_path / ".env").write_text("BOOKCACHE_TEST_PRESET=file\n", encoding="utf-8")

    environment.load_environment(tmp_path)

    assert os.environ["BOOKCACHE_TEST_PRESET"] == "process"


def test_missing_files_are_skipped(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv(environment.ENV_FILE_VARIABLE, str(tmp_path / "absent.env"))

    assert environment.load_environment(tmp_path) == []
