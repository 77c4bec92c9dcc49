"""Connectivity probes for the language, drawing and video generation APIs."""

from __future__ import annotations

import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, List, Optional

from fastapi.concurrency import run_in_threadpool

from bookcache import logging_manager

from .api_models import ApiConfig, DrawingClient, LanguageModelClient, VideoClient

logger = logging_manager.get_logger().getChild("api_tester")

PROBE_SYSTEM_PROMPT = "You are a helpful assistant."
PROBE_USER_MESSAGE = 'Hi, please respond with only the words "test successful"'
PROBE_EXPECTED_REPLY = "test successful"
PROBE_IMAGE_PROMPT = "a white cat on a white background"
PROBE_IMAGE_NEGATIVE_PROMPT = "blurry, ugly, text, watermark"
PROBE_IMAGE_SIZE = 1024
PROBE_VIDEO_PROMPT = "a cute cat running on the grass"
PROBE_VIDEO_RESOLUTION = "720P"
IMAGE_PROBE_DIR_NAME = "api_test_images"
VIDEO_PROBE_DIR_NAME = "api_test_videos"


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a single API probe."""

    success: bool
    message: str


def _reset_directory(path: Path) -> None:
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True)


def _discard_directory(path: Path) -> None:
    shutil.rmtree(path, ignore_errors=True)


class ApiTesterService:
    """Send a small fixed request to each collaborator and report the outcome."""

    def __init__(
        self,
        *,
        language_client: Optional[LanguageModelClient] = None,
        drawing_client: Optional[DrawingClient] = None,
        video_client: Optional[VideoClient] = None,
        temp_root: Optional[Path] = None,
    ) -> None:
        self._language_client = language_client
        self._drawing_client = drawing_client
        self._video_client = video_client
        self._temp_root = Path(temp_root) if temp_root is not None else Path(tempfile.gettempdir())

    async def test_language_api(self, api_config: ApiConfig) -> ProbeResult:
        if self._language_client is None:
            return ProbeResult(False, "Test failed: no language model client configured.")
        try:
            response = await self._language_client.request_completion(
                system_prompt=PROBE_SYSTEM_PROMPT,
                messages=[{"role": "user", "content": PROBE_USER_MESSAGE}],
                api_config=api_config,
            )
        except Exception as exc:
            logger.warning(
                "Language API probe failed for %s: %s",
                api_config.name,
                exc,
                extra={"event": "api_tester.language.failed"},
            )
            return ProbeResult(False, f"Test failed: {exc}")

        reply = (response or "").strip()
        if PROBE_EXPECTED_REPLY in reply.lower():
            return ProbeResult(True, "Test succeeded: the API returned the expected content.")
        return ProbeResult(True, f'Test passed, but the API returned unexpected content: "{reply}"')

    async def _probe_media(
        self,
        *,
        label: str,
        dir_name: str,
        generate: Callable[[str], Awaitable[Optional[List[str]]]],
    ) -> ProbeResult:
        save_dir = self._temp_root / dir_name
        try:
            await run_in_threadpool(_reset_directory, save_dir)
            paths = await generate(str(save_dir))
        except Exception as exc:
            logger.warning(
                "%s API probe failed: %s",
                label.capitalize(),
                exc,
                extra={"event": f"api_tester.{label}.failed"},
            )
            return ProbeResult(False, f"Test failed: {exc}")
        finally:
            await run_in_threadpool(_discard_directory, save_dir)

        if paths:
            return ProbeResult(
                True,
                f"Test succeeded: the API generated and returned {len(paths)} {label} path(s).",
            )
        return ProbeResult(False, f"Test failed: the API call succeeded but returned no {label}.")

    async def test_drawing_api(self, api_config: ApiConfig) -> ProbeResult:
        client = self._drawing_client
        if client is None:
            return ProbeResult(False, "Test failed: no drawing client configured.")

        async def _generate(save_dir: str) -> Optional[List[str]]:
            return await client.generate_images(
                positive_prompt=PROBE_IMAGE_PROMPT,
                negative_prompt=PROBE_IMAGE_NEGATIVE_PROMPT,
                save_dir=save_dir,
                count=1,
                width=PROBE_IMAGE_SIZE,
                height=PROBE_IMAGE_SIZE,
                api_config=api_config,
            )

        return await self._probe_media(label="image", dir_name=IMAGE_PROBE_DIR_NAME, generate=_generate)

    async def test_video_api(self, api_config: ApiConfig) -> ProbeResult:
        client = self._video_client
        if client is None:
            return ProbeResult(False, "Test failed: no video client configured.")

        async def _generate(save_dir: str) -> Optional[List[str]]:
            return await client.generate_video(
                positive_prompt=PROBE_VIDEO_PROMPT,
                save_dir=save_dir,
                count=1,
                resolution=PROBE_VIDEO_RESOLUTION,
                api_config=api_config,
            )

        return await self._probe_media(label="video", dir_name=VIDEO_PROBE_DIR_NAME, generate=_generate)


__all__ = ["ApiTesterService", "ProbeResult"]
