"""Schemas and collaborator protocols for the generation APIs."""

from __future__ import annotations

from enum import Enum
from typing import List, Mapping, Optional, Protocol, Sequence
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class ApiProvider(str, Enum):
    OPENAI = "openai"
    GROQ = "groq"
    DEEPSEEK = "deepseek"
    GOOGLE = "google"
    ANTHROPIC = "anthropic"
    VOLCENGINE = "volcengine"
    KLING = "kling"
    LIBLIB = "liblib"
    COMFYUI = "comfyui"
    CUSTOM = "custom"


class ApiFormat(str, Enum):
    OPENAI = "openai"
    GOOGLE = "google"
    ANTHROPIC = "anthropic"


class ApiConfig(BaseModel):
    """Connection settings for one generation endpoint."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    url: str
    api_key: SecretStr = SecretStr("")
    access_key: Optional[SecretStr] = None
    secret_key: Optional[SecretStr] = None
    model: str = "default"
    provider: ApiProvider = ApiProvider.OPENAI
    format: ApiFormat = ApiFormat.OPENAI
    concurrency_limit: Optional[int] = Field(default=None, ge=1)
    rpm: Optional[int] = Field(default=None, ge=1)
    qps: Optional[int] = Field(default=None, ge=1)


class LanguageModelClient(Protocol):
    async def request_completion(
        self,
        *,
        system_prompt: Optional[str],
        messages: Sequence[Mapping[str, str]],
        api_config: ApiConfig,
    ) -> str:
        ...


class DrawingClient(Protocol):
    async def generate_images(
        self,
        *,
        positive_prompt: str,
        negative_prompt: str,
        save_dir: str,
        count: int,
        width: int,
        height: int,
        api_config: ApiConfig,
    ) -> Optional[List[str]]:
        ...


class VideoClient(Protocol):
    async def generate_video(
        self,
        *,
        positive_prompt: str,
        save_dir: str,
        count: int,
        resolution: str,
        api_config: ApiConfig,
    ) -> Optional[List[str]]:
        ...


__all__ = [
    "ApiConfig",
    "ApiFormat",
    "ApiProvider",
    "DrawingClient",
    "LanguageModelClient",
    "VideoClient",
]
