"""Connectivity probes for the external generation APIs."""

from .api_models import (
    ApiConfig,
    ApiFormat,
    ApiProvider,
    DrawingClient,
    LanguageModelClient,
    VideoClient,
)
from .tester_service import ApiTesterService, ProbeResult

__all__ = [
    "ApiConfig",
    "ApiFormat",
    "ApiProvider",
    "ApiTesterService",
    "DrawingClient",
    "LanguageModelClient",
    "ProbeResult",
    "VideoClient",
]
