"""File-backed cache of imported book projects."""

from .environment import load_environment

# Load environment variables from .env-style files as soon as the package is
# imported so configuration overrides apply to every entry point.
load_environment()

__all__ = ["load_environment"]
