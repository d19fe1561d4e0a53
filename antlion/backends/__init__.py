"""Build backends — the external tools a sandbox delegates to."""

from __future__ import annotations

from antlion.backends.base import BuildBackend
from antlion.backends.pip import PipBackend
from antlion.backends.uv import UvBackend
from antlion.config import settings

BACKENDS: dict[str, type[BuildBackend]] = {
    "uv": UvBackend,
    "pip": PipBackend,
}


def get_backend(name: str | None = None) -> BuildBackend:
    """Instantiate a backend by name (defaults to settings.backend)."""
    key = (name or settings.backend).lower()
    if key not in BACKENDS:
        raise ValueError(f"Unknown backend '{key}'. Valid: {sorted(BACKENDS)}")
    return BACKENDS[key]()


__all__ = ["BACKENDS", "BuildBackend", "PipBackend", "UvBackend", "get_backend"]
