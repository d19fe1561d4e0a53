"""Antlion configuration — loaded from .env via pydantic-settings."""

import sys
import tempfile
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class AntlionSettings(BaseSettings):
    """All Antlion configuration. Reads from .env file and ANTLION_* variables."""

    # --- Workspaces ---
    sandbox_root: Path = Field(
        default_factory=lambda: Path(tempfile.gettempdir()) / "antlion",
        description="Base directory under which every sandbox workspace is created",
    )

    # --- Build backend ---
    backend: str = Field(default="uv", description="Build backend: uv|pip")
    uv_binary: str = Field(default="uv", description="uv executable name or path")
    python_executable: str = Field(
        default=sys.executable,
        description="Interpreter used by the pip backend to create venvs",
    )
    command_timeout_s: float | None = Field(
        default=None,
        description="Per-subprocess timeout in seconds (None = wait forever)",
    )

    # --- Logging ---
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(
        default="console",
        description="Log format: 'console' for dev, 'json' for production",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "ANTLION_",
        "extra": "ignore",
    }


# Singleton: defaults only, every component accepts explicit values
settings = AntlionSettings()
