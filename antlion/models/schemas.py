"""Core schemas — CommandResult, DependencySpec."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator

# Distribution name ends at the first version operator, extra, marker or URL.
_NAME_END = re.compile(r"[\s\[<>=!~;@(]")


class CommandResult(BaseModel):
    """Outcome of one build-tool subprocess."""

    args: list[str] = Field(default_factory=list, description="Command line as executed")
    exit_code: int = Field(description="Process exit status")
    stdout: str = Field(default="")
    stderr: str = Field(default="")
    duration_ms: float = Field(default=0.0, description="Wall-clock time in milliseconds")

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def stderr_tail(self, lines: int = 8) -> str:
        """Last few stderr lines, where build tools put the actual error."""
        tail = self.stderr.strip().splitlines()[-lines:]
        return "\n".join(tail)


class DependencySpec(BaseModel):
    """A requirement string as handed to the build tool.

    ``raw`` is passed through verbatim; ``name`` is only used for removal
    and logging.
    """

    raw: str = Field(description="Requirement exactly as given, e.g. 'httpx>=0.27'")

    @field_validator("raw")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("dependency spec must not be empty")
        return value

    @property
    def name(self) -> str:
        match = _NAME_END.search(self.raw)
        return self.raw[: match.start()] if match else self.raw

    @classmethod
    def parse(cls, raw: str) -> "DependencySpec":
        return cls(raw=raw)

    def __str__(self) -> str:
        return self.raw
