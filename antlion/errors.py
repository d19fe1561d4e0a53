"""Error taxonomy — every sandbox failure derives from SandboxError."""

from __future__ import annotations

from typing import Any


class SandboxError(Exception):
    """Base class for all sandbox failures."""


class ProvisioningError(SandboxError):
    """Workspace directory or project scaffold could not be created."""


class BackendError(SandboxError):
    """The build tool could not be invoked (missing binary, timeout)."""


class DependencyError(SandboxError):
    """A dependency could not be added to (or removed from) the manifest."""

    def __init__(self, message: str, spec: str = "", stderr: str = "") -> None:
        super().__init__(message)
        self.spec = spec
        self.stderr = stderr


class ExecutionError(SandboxError):
    """The wrapper program failed to build, crashed, or produced no output."""

    def __init__(self, message: str, exit_code: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.stderr = stderr


class ParseError(SandboxError):
    """Captured output could not be converted to the requested type."""

    def __init__(self, message: str, text: str = "", result_type: Any = None) -> None:
        super().__init__(message)
        self.text = text
        self.result_type = result_type
