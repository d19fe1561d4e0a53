"""BuildBackend — abstract base class for the external build tools.

Every backend (uv, pip) extends this. The sandbox never shells out itself;
it only talks to a backend, so tests can swap in a fake one.

Subclasses must:
    1. Set `name`, `entry_point` and `manifest` class attributes
    2. Implement scaffold / add_dependency / remove_dependency / build_and_run

The `_run()` helper wraps `subprocess.run` with:
    - Timing
    - Optional timeout (settings.command_timeout_s)
    - Tool-missing and timeout errors mapped to BackendError
"""

from __future__ import annotations

import os
import subprocess
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

import structlog

from antlion.config import settings
from antlion.errors import BackendError
from antlion.models.schemas import CommandResult, DependencySpec

logger = structlog.get_logger().bind(component="backend")

# Python wrapper around the caller's expression. The expression sits alone
# inside parentheses so multi-line fragments and trailing comments survive.
WRAPPER_TEMPLATE = '''\
import sys


def main() -> int:
    output = str((
{expression}
    ))
    try:
        with open({output_name!r}, "w", encoding="utf-8", newline="") as handle:
            handle.write(output)
    except OSError as exc:
        print(f"failed to write output: {{exc}}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
'''


class BuildBackend(ABC):
    """A black-box build tool driven through its command line."""

    name: str = "base"
    entry_point: str = "main.py"
    manifest: str = ""

    def __init__(self, timeout_s: float | None = None) -> None:
        self.timeout_s = timeout_s if timeout_s is not None else settings.command_timeout_s
        self.log = logger.bind(backend=self.name)

    @abstractmethod
    def scaffold(self, path: Path) -> CommandResult:
        """Create a minimal runnable project at `path` (which must not exist yet)."""

    @abstractmethod
    def add_dependency(self, path: Path, spec: DependencySpec) -> CommandResult:
        """Add one dependency to the project manifest, resolving it."""

    @abstractmethod
    def remove_dependency(self, path: Path, spec: DependencySpec) -> CommandResult:
        """Undo add_dependency for the same spec."""

    @abstractmethod
    def build_and_run(self, path: Path) -> CommandResult:
        """Build the project and execute its entry point with cwd=path."""

    def render(self, expression: str, output_name: str) -> str:
        """Synthesize the entry-point program for one evaluation."""
        return WRAPPER_TEMPLATE.format(expression=expression, output_name=output_name)

    def _run(
        self,
        args: Sequence[str],
        cwd: Path,
        env: dict[str, str] | None = None,
    ) -> CommandResult:
        """Run a command, capture output, enforce timeout."""
        cmd = [str(arg) for arg in args]
        merged_env = os.environ.copy()
        if env:
            merged_env.update(env)

        start = time.monotonic()
        try:
            process = subprocess.run(
                cmd,
                cwd=cwd,
                env=merged_env,
                capture_output=True,
                text=True,
                timeout=self.timeout_s,
                check=False,
            )
        except OSError as exc:
            raise BackendError(f"Cannot run {cmd[0]!r} in {cwd}: {exc}") from exc
        except subprocess.TimeoutExpired as exc:
            raise BackendError(
                f"Command timed out after {self.timeout_s}s: {' '.join(cmd)}"
            ) from exc

        duration_ms = round((time.monotonic() - start) * 1000, 2)
        result = CommandResult(
            args=cmd,
            exit_code=process.returncode,
            stdout=process.stdout,
            stderr=process.stderr,
            duration_ms=duration_ms,
        )
        self.log.debug(
            "command_complete",
            args=cmd,
            exit_code=result.exit_code,
            duration_ms=duration_ms,
        )
        return result
