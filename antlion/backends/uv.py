"""uv backend — `uv init` / `uv add` / `uv run`.

uv resolves and syncs the project environment as part of `uv run`, so the
build step and the run step are a single subprocess.
"""

from __future__ import annotations

from pathlib import Path

from antlion.backends.base import BuildBackend
from antlion.config import settings
from antlion.models.schemas import CommandResult, DependencySpec


class UvBackend(BuildBackend):
    """Projects managed by uv (pyproject.toml + uv.lock)."""

    name = "uv"
    entry_point = "main.py"
    manifest = "pyproject.toml"

    def __init__(self, binary: str | None = None, timeout_s: float | None = None) -> None:
        super().__init__(timeout_s=timeout_s)
        self.binary = binary or settings.uv_binary

    def scaffold(self, path: Path) -> CommandResult:
        return self._run(
            [
                self.binary, "init", "--app", "--no-workspace", "--vcs", "none",
                "--no-readme", "--name", path.name, str(path),
            ],
            cwd=path.parent,
        )

    def add_dependency(self, path: Path, spec: DependencySpec) -> CommandResult:
        return self._run([self.binary, "add", spec.raw], cwd=path)

    def remove_dependency(self, path: Path, spec: DependencySpec) -> CommandResult:
        return self._run([self.binary, "remove", spec.name], cwd=path)

    def build_and_run(self, path: Path) -> CommandResult:
        return self._run([self.binary, "run", self.entry_point], cwd=path)
