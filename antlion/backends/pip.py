"""pip backend — a plain venv with a requirements.txt manifest.

Layout:
    <project>/.venv/             created by `python -m venv`
    <project>/requirements.txt   one spec per line, appended on successful install
    <project>/main.py            entry point
"""

from __future__ import annotations

import os
from pathlib import Path

from antlion.backends.base import BuildBackend
from antlion.config import settings
from antlion.models.schemas import CommandResult, DependencySpec

_PLACEHOLDER = 'print("Hello from sandbox!")\n'


class PipBackend(BuildBackend):
    """Projects backed by the stdlib venv module and pip."""

    name = "pip"
    entry_point = "main.py"
    manifest = "requirements.txt"

    def __init__(self, python: str | None = None, timeout_s: float | None = None) -> None:
        super().__init__(timeout_s=timeout_s)
        self.python = python or settings.python_executable

    def venv_python(self, path: Path) -> Path:
        if os.name == "nt":
            return path / ".venv" / "Scripts" / "python.exe"
        return path / ".venv" / "bin" / "python"

    def scaffold(self, path: Path) -> CommandResult:
        path.mkdir(parents=True, exist_ok=False)
        (path / self.manifest).write_text("", encoding="utf-8")
        (path / self.entry_point).write_text(_PLACEHOLDER, encoding="utf-8")
        return self._run([self.python, "-m", "venv", ".venv"], cwd=path)

    def add_dependency(self, path: Path, spec: DependencySpec) -> CommandResult:
        result = self._run(
            [
                self.venv_python(path), "-m", "pip", "install", "--quiet",
                "--disable-pip-version-check", spec.raw,
            ],
            cwd=path,
        )
        if result.ok:
            with (path / self.manifest).open("a", encoding="utf-8") as handle:
                handle.write(spec.raw + "\n")
        return result

    def remove_dependency(self, path: Path, spec: DependencySpec) -> CommandResult:
        result = self._run(
            [
                self.venv_python(path), "-m", "pip", "uninstall", "--yes",
                "--quiet", "--disable-pip-version-check", spec.name,
            ],
            cwd=path,
        )
        manifest = path / self.manifest
        lines = manifest.read_text(encoding="utf-8").splitlines()
        kept = [line for line in lines if line.strip() != spec.raw]
        manifest.write_text("".join(line + "\n" for line in kept), encoding="utf-8")
        return result

    def build_and_run(self, path: Path) -> CommandResult:
        return self._run([self.venv_python(path), self.entry_point], cwd=path)
