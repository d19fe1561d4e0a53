"""Unit-test conftest — FakeBackend and shared sandbox fixtures.

All fixtures here are available to every test under tests/unit/ without import.
"""

from __future__ import annotations

import sys
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import pytest

from antlion.backends.base import BuildBackend
from antlion.models.schemas import CommandResult, DependencySpec
from antlion.sandbox import Provisioner, Sandbox


# ─────────────────────────────────────────────────────────────────────────────
# FakeBackend — drop-in replacement for UvBackend / PipBackend
# ─────────────────────────────────────────────────────────────────────────────

class FakeBackend(BuildBackend):
    """Configurable fake build tool for unit tests.

    Scaffolding and dependency management only touch files; build_and_run
    really executes the rendered entry point with the current interpreter,
    so the wrapper program is exercised end to end.

    Args:
        delay:            Seconds to sleep inside add/run (widens race windows).
        failing:          Specs whose add_dependency exits 1.
        scaffold_exit:    Exit code returned by scaffold.
        scaffold_raises:  If set, scaffold raises this exception.
        run_result:       If set, build_and_run returns this instead of running.
        remove_exit:      Exit code returned by remove_dependency.
        add_raises:       If set, add_dependency raises this exception.
        run_raises:       If set, build_and_run raises this exception.
    """

    name = "fake"
    entry_point = "main.py"
    manifest = "deps.txt"

    def __init__(
        self,
        *,
        delay: float = 0.0,
        failing: tuple[str, ...] = (),
        scaffold_exit: int = 0,
        scaffold_raises: Exception | None = None,
        run_result: CommandResult | None = None,
        remove_exit: int = 0,
        add_raises: Exception | None = None,
        run_raises: Exception | None = None,
    ) -> None:
        super().__init__(timeout_s=30)
        self.delay = delay
        self.failing = set(failing)
        self.scaffold_exit = scaffold_exit
        self.scaffold_raises = scaffold_raises
        self.run_result = run_result
        self.remove_exit = remove_exit
        self.add_raises = add_raises
        self.run_raises = run_raises
        # Call log + concurrency high-water mark for assertions
        self.calls: list[tuple[str, str]] = []
        self.active = 0
        self.max_active = 0
        self._counter = threading.Lock()

    @contextmanager
    def _track(self) -> Iterator[None]:
        with self._counter:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            yield
        finally:
            with self._counter:
                self.active -= 1

    def scaffold(self, path: Path) -> CommandResult:
        self.calls.append(("scaffold", str(path)))
        if self.scaffold_raises:
            raise self.scaffold_raises
        path.mkdir(parents=True)
        (path / self.manifest).write_text("", encoding="utf-8")
        (path / self.entry_point).write_text('print("placeholder")\n', encoding="utf-8")
        return CommandResult(
            args=["fake", "init"],
            exit_code=self.scaffold_exit,
            stderr="error: scaffold broke" if self.scaffold_exit else "",
        )

    def add_dependency(self, path: Path, spec: DependencySpec) -> CommandResult:
        with self._track():
            self.calls.append(("add", spec.raw))
            if self.add_raises:
                raise self.add_raises
            if spec.raw in self.failing:
                return CommandResult(
                    args=["fake", "add", spec.raw],
                    exit_code=1,
                    stderr=f"error: no matching package named `{spec.raw}`",
                )
            # read-sleep-write so interleaved callers would lose updates
            manifest = path / self.manifest
            lines = manifest.read_text(encoding="utf-8").splitlines()
            time.sleep(self.delay)
            lines.append(spec.raw)
            manifest.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
            return CommandResult(args=["fake", "add", spec.raw], exit_code=0)

    def remove_dependency(self, path: Path, spec: DependencySpec) -> CommandResult:
        self.calls.append(("remove", spec.raw))
        if self.remove_exit:
            return CommandResult(args=["fake", "remove"], exit_code=self.remove_exit, stderr="nope")
        manifest = path / self.manifest
        lines = [line for line in manifest.read_text(encoding="utf-8").splitlines() if line != spec.raw]
        manifest.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
        return CommandResult(args=["fake", "remove", spec.raw], exit_code=0)

    def build_and_run(self, path: Path) -> CommandResult:
        with self._track():
            self.calls.append(("run", str(path)))
            if self.run_raises:
                raise self.run_raises
            time.sleep(self.delay)
            if self.run_result is not None:
                return self.run_result
            return self._run([sys.executable, self.entry_point], cwd=path)


# ─────────────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────────────

@pytest.fixture
def fake_backend():
    """A FakeBackend with instant responses."""
    return FakeBackend()


@pytest.fixture
def provisioner(tmp_path, fake_backend):
    """A Provisioner rooted in the test's tmp_path."""
    return Provisioner(root=tmp_path, backend=fake_backend)


@pytest.fixture
def sandbox(provisioner):
    """A freshly provisioned sandbox on FakeBackend."""
    return provisioner.create()


@pytest.fixture
def make_provisioner(tmp_path):
    """Factory: Provisioner on a FakeBackend built from keyword overrides."""
    def _make(**backend_kwargs) -> Provisioner:
        return Provisioner(root=tmp_path, backend=FakeBackend(**backend_kwargs))
    return _make


@pytest.fixture
def make_sandbox(make_provisioner):
    """Factory: provisioned sandbox on a FakeBackend built from keyword overrides."""
    def _make(**backend_kwargs) -> Sandbox:
        return make_provisioner(**backend_kwargs).create()
    return _make


@pytest.fixture
def manifest_lines():
    """Read a sandbox manifest as a list of specs."""
    def _read(sandbox: Sandbox) -> list[str]:
        return sandbox.manifest_path.read_text(encoding="utf-8").splitlines()
    return _read


def pytest_collection_modifyitems(config, items):
    here = Path(__file__).parent
    for item in items:
        if here in item.path.parents:
            item.add_marker(pytest.mark.unit)
