"""Sandbox — one disposable project workspace plus the operations on it.

    sandbox = Sandbox.create().add_dependencies(["httpx"])
    assert sandbox.eval("2 + 2", int) == 4

The on-disk workspace belongs exclusively to this object. Every mutating
operation goes through `guard`, so concurrent callers on the same sandbox
are serialised; distinct sandboxes never share anything.
"""

from __future__ import annotations

import asyncio
import shutil
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from antlion.sandbox.executor import OUTPUT_FILE, evaluate
from antlion.sandbox.guard import WorkspaceGuard
from antlion.sandbox.installer import install

if TYPE_CHECKING:
    from antlion.backends import BuildBackend

logger = structlog.get_logger().bind(component="sandbox")


class Sandbox:
    """A throwaway project that evaluates Python expressions in a fresh environment."""

    def __init__(
        self,
        sandbox_id: str,
        root: Path,
        base_dir: Path,
        backend: BuildBackend,
    ) -> None:
        self.sandbox_id = sandbox_id
        self.root = root
        self.base_dir = base_dir
        self.backend = backend
        self.guard = WorkspaceGuard(sandbox_id)
        self.dependencies: list[str] = []
        self.evaluations: int = 0

    @classmethod
    def create(
        cls,
        root: Path | str | None = None,
        backend: BuildBackend | None = None,
    ) -> Sandbox:
        """Provision a new sandbox under `root` (defaults to settings.sandbox_root)."""
        from antlion.sandbox.provisioner import Provisioner

        return Provisioner(root=root, backend=backend).create()

    # ── Paths ────────────────────────────────────────────────────────────────

    @property
    def manifest_path(self) -> Path:
        return self.root / self.backend.manifest

    @property
    def entry_point_path(self) -> Path:
        return self.root / self.backend.entry_point

    @property
    def output_path(self) -> Path:
        return self.root / OUTPUT_FILE

    # ── Operations ───────────────────────────────────────────────────────────

    def add_dependencies(self, names: str | Iterable[str], *, atomic: bool = False) -> Sandbox:
        """Install dependencies in order. Returns self for chaining.

        Raises DependencyError on the first failure. Earlier specs stay
        installed unless `atomic` is set.
        """
        return install(self, names, atomic=atomic)

    def eval(
        self,
        expression: str,
        result_type: Any = str,
        *,
        parser: Callable[[str], Any] | None = None,
    ) -> Any:
        """Build and run `expression`, returning its str() parsed as `result_type`."""
        return evaluate(self, expression, result_type, parser=parser)

    async def aadd_dependencies(
        self, names: str | Iterable[str], *, atomic: bool = False
    ) -> Sandbox:
        return await asyncio.to_thread(self.add_dependencies, names, atomic=atomic)

    async def aeval(
        self,
        expression: str,
        result_type: Any = str,
        *,
        parser: Callable[[str], Any] | None = None,
    ) -> Any:
        return await asyncio.to_thread(self.eval, expression, result_type, parser=parser)

    def destroy(self) -> None:
        """Delete the whole workspace from disk. Safe to call twice."""
        with self.guard.hold("destroy"):
            if self.base_dir.exists():
                shutil.rmtree(self.base_dir)
                logger.info("sandbox_destroyed", sandbox_id=self.sandbox_id)

    # ── Context manager ──────────────────────────────────────────────────────

    def __enter__(self) -> Sandbox:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.destroy()
        else:
            logger.warning(
                "sandbox_kept",
                sandbox_id=self.sandbox_id,
                root=str(self.root),
                error=str(exc),
            )

    def __repr__(self) -> str:
        return f"Sandbox(id={self.sandbox_id!r}, root='{self.root}', backend={self.backend.name!r})"
