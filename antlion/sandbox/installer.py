"""Installer — adds dependencies to a sandbox manifest, one at a time.

Not atomic by default: if the Nth spec fails, specs 1..N-1 stay installed and
N+1.. are never attempted. With atomic=True the specs added by this call are
removed again (in reverse order) before the error is raised.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from antlion.errors import BackendError, DependencyError, SandboxError
from antlion.models.schemas import DependencySpec

if TYPE_CHECKING:
    from antlion.sandbox.workspace import Sandbox

logger = structlog.get_logger().bind(component="sandbox.installer")


def install(sandbox: Sandbox, names: str | Iterable[str], *, atomic: bool = False) -> Sandbox:
    """Add every spec in `names` to the sandbox, in order. Returns the sandbox."""
    if isinstance(names, str):
        names = [names]
    try:
        specs = [DependencySpec.parse(name) for name in names]
    except ValidationError as exc:
        raise DependencyError(f"Invalid dependency spec: {exc.errors()[0]['msg']}") from exc

    added: list[DependencySpec] = []
    with sandbox.guard.hold("add_dependencies"):
        for spec in specs:
            try:
                _add_one(sandbox, spec)
            except SandboxError:
                if atomic and added:
                    _rollback(sandbox, added)
                raise
            added.append(spec)
            sandbox.dependencies.append(spec.raw)
    return sandbox


def _add_one(sandbox: Sandbox, spec: DependencySpec) -> None:
    try:
        result = sandbox.backend.add_dependency(sandbox.root, spec)
    except (OSError, BackendError) as exc:
        logger.warning("dependency_failed", sandbox_id=sandbox.sandbox_id, spec=spec.raw, error=str(exc))
        raise DependencyError(f"Cannot add {spec}: {exc}", spec=spec.raw) from exc

    if not result.ok:
        logger.warning(
            "dependency_failed",
            sandbox_id=sandbox.sandbox_id,
            spec=spec.raw,
            exit_code=result.exit_code,
            error=result.stderr_tail()[:200],
        )
        raise DependencyError(
            f"{sandbox.backend.name} could not add {spec} "
            f"(exit {result.exit_code}):\n{result.stderr_tail()}",
            spec=spec.raw,
            stderr=result.stderr,
        )
    logger.info(
        "dependency_added",
        sandbox_id=sandbox.sandbox_id,
        spec=spec.raw,
        duration_ms=result.duration_ms,
    )


def _rollback(sandbox: Sandbox, added: list[DependencySpec]) -> None:
    """Best-effort removal of `added`; failures are logged, never raised."""
    for spec in reversed(added):
        try:
            result = sandbox.backend.remove_dependency(sandbox.root, spec)
        except (SandboxError, OSError) as exc:
            logger.warning("dependency_rollback_failed", spec=spec.raw, error=str(exc))
            continue
        if not result.ok:
            logger.warning(
                "dependency_rollback_failed",
                spec=spec.raw,
                exit_code=result.exit_code,
                error=result.stderr_tail()[:200],
            )
            continue
        if spec.raw in sandbox.dependencies:
            sandbox.dependencies.remove(spec.raw)
        logger.info("dependency_rollback", sandbox_id=sandbox.sandbox_id, spec=spec.raw)
