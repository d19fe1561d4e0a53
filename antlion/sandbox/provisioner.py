"""Provisioner — creates a uniquely-named workspace and scaffolds a project in it.

Layout per sandbox:
    <root>/<uuid4 hex>/            base directory, removed by Sandbox.destroy()
    <root>/<uuid4 hex>/sandbox/    scaffolded project (Sandbox.root)
"""

from __future__ import annotations

from pathlib import Path
from uuid import uuid4

import structlog

from antlion.backends import BuildBackend, get_backend
from antlion.config import settings
from antlion.errors import BackendError, ProvisioningError
from antlion.sandbox.workspace import Sandbox

logger = structlog.get_logger().bind(component="sandbox.provisioner")

PROJECT_NAME = "sandbox"


class Provisioner:
    """Factory for Sandbox instances sharing one base root and backend."""

    def __init__(
        self,
        root: Path | str | None = None,
        backend: BuildBackend | None = None,
    ) -> None:
        self.root = Path(root if root is not None else settings.sandbox_root).expanduser().resolve()
        self.backend = backend or get_backend()

    def create(self) -> Sandbox:
        """Create a fresh workspace and return a Sandbox bound to it.

        Raises ProvisioningError if the directory or the scaffold cannot be
        created. The half-created directory is left in place for diagnosis.
        """
        sandbox_id = uuid4().hex
        base_dir = self.root / sandbox_id
        project = base_dir / PROJECT_NAME

        try:
            base_dir.mkdir(parents=True, exist_ok=False)
            result = self.backend.scaffold(project)
        except (OSError, BackendError) as exc:
            logger.error("provisioning_failed", sandbox_id=sandbox_id, error=str(exc))
            raise ProvisioningError(f"Cannot provision sandbox at {base_dir}: {exc}") from exc

        if not result.ok:
            logger.error(
                "provisioning_failed",
                sandbox_id=sandbox_id,
                exit_code=result.exit_code,
                error=result.stderr_tail(),
            )
            raise ProvisioningError(
                f"{self.backend.name} could not scaffold {project} "
                f"(exit {result.exit_code}):\n{result.stderr_tail()}"
            )

        sandbox = Sandbox(
            sandbox_id=sandbox_id,
            root=project,
            base_dir=base_dir,
            backend=self.backend,
        )
        logger.info(
            "sandbox_created",
            sandbox_id=sandbox_id,
            root=str(project),
            backend=self.backend.name,
            duration_ms=result.duration_ms,
        )
        return sandbox
