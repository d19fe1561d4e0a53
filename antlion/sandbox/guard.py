"""Lifecycle guard — one exclusive lock per sandbox workspace.

The build tools are not safe to run concurrently against the same project,
and every operation rewrites shared files (manifest, entry point, output),
so there is no read/write distinction: every holder is exclusive.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

logger = structlog.get_logger().bind(component="sandbox.guard")


class WorkspaceGuard:
    """Blocking mutual exclusion for one workspace. Never fails, never reorders."""

    def __init__(self, owner: str) -> None:
        self.owner = owner
        self._lock = threading.Lock()

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    @contextmanager
    def hold(self, operation: str) -> Iterator[None]:
        """Hold the workspace for the duration of one operation.

        Released on every exit path, including exceptions raised inside the block.
        """
        start = time.perf_counter()
        with self._lock:
            acquired = time.perf_counter()
            logger.debug(
                "guard_acquired",
                sandbox_id=self.owner,
                operation=operation,
                waited_ms=round((acquired - start) * 1000, 2),
            )
            try:
                yield
            finally:
                logger.debug(
                    "guard_released",
                    sandbox_id=self.owner,
                    operation=operation,
                    held_ms=round((time.perf_counter() - acquired) * 1000, 2),
                )
