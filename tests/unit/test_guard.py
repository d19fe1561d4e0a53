"""Tests for WorkspaceGuard — blocking, exclusive, always released."""

from __future__ import annotations

import threading
import time

import pytest

from antlion.sandbox import WorkspaceGuard


def test_hold_locks_and_releases():
    guard = WorkspaceGuard("abc")
    with guard.hold("eval"):
        assert guard.locked
    assert not guard.locked


def test_released_when_block_raises():
    guard = WorkspaceGuard("abc")
    with pytest.raises(RuntimeError):
        with guard.hold("eval"):
            raise RuntimeError("boom")
    assert not guard.locked


def test_second_holder_blocks_until_release():
    guard = WorkspaceGuard("abc")
    entered = threading.Event()
    release = threading.Event()
    order: list[str] = []

    def first():
        with guard.hold("add_dependencies"):
            entered.set()
            release.wait(timeout=5)
            order.append("first")

    def second():
        entered.wait(timeout=5)
        with guard.hold("eval"):
            order.append("second")

    t1 = threading.Thread(target=first)
    t2 = threading.Thread(target=second)
    t1.start()
    t2.start()

    entered.wait(timeout=5)
    time.sleep(0.05)
    assert order == []  # second is parked on the lock, not failed
    release.set()
    t1.join()
    t2.join()
    assert order == ["first", "second"]
