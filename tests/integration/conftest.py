"""Integration-test conftest — skip guard and real-toolchain fixtures.

Integration tests require:
    ANTLION_TEST_INTEGRATION=1   (set in shell before running)
    uv on PATH for the uv backend tests
    network access to the package index

Run with:
    ANTLION_TEST_INTEGRATION=1 pytest tests/integration/ -v
"""

from __future__ import annotations

import os

import pytest


def pytest_collection_modifyitems(config, items):
    if os.getenv("ANTLION_TEST_INTEGRATION"):
        return
    skip = pytest.mark.skip(reason="Set ANTLION_TEST_INTEGRATION=1 to run integration tests")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def sandbox_root(tmp_path):
    root = tmp_path / "sandboxes"
    root.mkdir()
    return root
