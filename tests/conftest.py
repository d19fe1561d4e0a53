"""Root conftest — shared pytest markers.

Markers
-------
unit        fast, no network, build tool replaced by FakeBackend
integration runs the real uv / pip toolchains (set ANTLION_TEST_INTEGRATION=1)
slow        expected to take > 5 seconds
"""

from __future__ import annotations


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests against FakeBackend")
    config.addinivalue_line("markers", "integration: requires uv / pip and network access")
    config.addinivalue_line("markers", "slow: test is expected to take > 5 s")
