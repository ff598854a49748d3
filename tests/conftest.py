"""Pytest configuration and shared fixtures for registry-credentials-core tests."""

import pytest


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear discovery-related environment variables before each test.

    This prevents the developer's own docker and podman setup from leaking into
    tests that capture the process environment.
    """
    import os

    discovery_vars = ("DOCKER_CONFIG", "XDG_RUNTIME_DIR", "XDG_CONFIG_HOME")
    test_prefixes = ("TEST_",)

    for key in list(os.environ.keys()):
        if key in discovery_vars or any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield
