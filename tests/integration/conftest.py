"""
Integration test configuration and fixtures.
These tests run the real git and ESLint binaries and reach github.com,
so they are skipped unless those are available.
"""

import shutil
import socket

import pytest

from codescout.constants import ESLINT_COMMAND


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")


@pytest.fixture
def skip_if_no_network():
    """Skip test if github.com is not reachable."""
    try:
        socket.create_connection(("github.com", 443), timeout=5).close()
    except OSError:
        pytest.skip("Network connection required for integration tests")


@pytest.fixture
def require_git():
    if shutil.which("git") is None:
        pytest.skip("git executable not found")


@pytest.fixture
def require_eslint():
    if shutil.which(ESLINT_COMMAND[0]) is None:
        pytest.skip(f"{ESLINT_COMMAND[0]} not found; ESLint is required")
