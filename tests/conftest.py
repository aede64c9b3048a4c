"""
Pytest configuration and shared fixtures for merkle_audit tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_leaf_hashes = _common.make_leaf_hashes
make_tree = _common.make_tree
make_runtime_config = _common.make_runtime_config

from merkle_audit.config import runtime as _runtime  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

_CONFIG_ENV_VARS = (
    "MERKLE_AUDIT_HASH_ALGORITHM",
    "MERKLE_AUDIT_STRICT_LOOKUP",
    "MERKLE_AUDIT_LOG_LEVEL",
    "MERKLE_AUDIT_LOG_FILE",
)


@pytest.fixture(autouse=True)
def isolated_default_config(monkeypatch):
    """Clear config env vars and the cached default config around each test."""
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    _runtime.set_default_config(None)
    yield
    _runtime.set_default_config(None)


@pytest.fixture
def leaf_hashes():
    """Provide eight distinct SHA-256 leaf hashes."""
    return make_leaf_hashes(8)


@pytest.fixture
def three_leaves():
    """Provide the A, B, C leaves used by the odd-count scenarios."""
    return make_leaf_hashes(3, prefix="abc")


@pytest.fixture
def tree(leaf_hashes):
    """Provide a strict SHA-256 tree built over leaf_hashes."""
    return make_tree(leaves=leaf_hashes)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
