"""
Pytest configuration and shared fixtures for bloomtree tests.

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

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_text_contents = _common.make_text_contents
make_tree = _common.make_tree
make_letter_tree = _common.make_letter_tree


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def abcd_tree():
    """Tree over {A, B, C, D} without Bloom filters."""
    return make_letter_tree("ABCD")


@pytest.fixture
def abcd_bloom_tree():
    """Tree over {A, B, C, D} with Bloom filters."""
    return make_letter_tree("ABCD", false_positive_rate=0.01)


@pytest.fixture(params=[None, 0.01], ids=["linear", "bloom"])
def false_positive_rate(request):
    """Run a test under both lookup strategies."""
    return request.param


@pytest.fixture
def clean_env(monkeypatch):
    """Remove BLOOMTREE_* variables so config tests see defaults."""
    import os

    for key in list(os.environ):
        if key.startswith("BLOOMTREE_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


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
