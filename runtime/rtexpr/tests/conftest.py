"""
Pytest configuration and fixtures for rtexpr tests.
"""

import os
import sys

import pytest

# Add grandparent directory to path for imports (to find rtexpr package)
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from rtexpr.runtime import Runtime  # noqa: E402
from rtexpr.store import VariableStore  # noqa: E402


@pytest.fixture
def store():
    """Empty variable store"""
    return VariableStore()


@pytest.fixture
def runtime(store):
    """Runtime session sharing the store fixture"""
    return Runtime(store=store)
