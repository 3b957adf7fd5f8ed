"""
Shared fixtures for numlab tests.
"""

import pytest

from numlab.core.logger import EventLog


@pytest.fixture
def log():
    """Fresh in-memory event log."""
    return EventLog()


@pytest.fixture
def dominant_system():
    """Strictly diagonally dominant 3x3 system."""
    return {
        "matrix": [[10.0, -1.0, 2.0], [-1.0, 11.0, -1.0], [2.0, -1.0, 10.0]],
        "vector": [6.0, 25.0, -11.0],
        "initialGuess": [0.0, 0.0, 0.0],
        "tolerance": 1e-8,
        "maxIterations": 200,
    }
