import sys
from pathlib import Path

# Ensure package import for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from sortbattle.control import RunControl


@pytest.fixture
def recorder():
    """Callback that records every (arr, highlight, stats, error) it receives."""

    class Recorder:
        def __init__(self):
            self.calls = []

        def __call__(self, arr, highlight, stats, error=None):
            self.calls.append((arr, highlight, stats, error))

    return Recorder()


@pytest.fixture
def control() -> RunControl:
    return RunControl(delay_ms=0)
