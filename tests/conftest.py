"""Pytest configuration shared by the lichen tests"""

import pytest

from lichen.common.tracing import RecordingTrace
from lichen.model.builder import NetBuilder


@pytest.fixture
def builder():
    """A fresh builder; every test declares its own data classes."""
    return NetBuilder("test")


@pytest.fixture
def trace():
    return RecordingTrace()
