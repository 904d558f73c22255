"""Shared test fixtures for the word_trim test suite.

WHY: Several test modules need the same sample transcript and a fresh
recording trimmer. Centralizing them here avoids duplication.

HOW: Fixtures build their objects from the helpers in fakes.py.
"""

import pytest

from fakes import RecordingTrimmer, make_segment


@pytest.fixture
def hello_world_segment():
    """One sub-segment whose tokens spell "Hello, world!" across four tokens."""
    return make_segment((" Hel", 10), ("lo", 35), (",", 50), (" world!", 60))


@pytest.fixture
def recording_trimmer():
    return RecordingTrimmer()
