import pytest

from helpers import RecordingPublisher


@pytest.fixture
def recorder():
    return RecordingPublisher()
