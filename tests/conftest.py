"""Test fixtures."""

from collections.abc import Generator
import datetime
from unittest.mock import patch

import pytest

from calrecur.event import Event

MOCK_UID = "mock-uid-1234"


@pytest.fixture(autouse=True)
def mock_uid() -> Generator[None, None, None]:
    """Mock out the uid used in tests."""
    with patch("calrecur.event.uid_factory", return_value=MOCK_UID), patch(
        "calrecur.todo.uid_factory", return_value=MOCK_UID
    ), patch("calrecur.journal.uid_factory", return_value=MOCK_UID):
        yield


@pytest.fixture
def daily_event() -> Event:
    """Fixture for a one hour event repeating daily three times."""
    return Event(
        summary="Daily meeting",
        start=datetime.datetime(2024, 1, 1, 9, 0, 0),
        end=datetime.datetime(2024, 1, 1, 10, 0, 0),
        rrule="FREQ=DAILY;COUNT=3",
    )
