"""Tests for Event component."""

from __future__ import annotations

import datetime
from typing import Any

from freezegun import freeze_time
import pytest

from calrecur.event import Event, EventStatus
from calrecur.exceptions import CalendarParseError

SUMMARY = "test summary"
LOSANGELES = datetime.timezone(datetime.timedelta(hours=-8))


@pytest.mark.parametrize(
    "begin,end,duration",
    [
        (
            datetime.datetime.fromisoformat("2022-09-16 12:00"),
            datetime.datetime.fromisoformat("2022-09-16 12:30"),
            datetime.timedelta(minutes=30),
        ),
        (
            datetime.date.fromisoformat("2022-09-16"),
            datetime.date.fromisoformat("2022-09-17"),
            datetime.timedelta(hours=24),
        ),
        (
            datetime.datetime.fromisoformat("2022-09-16 06:00"),
            datetime.datetime.fromisoformat("2022-09-17 08:30"),
            datetime.timedelta(days=1, hours=2, minutes=30),
        ),
    ],
)
def test_start_end_duration(
    begin: datetime.date, end: datetime.date, duration: datetime.timedelta
) -> None:
    """Test event duration calculation."""
    event = Event(summary=SUMMARY, start=begin, end=end)
    assert event.computed_duration == duration
    assert event.default_duration == duration


def test_end_from_duration() -> None:
    """Test the end of an event computed from its duration."""
    event = Event(
        summary=SUMMARY,
        start=datetime.datetime(2022, 9, 16, 12, 0, 0),
        duration=datetime.timedelta(hours=2),
    )
    assert event.end == datetime.datetime(2022, 9, 16, 14, 0, 0)
    assert event.computed_duration == datetime.timedelta(hours=2)


@pytest.mark.parametrize(
    "values,message",
    [
        (
            {
                "start": datetime.datetime(2022, 9, 16, 12, 0, 0),
                "end": datetime.date(2022, 9, 17),
            },
            "was datetime but dtend value",
        ),
        (
            {
                "start": datetime.date(2022, 9, 16),
                "end": datetime.datetime(2022, 9, 17, 12, 0, 0),
            },
            "was date but dtend value",
        ),
        (
            {
                "start": datetime.datetime(2022, 9, 16, 12, 0, 0),
                "end": datetime.datetime(2022, 9, 16, 13, 0, 0, tzinfo=LOSANGELES),
            },
            "Expected end datetime value in localtime",
        ),
        (
            {
                "start": datetime.datetime(2022, 9, 16, 12, 0, 0, tzinfo=LOSANGELES),
                "end": datetime.datetime(2022, 9, 16, 13, 0, 0),
            },
            "Expected end datetime with timezone",
        ),
        (
            {
                "start": datetime.datetime(2022, 9, 16, 12, 0, 0),
                "end": datetime.datetime(2022, 9, 16, 13, 0, 0),
                "duration": datetime.timedelta(hours=1),
            },
            "Only one of dtend or duration may be set",
        ),
        (
            {
                "start": datetime.date(2022, 9, 16),
                "duration": datetime.timedelta(hours=1),
            },
            "expects duration in days only",
        ),
        (
            {
                "start": datetime.datetime(2022, 9, 16, 12, 0, 0),
                "duration": datetime.timedelta(hours=-1),
            },
            "Expected duration to be positive",
        ),
    ],
)
def test_validation_errors(values: dict[str, Any], message: str) -> None:
    """Test invalid combinations of event values."""
    with pytest.raises(CalendarParseError, match=message) as exc_info:
        Event(summary=SUMMARY, **values)
    assert exc_info.value.message.startswith("Failed to parse calendar EVENT component")
    assert exc_info.value.detailed_error


def test_status_and_transparency() -> None:
    """Test fields that have aliases or enumerated values."""
    event = Event(
        summary=SUMMARY,
        start=datetime.date(2022, 9, 16),
        status="TENTATIVE",
        transp="TRANSPARENT",
    )
    assert event.status == EventStatus.TENTATIVE
    assert event.transparency == "TRANSPARENT"


@freeze_time("2022-09-03T09:38:05")
def test_occurrences_keep_event_properties() -> None:
    """Test each occurrence is a copy of the event with its own start."""
    event = Event(
        summary=SUMMARY,
        description="Weekly planning",
        location="Room 1",
        categories=["work"],
        start=datetime.datetime(2022, 9, 5, 9, 0, 0),
        end=datetime.datetime(2022, 9, 5, 9, 30, 0),
        rrule="FREQ=WEEKLY;BYDAY=MO,TH;COUNT=4",
    )
    assert event.uid == "mock-uid-1234"
    assert event.dtstamp == datetime.datetime(2022, 9, 3, 9, 38, 5, tzinfo=datetime.UTC)

    occurrences = event.occurrences()
    assert [(item.start, item.end) for item in occurrences] == [
        (
            datetime.datetime(2022, 9, 5, 9, 0, 0),
            datetime.datetime(2022, 9, 5, 9, 30, 0),
        ),
        (
            datetime.datetime(2022, 9, 8, 9, 0, 0),
            datetime.datetime(2022, 9, 8, 9, 30, 0),
        ),
        (
            datetime.datetime(2022, 9, 12, 9, 0, 0),
            datetime.datetime(2022, 9, 12, 9, 30, 0),
        ),
        (
            datetime.datetime(2022, 9, 15, 9, 0, 0),
            datetime.datetime(2022, 9, 15, 9, 30, 0),
        ),
    ]
    for item in occurrences:
        assert item.uid == "mock-uid-1234"
        assert item.dtstamp == event.dtstamp
        assert item.summary == SUMMARY
        assert item.description == "Weekly planning"
        assert item.location == "Room 1"
        assert item.categories == ["work"]
        assert item.recurrence_id == item.dtstart


def test_all_day_occurrences() -> None:
    """Test an all day event on the last day of the month."""
    event = Event(
        summary=SUMMARY,
        start=datetime.date(2022, 1, 31),
        end=datetime.date(2022, 2, 1),
        rrule="FREQ=MONTHLY;BYMONTHDAY=-1;COUNT=3",
    )
    assert [(item.start, item.end) for item in event.occurrences()] == [
        (datetime.date(2022, 1, 31), datetime.date(2022, 2, 1)),
        (datetime.date(2022, 2, 28), datetime.date(2022, 3, 1)),
        (datetime.date(2022, 3, 31), datetime.date(2022, 4, 1)),
    ]


def test_timezone_aware_occurrences() -> None:
    """Test the occurrences of an event with a fixed offset timezone."""
    event = Event(
        summary=SUMMARY,
        start=datetime.datetime(2022, 9, 16, 12, 0, 0, tzinfo=LOSANGELES),
        end=datetime.datetime(2022, 9, 16, 13, 0, 0, tzinfo=LOSANGELES),
        rrule="FREQ=DAILY;COUNT=2",
        exdate=[datetime.datetime(2022, 9, 17, 20, 0, 0, tzinfo=datetime.UTC)],
    )
    # The exception date is the same instant as the second occurrence
    assert [item.start for item in event.occurrences()] == [
        datetime.datetime(2022, 9, 16, 12, 0, 0, tzinfo=LOSANGELES),
    ]
