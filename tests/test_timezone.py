"""Tests for timezone observances."""

from __future__ import annotations

import datetime

import pytest

from calrecur.exceptions import CalendarParseError
from calrecur.timezone import Observance, ObservanceType


def test_standard_time_onsets() -> None:
    """Test the onsets of standard time on the last Sunday of October."""
    observance = Observance(
        observance_type=ObservanceType.STANDARD,
        start=datetime.datetime(1967, 10, 29, 2, 0, 0),
        tzoffsetfrom=datetime.timedelta(hours=-4),
        tzoffsetto=datetime.timedelta(hours=-5),
        tzname=["EST"],
        rrule="FREQ=YEARLY;BYMONTH=10;BYDAY=-1SU",
    )
    assert observance.tz_offset_to == datetime.timedelta(hours=-5)
    assert not observance.bounded
    assert [item.dtstart for item in observance.occurrences(count=3)] == [
        datetime.datetime(1967, 10, 29, 2, 0, 0),
        datetime.datetime(1968, 10, 27, 2, 0, 0),
        datetime.datetime(1969, 10, 26, 2, 0, 0),
    ]


def test_daylight_time_onsets_until() -> None:
    """Test the onsets of daylight time ending with an UNTIL value."""
    observance = Observance(
        observance_type=ObservanceType.DAYLIGHT,
        start=datetime.datetime(1987, 4, 5, 2, 0, 0),
        tzoffsetfrom=datetime.timedelta(hours=-5),
        tzoffsetto=datetime.timedelta(hours=-4),
        tzname=["EDT"],
        rrule="FREQ=YEARLY;BYMONTH=4;BYDAY=1SU;UNTIL=19890402T070000",
    )
    assert observance.bounded
    assert [item.dtstart for item in observance.occurrences()] == [
        datetime.datetime(1987, 4, 5, 2, 0, 0),
        datetime.datetime(1988, 4, 3, 2, 0, 0),
        datetime.datetime(1989, 4, 2, 2, 0, 0),
    ]


@pytest.mark.parametrize(
    "start,message",
    [
        (None, "Observance requires that dtstart is specified"),
        (datetime.date(1967, 10, 29), "Start time must be a date and time"),
        (
            datetime.datetime(1967, 10, 29, 2, 0, 0, tzinfo=datetime.UTC),
            "Start time must be in local time format",
        ),
    ],
)
def test_invalid_start(start: datetime.date | None, message: str) -> None:
    """Test an observance must start at a local date and time."""
    with pytest.raises(CalendarParseError, match=message):
        Observance(
            start=start,
            tzoffsetfrom=datetime.timedelta(hours=-4),
            tzoffsetto=datetime.timedelta(hours=-5),
        )
