"""Tests for the Occurrence value."""

from __future__ import annotations

import datetime

import pytest

from calrecur.occurrence import Occurrence


def test_ordering_by_start() -> None:
    """Test that occurrences are ordered by start only."""
    first = Occurrence(
        datetime.datetime(2024, 1, 1, 9, 0, 0), datetime.datetime(2024, 1, 1, 12, 0, 0)
    )
    second = Occurrence(datetime.datetime(2024, 1, 2, 9, 0, 0))
    assert first < second
    assert first <= second
    assert second > first
    assert second >= first

    same_start = Occurrence(datetime.datetime(2024, 1, 1, 9, 0, 0))
    assert not first < same_start
    assert not same_start < first
    assert first <= same_start
    assert same_start >= first


def test_sorting() -> None:
    """Test sorting a list of occurrences."""
    values = [
        Occurrence(datetime.date(2024, 1, 3)),
        Occurrence(datetime.date(2024, 1, 1)),
        Occurrence(datetime.date(2024, 1, 2)),
    ]
    assert [o.start for o in sorted(values)] == [
        datetime.date(2024, 1, 1),
        datetime.date(2024, 1, 2),
        datetime.date(2024, 1, 3),
    ]


def test_invalid_comparisons() -> None:
    """Test comparisons with other types are not supported."""
    occurrence = Occurrence(datetime.date(2024, 1, 1))
    with pytest.raises(TypeError):
        assert occurrence < "example"


def test_immutable() -> None:
    """Test that an occurrence can't be modified."""
    occurrence = Occurrence(datetime.date(2024, 1, 1))
    with pytest.raises(AttributeError):
        occurrence.start = datetime.date(2024, 1, 2)  # type: ignore[misc]


@pytest.mark.parametrize(
    ("start", "instant", "expected"),
    [
        (datetime.date(2024, 1, 1), datetime.date(2024, 1, 2), True),
        (datetime.date(2024, 1, 2), datetime.date(2024, 1, 2), False),
        (
            datetime.datetime(2024, 1, 1, 9, 0, 0),
            datetime.datetime(2024, 1, 1, 9, 0, 1),
            True,
        ),
        (datetime.date(2024, 1, 1), datetime.datetime(2024, 1, 1, 0, 0, 1), True),
        (datetime.date(2024, 1, 2), datetime.datetime(2024, 1, 1, 23, 0, 0), False),
        (datetime.datetime(2024, 1, 1, 23, 0, 0), datetime.date(2024, 1, 2), True),
        (
            datetime.datetime(2024, 1, 1, 9, 0, 0, tzinfo=datetime.UTC),
            datetime.datetime(2024, 1, 1, 10, 0, 0, tzinfo=datetime.UTC),
            True,
        ),
    ],
)
def test_starts_before(
    start: datetime.date | datetime.datetime,
    instant: datetime.date | datetime.datetime,
    expected: bool,
) -> None:
    """Test comparing the start against dates and times of a different kind."""
    assert Occurrence(start).starts_before(instant) == expected


def test_equal_by_start() -> None:
    """Test occurrences with the same start are equal regardless of end."""
    start = datetime.datetime(2024, 1, 1, 9, 0, 0)
    with_end = Occurrence(start, datetime.datetime(2024, 1, 1, 12, 0, 0))
    without_end = Occurrence(start)
    assert with_end == without_end
    assert hash(with_end) == hash(without_end)
    assert len({with_end, without_end}) == 1
    assert with_end != Occurrence(datetime.datetime(2024, 1, 1, 9, 0, 1))
    assert with_end != start
