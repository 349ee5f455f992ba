"""A single occurrence of a recurring component.

An `Occurrence` is the lightweight value produced while expanding recurrence
rules, before it is turned into a full component. Occurrences are ordered by
their start only, so two occurrences with the same start sort together
regardless of their end.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Any

from .util import normalize_datetime

__all__ = ["Occurrence"]


@dataclass(frozen=True, eq=False)
class Occurrence:
    """The start and optional end of one instance of a recurring component.

    Occurrences with the same start are equal regardless of their end.
    """

    start: datetime.datetime | datetime.date
    """The start date or time of the instance."""

    end: datetime.datetime | datetime.date | None = None
    """An explicit end for the instance, e.g. from a period recurrence date.

    When not set, the end is derived from the duration of the component.
    """

    def starts_before(self, instant: datetime.datetime | datetime.date) -> bool:
        """Return True if this occurrence starts strictly before the instant.

        A date and a datetime can't be compared directly so both are
        normalized to a datetime in the local timezone when they differ.
        """
        if _same_kind(self.start, instant):
            return self.start < instant
        return normalize_datetime(self.start) < normalize_datetime(instant)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Occurrence):
            return NotImplemented
        return self.start == other.start

    def __hash__(self) -> int:
        return hash(self.start)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Occurrence):
            return NotImplemented
        return self.start < other.start

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, Occurrence):
            return NotImplemented
        return self.start > other.start

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, Occurrence):
            return NotImplemented
        return self.start <= other.start

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, Occurrence):
            return NotImplemented
        return self.start >= other.start


def _same_kind(
    value: datetime.datetime | datetime.date, other: datetime.datetime | datetime.date
) -> bool:
    if isinstance(value, datetime.datetime) != isinstance(other, datetime.datetime):
        return False
    if not isinstance(value, datetime.datetime):
        return True
    return (value.tzinfo is None) == (other.tzinfo is None)  # type: ignore[union-attr]
