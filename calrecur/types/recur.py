"""Recurrence rule values (RRULE and EXRULE) of a calendar component.

A `Recur` holds the parts of a rule such as `FREQ=WEEKLY;BYDAY=MO,WE`. The
parts are validated with pydantic and expanded into concrete dates with
`dateutil.rrule`, so this module is only responsible for translating between
the rule text, the model and the dateutil arguments.

Rules are usually written as text when creating a component:

```python
import datetime
from calrecur.event import Event

event = Event(
    summary="Gym",
    start=datetime.datetime(2024, 1, 1, 7, 0, 0),
    end=datetime.datetime(2024, 1, 1, 8, 0, 0),
    rrule="FREQ=WEEKLY;BYDAY=MO,WE;COUNT=4",
)
print([ev.dtstart for ev in event.occurrences()])
```

which prints the four Monday and Wednesday mornings starting Jan 1st.
"""

from __future__ import annotations

import datetime
import enum
import re
from dataclasses import dataclass
from typing import Any, Optional, Union

from dateutil import rrule
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import CalendarParseError
from .date_time import encode_date_value, parse_date_value

__all__ = [
    "Frequency",
    "Recur",
    "Weekday",
    "WeekdayValue",
]


class Weekday(str, enum.Enum):
    """Two letter day of the week used by BYDAY and WKST."""

    SUNDAY = "SU"
    MONDAY = "MO"
    TUESDAY = "TU"
    WEDNESDAY = "WE"
    THURSDAY = "TH"
    FRIDAY = "FR"
    SATURDAY = "SA"

    def __str__(self) -> str:
        return self.value

    @property
    def rrule_weekday(self) -> rrule.weekday:
        """Return the dateutil weekday constant."""
        return getattr(rrule, self.value)  # type: ignore[no-any-return]


@dataclass
class WeekdayValue:
    """A BYDAY entry: a day of the week with an optional position.

    The position only has meaning for MONTHLY and YEARLY rules, e.g. `2TU`
    is the second Tuesday and `-1FR` is the last Friday of the period.
    """

    weekday: Weekday

    occurrence: Optional[int] = None
    """Position of the day within the month or year, negative from the end."""

    def __str__(self) -> str:
        if self.occurrence is None:
            return str(self.weekday)
        return f"{self.occurrence}{self.weekday}"

    def as_rrule_weekday(self) -> rrule.weekday:
        """Return the dateutil weekday, with its position when set."""
        if self.occurrence is None:
            return self.weekday.rrule_weekday
        return self.weekday.rrule_weekday(self.occurrence)


class Frequency(str, enum.Enum):
    """The unit of time a rule repeats in."""

    SECONDLY = "SECONDLY"
    MINUTELY = "MINUTELY"
    HOURLY = "HOURLY"
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"

    @property
    def rrule_freq(self) -> int:
        """Return the dateutil frequency constant."""
        return getattr(rrule, self.value)  # type: ignore[no-any-return]


# Rule parts holding a comma separated list of integers, named the same as
# the dateutil.rrule keyword argument.
INT_LIST_PARTS = (
    "bymonthday",
    "bymonth",
    "bysetpos",
    "byyearday",
    "byweekno",
    "byhour",
    "byminute",
    "bysecond",
)

BYDAY_REGEX = re.compile(r"([-+]?[0-9]*)([A-Z]{2})")

RuleInput = dict[str, Any]


class Recur(BaseModel):
    """A recurrence rule.

    Field names follow python conventions and have the lowercase rule part
    name as an alias, e.g. `by_month_day` is read from `bymonthday`. A rule
    without `count` or `until` repeats forever.
    """

    freq: Frequency

    until: Union[datetime.datetime, datetime.date, None] = None
    """Last possible start of an instance, inclusive."""

    count: Optional[int] = None
    """Total number of instances, including the first one."""

    interval: int = 1
    """Repeat every `interval` units of `freq`."""

    by_weekday: list[WeekdayValue] = Field(alias="byday", default_factory=list)
    by_month_day: list[int] = Field(alias="bymonthday", default_factory=list)
    by_month: list[int] = Field(alias="bymonth", default_factory=list)
    by_setpos: list[int] = Field(alias="bysetpos", default_factory=list)
    by_year_day: list[int] = Field(alias="byyearday", default_factory=list)
    by_week_no: list[int] = Field(alias="byweekno", default_factory=list)
    by_hour: list[int] = Field(alias="byhour", default_factory=list)
    by_minute: list[int] = Field(alias="byminute", default_factory=list)
    by_second: list[int] = Field(alias="bysecond", default_factory=list)

    wkst: Optional[Weekday] = None
    """First day of the work week, affects WEEKLY rules with an interval."""

    model_config = ConfigDict(
        validate_assignment=True,
        populate_by_name=True,
    )

    @property
    def bounded(self) -> bool:
        """Return True if the rule produces a finite number of instances."""
        return self.count is not None or self.until is not None

    def as_rrule(self, dtstart: datetime.datetime | datetime.date) -> rrule.rrule:
        """Build the dateutil rule expanded from the start of a component."""
        kwargs: dict[str, Any] = {
            "dtstart": dtstart,
            "interval": self.interval,
            "count": self.count,
            "until": self.until,
            "cache": True,
        }
        if self.wkst is not None:
            kwargs["wkst"] = self.wkst.rrule_weekday
        if self.by_weekday:
            kwargs["byweekday"] = [day.as_rrule_weekday() for day in self.by_weekday]
        for name, info in Recur.model_fields.items():
            if info.alias in INT_LIST_PARTS and (value := getattr(self, name)):
                kwargs[info.alias] = value
        return rrule.rrule(self.freq.rrule_freq, **kwargs)

    def as_rrule_str(self) -> str:
        """Return the rule as text, e.g. `FREQ=DAILY;COUNT=3`."""
        parts = []
        for key, value in self.model_dump(by_alias=True, exclude_none=True).items():
            if key == "interval" and value == 1:
                continue
            if not (encoded := _encode_part(key, value)):
                continue
            parts.append(f"{key.upper()}={encoded}")
        return ";".join(parts)

    @classmethod
    def from_rrule(cls, rrule_str: str) -> Recur:
        """Parse a rule from its text."""
        try:
            return cls.model_validate(cls.__parse_property_value__(rrule_str))
        except (ValueError, ValidationError) as err:
            raise CalendarParseError(
                f"Failed to parse recurrence rule: {rrule_str}",
                detailed_error=str(err),
            ) from err

    @classmethod
    def __parse_property_value__(cls, value: str) -> RuleInput:
        """Split the rule text into a dictionary used as pydantic input.

        A leading property name (`RRULE:` or `EXRULE:`) is ignored.
        """
        name, sep, rest = value.partition(":")
        if sep and name in ("RRULE", "EXRULE"):
            value = rest
        result: RuleInput = {}
        for part in value.split(";"):
            key, sep, part_value = part.partition("=")
            if not sep:
                raise ValueError(
                    f"Recurrence rule had unexpected format missing '=': {value}"
                )
            key = key.lower()
            if key == "until":
                result[key] = parse_date_value(part_value)
            elif key == "byday":
                result[key] = [_parse_byday(item) for item in part_value.split(",")]
            elif key in INT_LIST_PARTS:
                result[key] = part_value.split(",")
            else:
                result[key] = part_value
        return result


def _parse_byday(value: str) -> dict[str, str]:
    if not (match := BYDAY_REGEX.fullmatch(value)):
        raise ValueError(f"Expected value to match BYDAY pattern: {value}")
    occurrence, weekday = match.groups()
    if occurrence := occurrence.lstrip("+"):
        return {"weekday": weekday, "occurrence": occurrence}
    return {"weekday": weekday}


def _encode_part(key: str, value: Any) -> str:
    """Encode a single dumped rule part value."""
    if key == "byday":
        days = [
            WeekdayValue(**day) if isinstance(day, dict) else day for day in value
        ]
        return ",".join(str(day) for day in days)
    if isinstance(value, list):
        return ",".join(str(item) for item in value)
    if isinstance(value, enum.Enum):
        return str(value.value)
    if isinstance(value, datetime.date):
        return encode_date_value(value)
    return str(value)
