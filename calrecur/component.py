"""Base pydantic models for calendar components that support recurrence.

The `ComponentModel` wraps pydantic validation so that any invalid input is
reported as a `CalendarParseError`. The `RecurringComponent` adds the common
recurrence properties (rrule, rdate, exrule, exdate, recurrence-id) shared by
events, to-dos, journal entries and timezone observances, along with the
methods to enumerate the occurrences of the component.

Example:
```python
import datetime
from calrecur.event import Event

event = Event(
    summary="Morning exercise",
    start=datetime.datetime(2024, 1, 1, 9, 0, 0),
    end=datetime.datetime(2024, 1, 1, 10, 0, 0),
    rrule="FREQ=DAILY;COUNT=3",
)
for occurrence in event.occurrences():
    print(occurrence.recurrence_id, occurrence.dtstart, occurrence.dtend)
```
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterator
from typing import Annotated, Any, ClassVar, Optional, Self, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)

from .enumeration import EnumerationInstance
from .exceptions import CalendarParseError
from .iter import RecurrenceDates, Rule
from .occurrence import Occurrence
from .recur_adapter import RecurAdapter
from .types.period import Period
from .types.recur import Recur
from .util import parse_date_and_datetime, parse_date_and_datetime_list

__all__ = [
    "ComponentModel",
    "RecurringComponent",
]

_LOGGER = logging.getLogger(__name__)


def _adjust_recurrence_date(
    date_value: datetime.datetime | datetime.date,
    dtstart: datetime.datetime | datetime.date,
) -> datetime.datetime | datetime.date:
    """Apply fixes to the recurrence rule date."""
    if isinstance(dtstart, datetime.datetime):
        if not isinstance(date_value, datetime.datetime):
            raise ValueError(
                "DTSTART was DATE-TIME but UNTIL was DATE: "
                "must be the same value type"
            )
        if dtstart.tzinfo is None:
            if date_value.tzinfo is not None:
                raise ValueError("DTSTART is date local but UNTIL was not")
            return date_value

        if date_value.utcoffset():
            raise ValueError("DTSTART had UTC or local and UNTIL must be UTC")

        return date_value

    if isinstance(date_value, datetime.datetime):
        # Fix invalid rules where UNTIL value is DATE-TIME but DTSTART is DATE
        return date_value.date()

    return date_value


def validate_until_dtstart(
    cls: Any, rules: list[Recur], info: ValidationInfo
) -> list[Recur]:
    """Verify the until time and dtstart are the same."""
    if not (dtstart := info.data.get("dtstart")):
        return rules
    result = []
    for rule in rules:
        if rule.until is not None:
            until = _adjust_recurrence_date(rule.until, dtstart)
            if until is not rule.until:
                rule = rule.model_copy(update={"until": until})
        result.append(rule)
    return result


def _as_datetime(
    date_value: datetime.datetime | datetime.date,
    dtstart: datetime.datetime,
) -> datetime.datetime:
    if not isinstance(date_value, datetime.datetime):
        return datetime.datetime.combine(date_value, dtstart.timetz())
    return date_value


def _as_date(
    date_value: datetime.datetime | datetime.date,
    dtstart: datetime.date,
) -> datetime.date:
    if isinstance(date_value, datetime.datetime):
        return datetime.date.fromordinal(date_value.toordinal())
    return date_value


def validate_recurrence_dates(
    cls: Any, values: list[Any], info: ValidationInfo
) -> list[Any]:
    """Verify the recurrence dates have the same type as dtstart.

    Period values always have an explicit date and time and are left as is,
    so they are only allowed when dtstart is a date and time.
    """
    if not values or not (dtstart := info.data.get("dtstart")):
        return values
    if isinstance(dtstart, datetime.datetime):
        return [
            value if isinstance(value, Period) else _as_datetime(value, dtstart)
            for value in values
        ]
    if any(isinstance(value, Period) for value in values):
        raise ValueError("DTSTART was DATE but a recurrence date was a PERIOD")
    return [_as_date(value, dtstart) for value in values]


def parse_recur_list(value: Any) -> Any:
    """Coerce a rule string or a single rule into a list of rules."""
    if value is None:
        return []
    if isinstance(value, (str, Recur, dict)):
        value = [value]
    return [
        Recur.__parse_property_value__(item) if isinstance(item, str) else item
        for item in value
    ]


class ComponentModel(BaseModel):
    """Abstract class for rfc5545 component model."""

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as err:
            _LOGGER.debug("Failed to parse component %s", err)
            message = [
                f"Failed to parse calendar {self.__class__.__name__.upper()} component"
            ]
            for error in err.errors():
                if msg := error.get("msg"):
                    message.append(msg)
            error_str = ": ".join(message)
            raise CalendarParseError(error_str, detailed_error=str(err)) from err

    model_config = ConfigDict(
        validate_assignment=True,
        populate_by_name=True,
    )


class RecurringComponent(ComponentModel):
    """A component that supports recurrence.

    The recurrence set is the complete set of recurrence instances for a
    calendar component. The recurrence set is generated by gathering the
    rrule and rdate properties then excluding any times specified by exrule
    and exdate.
    """

    end_property: ClassVar[Optional[str]] = None
    """Name of the field holding the end of the component, if any."""

    dtstart: Annotated[
        Union[datetime.datetime, datetime.date, None],
        BeforeValidator(parse_date_and_datetime),
    ] = None
    """The start of the component and the first instance of the recurrence set."""

    rrule: Annotated[list[Recur], BeforeValidator(parse_recur_list)] = Field(
        default_factory=list
    )
    """Recurrence rules for the component."""

    rdate: Annotated[
        list[Union[datetime.datetime, datetime.date, Period]],
        BeforeValidator(parse_date_and_datetime_list),
    ] = Field(default_factory=list)
    """Defines the list of date/time values for recurring components.

    A value may also be a `Period` to give that instance its own end.
    """

    exrule: Annotated[list[Recur], BeforeValidator(parse_recur_list)] = Field(
        default_factory=list
    )
    """Rules for instances excluded from the recurrence set."""

    exdate: Annotated[
        list[Union[datetime.datetime, datetime.date]],
        BeforeValidator(parse_date_and_datetime_list),
    ] = Field(default_factory=list)
    """Defines the list of exceptions for recurring components."""

    recurrence_id: Union[datetime.datetime, datetime.date, None] = Field(
        alias="recurrence-id", default=None
    )
    """Defines a specific instance of a recurring component.

    This is set on each occurrence returned when enumerating the component to
    the start of the instance within the recurrence set.
    """

    @property
    def recurring(self) -> bool:
        """Return true if this component is recurring."""
        if self.rrule or self.rdate:
            return True
        return False

    @property
    def default_duration(self) -> datetime.timedelta | None:
        """Return the time between the start and end of the component.

        This is None when the component has no end.
        """
        if self.dtstart is None or self.end_property is None:
            return None
        if (end := getattr(self, self.end_property)) is None:
            return None
        return end - self.dtstart  # type: ignore[no-any-return]

    def inclusion_rules(self) -> list[Rule]:
        """Return the rules that generate the occurrences of the component."""
        rules: list[Rule] = list(self.rrule)
        if self.rdate:
            rules.append(RecurrenceDates(self.rdate))
        return rules

    def exclusion_rules(self) -> list[Rule]:
        """Return the rules that exclude occurrences of the component."""
        rules: list[Rule] = list(self.exrule)
        if self.exdate:
            rules.append(RecurrenceDates(self.exdate))
        return rules

    @property
    def bounded(self) -> bool:
        """Return True if the component has a finite set of occurrences."""
        return EnumerationInstance(self).bounded

    def iter_occurrences(
        self,
        starting: datetime.datetime | datetime.date | None = None,
        before: datetime.datetime | datetime.date | None = None,
        count: int | None = None,
    ) -> Iterator[Self]:
        """Return an iterator over the occurrences of the component.

        The iterator is lazy and may be infinite when the component is not
        bounded and neither `before` nor `count` is given.
        """
        return iter(EnumerationInstance(self, starting, before, count))

    def occurrences(
        self,
        starting: datetime.datetime | datetime.date | None = None,
        before: datetime.datetime | datetime.date | None = None,
        count: int | None = None,
    ) -> list[Self]:
        """Return a list of occurrences of the component.

        The components returned are the same type as this component, but will
        have any recurrence properties (rrule, rdate, exrule, exdate) removed
        since they are single occurrences, and will have the recurrence-id set
        to the start of the occurrence.

        Parameters:
          - starting: no occurrences starting before this value are returned.
          - before: no occurrences starting on or after this value are returned.
          - count: an integer which limits the number of occurrences returned.

        An `UnboundedRecurrenceError` is raised if the component is not bounded
        and the occurrences are not constrained by `before` or `count`.
        """
        return EnumerationInstance(self, starting, before, count).to_list()

    def recurrence(self, occurrence: Occurrence) -> Self:
        """Return a copy of this component for a single occurrence."""
        return RecurAdapter(self).get(occurrence)

    validate_until = field_validator("rrule", "exrule")(validate_until_dtstart)
    validate_dates = field_validator("rdate", "exdate")(validate_recurrence_dates)

    @model_validator(mode="after")
    def validate_rules_require_start(self) -> Self:
        """Validate that a recurrence rule has a start to recur from."""
        if (self.rrule or self.exrule) and self.dtstart is None:
            raise ValueError("Recurrence rule requires that dtstart is specified")
        return self

