"""Calendar events.

An event occupies time on a calendar: either a span between a start and an
end time, or one or more whole days. The end is given with `dtend` or as a
`duration` from the start, never both. Each occurrence of a recurring event
keeps the length of the original event.
"""

# pylint: disable=unnecessary-lambda

from __future__ import annotations

import datetime
import enum
import logging
from typing import Annotated, Any, ClassVar, Optional, Self, Union

from pydantic import BeforeValidator, Field, model_validator

from .component import RecurringComponent
from .util import dtstamp_factory, parse_date_and_datetime, uid_factory

__all__ = ["Event", "EventStatus"]

_LOGGER = logging.getLogger(__name__)


class EventStatus(str, enum.Enum):
    """Confirmation state of an event."""

    CONFIRMED = "CONFIRMED"
    TENTATIVE = "TENTATIVE"
    CANCELLED = "CANCELLED"


class Event(RecurringComponent):
    """An event on a calendar.

    The `start` and `end` keyword arguments may be used in place of `dtstart`
    and `dtend`. The uid and dtstamp defaults call the factories through a
    lambda so that tests can patch them.

    Example:
    ```python
    import datetime
    from calrecur.event import Event

    event = Event(
        summary="Book club",
        start=datetime.datetime(2024, 3, 5, 19, 0, 0),
        duration=datetime.timedelta(hours=2),
        rrule="FREQ=MONTHLY;BYDAY=1TU;COUNT=6",
    )
    for occurrence in event.occurrences():
        print(occurrence.start, occurrence.end)
    ```
    """

    end_property: ClassVar[Optional[str]] = "dtend"

    dtstamp: Union[datetime.datetime, datetime.date] = Field(
        default_factory=lambda: dtstamp_factory()
    )
    uid: str = Field(default_factory=lambda: uid_factory())

    dtend: Annotated[
        Union[datetime.datetime, datetime.date, None],
        BeforeValidator(parse_date_and_datetime),
    ] = None
    """Exclusive end of the event, the same value type as `dtstart`."""

    duration: Optional[datetime.timedelta] = None
    """Length of the event when `dtend` is not set."""

    summary: str = ""
    description: Optional[str] = None
    location: Optional[str] = None
    categories: list[str] = Field(default_factory=list)
    sequence: Optional[int] = None
    status: Optional[EventStatus] = None

    transparency: Optional[str] = Field(alias="transp", default=None)
    """OPAQUE or TRANSPARENT to busy time searches."""

    def __init__(self, **data: Any) -> None:
        """Initialize Event, accepting `start` and `end` keywords."""
        if "start" in data:
            data["dtstart"] = data.pop("start")
        if "end" in data:
            data["dtend"] = data.pop("end")
        super().__init__(**data)

    @property
    def start(self) -> datetime.datetime | datetime.date | None:
        """Return the start of the event."""
        return self.dtstart

    @property
    def end(self) -> datetime.datetime | datetime.date | None:
        """Return the end of the event.

        An event without an end or duration lasts for the whole day when it
        is an all day event, and is instantaneous otherwise.
        """
        if self.dtstart is None:
            return self.dtend
        if self.duration:
            return self.dtstart + self.duration
        if self.dtend:
            return self.dtend
        if isinstance(self.dtstart, datetime.datetime):
            return self.dtstart
        return self.dtstart + datetime.timedelta(days=1)

    @property
    def computed_duration(self) -> datetime.timedelta | None:
        """Return the length of the event."""
        if self.duration is not None:
            return self.duration
        if self.dtstart is None or (end := self.end) is None:
            return None
        return end - self.dtstart

    @model_validator(mode="after")
    def validate_end_type(self) -> Self:
        """Validate that dtstart and dtend have matching value types."""
        if not (dtstart := self.dtstart) or not (dtend := self.dtend):
            return self
        start_is_datetime = isinstance(dtstart, datetime.datetime)
        if start_is_datetime != isinstance(dtend, datetime.datetime):
            _LOGGER.debug("Mismatched dtstart=%s dtend=%s", dtstart, dtend)
            start_kind = "datetime" if start_is_datetime else "date"
            end_kind = "not datetime" if start_is_datetime else "datetime"
            raise ValueError(
                f"Unexpected dtstart value '{dtstart}' was {start_kind} but "
                f"dtend value '{dtend}' was {end_kind}"
            )
        if not isinstance(dtstart, datetime.datetime) or not isinstance(
            dtend, datetime.datetime
        ):
            return self
        if dtstart.tzinfo is None and dtend.tzinfo is not None:
            raise ValueError(
                f"Expected end datetime value in localtime but was {dtend}"
            )
        if dtstart.tzinfo is not None and dtend.tzinfo is None:
            raise ValueError(f"Expected end datetime with timezone but was {dtend}")
        return self

    @model_validator(mode="after")
    def validate_duration(self) -> Self:
        """Validate the duration is positive and the only end of the event."""
        if (duration := self.duration) is None:
            return self
        if self.dtend:
            raise ValueError("Only one of dtend or duration may be set.")
        if duration < datetime.timedelta(0):
            raise ValueError(f"Expected duration to be positive but was {duration}")
        if type(self.dtstart) is datetime.date and duration.seconds:
            raise ValueError("Event with start date expects duration in days only")
        return self
