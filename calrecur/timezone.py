"""A grouping of component properties that define a timezone observance.

A timezone is described by a set of observances (standard time and daylight
saving time) each with a recurring onset. The onsets of an observance are
enumerated like any other recurring component. Computing the offset in effect
at a given time is not handled here.
"""

from __future__ import annotations

import datetime
import enum
from typing import Any, Self

from pydantic import Field, model_validator

from .component import RecurringComponent

__all__ = [
    "Observance",
    "ObservanceType",
]


class ObservanceType(str, enum.Enum):
    """Type of a timezone observance."""

    STANDARD = "STANDARD"
    DAYLIGHT = "DAYLIGHT"


class Observance(RecurringComponent):
    """A sub-component with properties for a set of timezone observances.

    The occurrences of an observance are the onsets of the observance, for
    example the start of daylight saving time each year.
    """

    observance_type: ObservanceType = ObservanceType.STANDARD
    """Whether this observance describes standard or daylight saving time."""

    tz_offset_to: datetime.timedelta = Field(alias="tzoffsetto")
    """Gives the UTC offset for the time zone when this observance is in use."""

    tz_offset_from: datetime.timedelta = Field(alias="tzoffsetfrom")
    """UTC offset in use just before each onset.

    Together with dtstart this gives the UTC instant of the onset.
    """

    tz_name: list[str] = Field(alias="tzname", default_factory=list)
    """A name for the observance."""

    comment: list[str] = Field(default_factory=list)
    """Descriptive explanatory text."""

    def __init__(self, **data: Any) -> None:
        """Initialize Observance."""
        if "start" in data:
            data["dtstart"] = data.pop("start")
        super().__init__(**data)

    @model_validator(mode="after")
    def verify_dtstart_local_time(self) -> Self:
        """Validate that dtstart is specified in a local time."""
        if (value := self.dtstart) is None:
            raise ValueError("Observance requires that dtstart is specified")
        if not isinstance(value, datetime.datetime):
            raise ValueError(f"Start time must be a date and time: {value}")
        if value.utcoffset() is not None:
            raise ValueError(f"Start time must be in local time format: {value}")
        return self
