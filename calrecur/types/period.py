"""Library for PERIOD values used as explicit recurrence dates."""

from __future__ import annotations

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator


class Period(BaseModel):
    """A value with a precise period of time.

    A recurrence date may be a period, in which case the occurrence it
    produces has its own end rather than the duration of the component.
    """

    start: datetime.datetime
    """Start of the period of time."""

    end: Optional[datetime.datetime] = None
    """End of the period of the time (duration is implicit)."""

    duration: Optional[datetime.timedelta] = None
    """Duration of the period of time (end time is implicit)."""

    model_config = ConfigDict(frozen=True)

    @property
    def end_value(self) -> datetime.datetime:
        """A computed end value based on either or duration."""
        if self.end:
            return self.end
        if not self.duration:
            raise ValueError("Invalid period missing both end and duration")
        return self.start + self.duration

    @model_validator(mode="after")
    def validate_end_or_duration(self) -> Period:
        """Validate that exactly one of end or duration is set."""
        if self.end is None and self.duration is None:
            raise ValueError(f"Period must have an end or duration: {self.start}")
        if self.end is not None and self.duration is not None:
            raise ValueError("Only one of end or duration may be set")
        if self.end_value < self.start:
            raise ValueError(f"Period end must not be before start: {self.start}")
        return self
