"""A grouping of component properties that describe a to-do."""

from __future__ import annotations

import datetime
import enum
from typing import Annotated, Any, ClassVar, Optional, Self, Union

from pydantic import BeforeValidator, Field, model_validator

from .component import RecurringComponent
from .util import dtstamp_factory, parse_date_and_datetime, uid_factory

__all__ = ["Todo", "TodoStatus"]


class TodoStatus(str, enum.Enum):
    """Status or confirmation of the to-do."""

    NEEDS_ACTION = "NEEDS-ACTION"
    COMPLETED = "COMPLETED"
    IN_PROCESS = "IN-PROCESS"
    CANCELLED = "CANCELLED"


class Todo(RecurringComponent):
    """A calendar todo component.

    The end of a recurring to-do is its due date, so each occurrence is due
    the same amount of time after its start as the original to-do.
    """

    end_property: ClassVar[Optional[str]] = "due"

    dtstamp: Union[datetime.datetime, datetime.date] = Field(
        default_factory=dtstamp_factory
    )
    uid: str = Field(default_factory=lambda: uid_factory())

    completed: Optional[datetime.datetime] = None
    description: Optional[str] = None
    due: Annotated[
        Union[datetime.datetime, datetime.date, None],
        BeforeValidator(parse_date_and_datetime),
    ] = None
    duration: Optional[datetime.timedelta] = None
    location: str = ""
    percent: Optional[int] = None
    sequence: Optional[int] = None
    status: Optional[TodoStatus] = None
    summary: Optional[str] = None

    def __init__(self, **data: Any) -> None:
        """Initialize Todo."""
        if "start" in data:
            data["dtstart"] = data.pop("start")
        super().__init__(**data)

    @property
    def start(self) -> datetime.datetime | datetime.date | None:
        """Return the start time for the todo."""
        return self.dtstart

    @model_validator(mode="after")
    def validate_one_due_or_duration(self) -> Self:
        """Validate that only one of duration or due date may be set."""
        if self.due and self.duration:
            raise ValueError("Only one of due or duration may be set.")
        return self

    @model_validator(mode="after")
    def validate_duration_requires_start(self) -> Self:
        """Validate that a duration has a start to be relative to."""
        if self.duration and not self.dtstart:
            raise ValueError("Duration requires that dtstart is specified")
        return self
