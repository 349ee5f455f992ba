"""A grouping of component properties that describe a journal entry."""

# pylint: disable=unnecessary-lambda

from __future__ import annotations

import datetime
import enum
from typing import Annotated, Any, Optional, Union

from pydantic import BeforeValidator, Field

from .component import RecurringComponent
from .util import dtstamp_factory, parse_date_and_datetime, uid_factory

__all__ = ["Journal", "JournalStatus"]


class JournalStatus(str, enum.Enum):
    """Status or confirmation of the journal entry."""

    DRAFT = "DRAFT"
    FINAL = "FINAL"
    CANCELLED = "CANCELLED"


class Journal(RecurringComponent):
    """A single journal entry on a calendar.

    A journal entry consists of one or more text notes associated with a
    specific calendar date. A journal entry has no end, so each occurrence of
    a recurring entry only has a start.

    The uid and dtstamp defaults go through a lambda so tests can patch them.
    """

    dtstamp: Annotated[
        Union[datetime.date, datetime.datetime],
        BeforeValidator(parse_date_and_datetime),
    ] = Field(default_factory=lambda: dtstamp_factory())
    uid: str = Field(default_factory=lambda: uid_factory())
    categories: list[str] = Field(default_factory=list)
    comment: list[str] = Field(default_factory=list)
    description: Optional[str] = None
    sequence: Optional[int] = None
    status: Optional[JournalStatus] = None
    summary: Optional[str] = None

    def __init__(self, **data: Any) -> None:
        """Initialize Journal."""
        if "start" in data:
            data["dtstart"] = data.pop("start")
        super().__init__(**data)

    @property
    def start(self) -> datetime.datetime | datetime.date | None:
        """Return the start time for the journal entry."""
        return self.dtstart
