"""Materializes occurrences of a recurring component.

An accepted `Occurrence` is turned into a standalone copy of the component
it came from. The copy is no longer recurring: its recurrence rules and
dates are cleared, and its start, end and recurrence id describe the single
instance.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar, cast

from .occurrence import Occurrence

if TYPE_CHECKING:
    from .component import RecurringComponent

__all__ = ["RecurAdapter"]

_LOGGER = logging.getLogger(__name__)

ItemType = TypeVar("ItemType", bound="RecurringComponent")


class RecurAdapter(Generic[ItemType]):
    """An adapter that expands a component instance for an occurrence.

    This adapter is given a component, then invoked with a specific occurrence
    of that component due to a recurrence rule or date. The component is copied
    with necessary updated fields to act as a flattened instance.
    """

    def __init__(self, item: ItemType) -> None:
        """Initialize the RecurAdapter."""
        self._item = item
        self._duration = item.default_duration

    def get(self, occurrence: Occurrence) -> ItemType:
        """Return a copy of the component for the specified occurrence."""
        updates: dict[str, Any] = {
            "rrule": [],
            "exrule": [],
            "rdate": [],
            "exdate": [],
            "recurrence_id": occurrence.start,
            "dtstart": occurrence.start,
        }
        if end_field := self._item.end_property:
            if occurrence.end is not None:
                updates[end_field] = occurrence.end
                if "duration" in type(self._item).model_fields:
                    updates["duration"] = None
            elif self._duration is not None:
                updates[end_field] = occurrence.start + self._duration
        _LOGGER.debug("Materializing occurrence %s", occurrence)
        return cast(ItemType, self._item.model_copy(update=updates, deep=True))
