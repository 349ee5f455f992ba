"""Enumeration of the occurrences of a recurring component.

An `EnumerationInstance` holds the values needed during one enumeration of
occurrences for a component. The occurrences generated by the recurrence rules
and dates of the component are merged into a single sorted stream, and the
occurrences generated by the exclusion rules and dates are merged into a
second stream that is walked in parallel to remove excluded instances.

The occurrences are produced lazily. Some components may be open-ended
(e.g. have a recurrence rule without COUNT or UNTIL) in which case the
caller must either stop consuming, or supply a `before` or `count` limit.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, TypeVar

from .exceptions import UnboundedRecurrenceError
from .iter import OccurrenceMerger, RuleEnumerator
from .occurrence import Occurrence
from .recur_adapter import RecurAdapter

if TYPE_CHECKING:
    from .component import RecurringComponent

__all__ = ["EnumerationInstance"]

_LOGGER = logging.getLogger(__name__)

ItemType = TypeVar("ItemType", bound="RecurringComponent")


class EnumerationInstance(Iterable[ItemType]):
    """A single pass over the occurrences of a component.

    The options limit the occurrences returned:
      - `starting`: no occurrences starting before this value are returned.
      - `before`: no occurrences starting on or after this value are returned.
      - `count`: limits the number of occurrences returned.

    An instance owns its rule enumerators and may only be iterated once.
    """

    def __init__(
        self,
        component: ItemType,
        starting: datetime.datetime | datetime.date | None = None,
        before: datetime.datetime | datetime.date | None = None,
        count: int | None = None,
    ) -> None:
        """Initialize EnumerationInstance."""
        self._component = component
        self._start = starting
        self._cutoff = before
        self._count = count
        self._rrules: RuleEnumerator = OccurrenceMerger.for_rules(
            component, component.inclusion_rules()
        )
        self._exrules: RuleEnumerator = OccurrenceMerger.for_rules(
            component, component.exclusion_rules()
        )
        self._next_exclusion: Occurrence | None = None
        self._adapter = RecurAdapter(component)
        _LOGGER.debug(
            "Enumerating %s (starting=%s, before=%s, count=%s) "
            "with rules=%s, exclusions=%s",
            type(component).__name__,
            starting,
            before,
            count,
            self._rrules,
            self._exrules,
        )

    def exclusion_for(self, occurrence: Occurrence) -> Occurrence | None:
        """Return the next exclusion starting at or after the occurrence start.

        Returns None if this exhausts the exclusion rules.
        """
        while self._next_exclusion is not None and self._next_exclusion.starts_before(
            occurrence.start
        ):
            self._next_exclusion = self._exrules.next_occurrence()
        return self._next_exclusion

    def exclude(self, occurrence: Occurrence) -> bool:
        """Return True if the occurrence is removed by an exclusion."""
        if (exclusion := self.exclusion_for(occurrence)) is None:
            return False
        # The exclusion does not start before the occurrence here
        return not occurrence.starts_before(exclusion.start)

    def __iter__(self) -> Iterator[ItemType]:
        """Return an iterator over the occurrences in chronological order."""
        yielded = 0
        self._next_exclusion = self._exrules.next_occurrence()
        while (occurrence := self._rrules.next_occurrence()) is not None:
            if (
                self._cutoff is not None and not occurrence.starts_before(self._cutoff)
            ) or (self._count is not None and yielded >= self._count):
                return
            if self._start is not None and occurrence.starts_before(self._start):
                continue
            if self.exclude(occurrence):
                _LOGGER.debug("Occurrence %s excluded", occurrence.start)
                continue
            yielded += 1
            yield self._adapter.get(occurrence)

    @property
    def bounded(self) -> bool:
        """Return True if the enumeration produces a finite number of occurrences."""
        return (
            self._rrules.bounded or self._count is not None or self._cutoff is not None
        )

    def to_list(self) -> list[ItemType]:
        """Return all occurrences as a list.

        An UnboundedRecurrenceError is raised if the component is not bounded
        and the occurrences are not limited by `before` or `count`.
        """
        if not self.bounded:
            raise UnboundedRecurrenceError(
                f"This {type(self._component).__name__} is unbounded, "
                "cannot produce a list of occurrences"
            )
        return list(self)

    entries = to_list
