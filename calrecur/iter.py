"""Library for iterators used in calrecur.

These iterators are primarily used for implementing recurrence rules where a
component should be returned for a series of date/times. A component may have
multiple recurrence rules and recurrence dates, and they need to be handled
together as a single view of recurring date/times.

Each rule of a component is expanded by a `RuleEnumerator` which produces
`Occurrence` values in sorted order, one at a time, and reports whether it
will ever run out. An `OccurrenceMerger` combines the enumerators of many
rules into a single sorted stream that is itself a `RuleEnumerator`.

Most of the things in this library should not be consumed directly by calendar
users, but instead are used behind the scenes by the components. These
internals may be subject to a higher degree of backwards incompatibility due
to the internal nature.
"""

from __future__ import annotations

import datetime
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from .exceptions import RecurrenceError
from .occurrence import Occurrence
from .types.period import Period
from .types.recur import Recur

if TYPE_CHECKING:
    from .component import RecurringComponent

__all__ = [
    "RuleEnumerator",
    "EmptyRulesEnumerator",
    "RecurEnumerator",
    "DateListEnumerator",
    "OccurrenceMerger",
    "RecurrenceDates",
    "Rule",
    "rule_enumerator",
]

RecurrenceDate = Union[datetime.datetime, datetime.date, Period]


@dataclass
class RecurrenceDates:
    """An explicit list of recurrence dates treated as a single rule.

    These are the values of the RDATE or EXDATE properties of a component.
    """

    values: Sequence[RecurrenceDate] = field(default_factory=list)


Rule = Union[Recur, RecurrenceDates]
"""A rule that produces a series of occurrences for a component."""


class RuleEnumerator(ABC):
    """Produces the occurrences of a single rule in sorted order.

    Enumeration is forward only: once an occurrence is returned it is never
    returned again. After the rule is exhausted every call returns None.
    """

    @abstractmethod
    def next_occurrence(self) -> Occurrence | None:
        """Return the next occurrence or None when exhausted."""

    @property
    @abstractmethod
    def bounded(self) -> bool:
        """Return True if the rule is known to produce a finite number of values."""

    def __iter__(self) -> Iterator[Occurrence]:
        """Return an iterator consuming the remaining occurrences."""
        while (occurrence := self.next_occurrence()) is not None:
            yield occurrence


class EmptyRulesEnumerator(RuleEnumerator):
    """An enumerator for a component without any rules."""

    def next_occurrence(self) -> Occurrence | None:
        """Return None as there are no occurrences."""
        return None

    @property
    def bounded(self) -> bool:
        """An empty set of rules is always bounded."""
        return True

    def __repr__(self) -> str:
        return "EmptyRulesEnumerator()"


class RecurEnumerator(RuleEnumerator):
    """A wrapper around `dateutil.rrule` to enumerate a `Recur` rule.

    The `dateutil.rrule` library does not allow iteration in terms of dates
    and will convert all input values to datetime even if the input value is
    a date. If needed, values are converted back to a date so that
    comparisons with recurrence dates are in the right format.
    """

    def __init__(self, rule: Recur, dtstart: datetime.datetime | datetime.date) -> None:
        """Initialize RecurEnumerator."""
        self._rule = rule
        self._dtstart = dtstart
        self._all_day = not isinstance(dtstart, datetime.datetime)
        self._iter: Iterator[datetime.datetime] | None = None
        self._exhausted = False

    def next_occurrence(self) -> Occurrence | None:
        """Return the next occurrence of the rule."""
        if self._exhausted:
            return None
        try:
            if self._iter is None:
                self._iter = iter(self._rule.as_rrule(self._dtstart))
            value: datetime.datetime | datetime.date = next(self._iter)
        except StopIteration:
            self._exhausted = True
            return None
        except (TypeError, ValueError) as err:
            raise RecurrenceError(
                f"Error evaluating recurrence rule ({self}): {str(err)}"
            ) from err
        if self._all_day:
            value = datetime.date.fromordinal(value.toordinal())
        return Occurrence(value)

    @property
    def bounded(self) -> bool:
        """Return True if the rule has a count or until."""
        return self._rule.bounded

    def __repr__(self) -> str:
        return (
            f"RecurEnumerator(dtstart={self._dtstart}, "
            f"rrule={self._rule.as_rrule_str()})"
        )


class DateListEnumerator(RuleEnumerator):
    """An enumerator over an explicit list of dates, times or periods."""

    def __init__(self, values: Iterable[RecurrenceDate]) -> None:
        """Initialize DateListEnumerator."""
        occurrences = [_as_occurrence(value) for value in values]
        try:
            occurrences.sort()
        except TypeError as err:
            raise RecurrenceError(
                f"Error sorting recurrence dates ({occurrences}): {str(err)}"
            ) from err
        self._occurrences = occurrences
        self._index = 0

    def next_occurrence(self) -> Occurrence | None:
        """Return the next occurrence from the list."""
        if self._index >= len(self._occurrences):
            return None
        occurrence = self._occurrences[self._index]
        self._index += 1
        return occurrence

    @property
    def bounded(self) -> bool:
        """An explicit list of dates is always bounded."""
        return True

    def __repr__(self) -> str:
        return f"DateListEnumerator({[o.start for o in self._occurrences]})"


def _as_occurrence(value: RecurrenceDate) -> Occurrence:
    if isinstance(value, Period):
        return Occurrence(value.start, value.end_value)
    return Occurrence(value)


def rule_enumerator(component: RecurringComponent, rule: Rule) -> RuleEnumerator:
    """Return an enumerator for a single rule of the component."""
    if isinstance(rule, RecurrenceDates):
        return DateListEnumerator(rule.values)
    if component.dtstart is None:
        raise RecurrenceError(
            f"{type(component).__name__} must have a start date to be recurring"
        )
    return RecurEnumerator(rule, component.dtstart)


class OccurrenceMerger(RuleEnumerator):
    """Enumerates the combination of multiple rules in sequence.

    Each rule holds at most one pending occurrence (the front). The merged
    stream returns the earliest front. When multiple rules have a front with
    the same start they are all advanced, so that coincident occurrences are
    only returned once.
    """

    def __init__(self, enumerators: list[RuleEnumerator]) -> None:
        """Initialize OccurrenceMerger."""
        self._enumerators = enumerators
        self._bounded = all(enumerator.bounded for enumerator in enumerators)
        self._nexts = [enumerator.next_occurrence() for enumerator in enumerators]

    @classmethod
    def for_rules(
        cls, component: RecurringComponent, rules: Sequence[Rule]
    ) -> RuleEnumerator:
        """Return an enumerator over the combined set of rules."""
        if not rules:
            return EmptyRulesEnumerator()
        if len(rules) == 1:
            return rule_enumerator(component, rules[0])
        return cls([rule_enumerator(component, rule) for rule in rules])

    def next_occurrence(self) -> Occurrence | None:
        """Return the earliest of each of the enumerators next occurrences."""
        try:
            result = min(
                (occurrence for occurrence in self._nexts if occurrence is not None),
                default=None,
            )
        except TypeError as err:
            raise RecurrenceError(
                f"Error merging recurrence rules ({self}): {str(err)}"
            ) from err
        if result is None:
            return None
        for index, occurrence in enumerate(self._nexts):
            if occurrence is not None and occurrence.start == result.start:
                self._nexts[index] = self._enumerators[index].next_occurrence()
        return result

    @property
    def bounded(self) -> bool:
        """Return True if every rule is bounded."""
        return self._bounded

    def __repr__(self) -> str:
        return f"OccurrenceMerger({self._enumerators})"
