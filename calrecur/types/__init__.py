"""Library for value types used by recurring calendar components."""

from .period import Period
from .recur import Frequency, Recur, Weekday, WeekdayValue

__all__ = [
    "Frequency",
    "Period",
    "Recur",
    "Weekday",
    "WeekdayValue",
]
