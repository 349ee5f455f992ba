"""Library for parsing and encoding DATE and DATE-TIME values in rule text."""

from __future__ import annotations

import datetime
import logging
import re

_LOGGER = logging.getLogger(__name__)


DATETIME_REGEX = re.compile(r"^([0-9]{8})T([0-9]{6})(Z)?$")
DATE_REGEX = re.compile(r"^([0-9]{8})$")


def _parse_date(value: str) -> datetime.date:
    year = int(value[0:4])
    month = int(value[4:6])
    day = int(value[6:])
    return datetime.date(year, month, day)


def parse_date_value(value: str) -> datetime.datetime | datetime.date:
    """Parse a rfc5545 DATE or DATE-TIME value.

    A value ending in 'Z' is returned in UTC, otherwise a DATE-TIME is a
    floating local time.
    """
    if match := DATE_REGEX.fullmatch(value):
        result: datetime.datetime | datetime.date = _parse_date(match.group(1))
        _LOGGER.debug("Parsed date value %s", result)
        return result
    if not (match := DATETIME_REGEX.fullmatch(value)):
        raise ValueError(f"Expected value to match DATE or DATE-TIME pattern: {value}")
    date_value = _parse_date(match.group(1))
    time_value = match.group(2)
    hour = int(time_value[0:2])
    minute = int(time_value[2:4])
    second = int(time_value[4:6])
    timezone = datetime.timezone.utc if match.group(3) else None
    result = datetime.datetime.combine(
        date_value, datetime.time(hour, minute, second), tzinfo=timezone
    )
    _LOGGER.debug("Parsed date time value %s", result)
    return result


def encode_date_value(value: datetime.datetime | datetime.date) -> str:
    """Encode a date or datetime as a rfc5545 value."""
    if not isinstance(value, datetime.datetime):
        return value.strftime("%Y%m%d")
    if value.tzinfo is None:
        return value.strftime("%Y%m%dT%H%M%S")
    if value.utcoffset():
        value = value.astimezone(datetime.timezone.utc)
    return value.strftime("%Y%m%dT%H%M%SZ")
