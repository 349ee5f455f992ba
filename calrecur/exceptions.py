"""Exceptions for calrecur library."""


class CalendarError(Exception):
    """Base exception for all calrecur errors."""


class CalendarParseError(CalendarError):
    """Exception raised when building a component or rule from its values.

    The 'message' attribute contains a human-readable message about the
    error that occurred. The 'detailed_error' attribute can provide additional
    information about the error, such as the underlying validation errors,
    useful for debugging purposes.
    """

    def __init__(self, message: str, *, detailed_error: str | None = None) -> None:
        """Initialize the CalendarParseError with a message."""
        super().__init__(message)
        self.message = message
        self.detailed_error = detailed_error


class RecurrenceError(CalendarError):
    """Exception raised when evaluating a recurrence rule.

    Recurrence rules have complex logic and it is common for there to be
    invalid dates or bugs, so this special exception exists to help
    provide additional debug data to find the source of the issue. Often
    `dateutil.rrule` has limitations, or dates of different kinds are
    merged together and can't be compared.
    """


class UnboundedRecurrenceError(RecurrenceError, ValueError):
    """Exception raised when realizing all occurrences of an unbounded component.

    A component with a recurrence rule that has no COUNT or UNTIL has an
    infinite set of occurrences. The caller can instead supply a `count` or
    `before` limit, or consume the occurrences lazily.
    """
