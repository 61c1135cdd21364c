# File: personal_calendar/models/errors.py
"""
Exception types raised by the calendar model.

Everything derives from ValueError so callers that only care about
"the input was rejected" can catch a single type.
"""


class CalendarError(ValueError):
    """Base class for rejected calendar operations."""


class EventValidationError(CalendarError):
    """An event's fields break one of its invariants."""


class DuplicateEventError(CalendarError):
    """An event with the same subject, start date and start time already exists."""


class EventConflictError(CalendarError):
    """An event's time interval overlaps an existing event."""


class EventNotFoundError(CalendarError):
    """The event is not a member of the calendar."""
    
    def __init__(self, message: str = "Event is not in this calendar"):
        super().__init__(message)


class NotRecurringEventError(CalendarError):
    """The event does not belong to any recurring series."""
    
    def __init__(self, message: str = "Event is not part of a recurring series"):
        super().__init__(message)


class CsvRowError(CalendarError):
    """A CSV row could not be turned into an event."""
    
    def __init__(self, message: str, line_number: int = None):
        self.line_number = line_number
        super().__init__(message)
    
    def __str__(self) -> str:
        if self.line_number is not None:
            return f"Line {self.line_number}: {self.args[0]}"
        return self.args[0]
