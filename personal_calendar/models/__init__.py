from .enums import Visibility, DayOfWeek
from .errors import (
    CalendarError,
    EventValidationError,
    DuplicateEventError,
    EventConflictError,
    EventNotFoundError,
    NotRecurringEventError,
    CsvRowError,
)
from .common import parse_date, parse_time, format_time
from .event import Event, EventBuilder, validate_event_fields

__all__ = [
    "Visibility",
    "DayOfWeek",
    "CalendarError",
    "EventValidationError",
    "DuplicateEventError",
    "EventConflictError",
    "EventNotFoundError",
    "NotRecurringEventError",
    "CsvRowError",
    "parse_date",
    "parse_time",
    "format_time",
    "Event",
    "EventBuilder",
    "validate_event_fields",
]
