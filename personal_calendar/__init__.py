"""
Personal calendar: events, conflict-free calendars, weekly recurring
series and CSV persistence.
"""

from .models import (
    Visibility,
    DayOfWeek,
    CalendarError,
    EventValidationError,
    DuplicateEventError,
    EventConflictError,
    EventNotFoundError,
    NotRecurringEventError,
    Event,
)
from .core.calendar import Calendar
from .core.listeners import CalendarListener

__version__ = "0.1.0"

__all__ = [
    "Visibility",
    "DayOfWeek",
    "CalendarError",
    "EventValidationError",
    "DuplicateEventError",
    "EventConflictError",
    "EventNotFoundError",
    "NotRecurringEventError",
    "Event",
    "Calendar",
    "CalendarListener",
]
