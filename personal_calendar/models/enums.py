# File: personal_calendar/models/enums.py

from enum import Enum, IntEnum


class Visibility(Enum):
    """Who may see an event."""
    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"


class DayOfWeek(IntEnum):
    """Days of the week, numbered like date.weekday()."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6
    
    @classmethod
    def of(cls, day) -> 'DayOfWeek':
        """Get the DayOfWeek for a date."""
        return cls(day.weekday())
    
    @classmethod
    def parse(cls, value) -> 'DayOfWeek':
        """Convert a member, weekday int or day name ("Mon", "monday") to a DayOfWeek."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            clean = value.strip().upper()
            for member in cls:
                if clean and member.name.startswith(clean) and len(clean) >= 2:
                    return member
        raise ValueError(f"Unknown day of week: {value!r}")
