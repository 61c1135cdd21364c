# File: personal_calendar/models/event.py
"""
Calendar event model.

An Event is identified by its (subject, start date, start time) triple for
equality and duplicate detection. Each instance additionally carries a
generated uid that stays the same for the life of the object and is used
wherever "this very record" matters (recurring series membership).
"""

import uuid
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Optional, Tuple

from .enums import Visibility
from .errors import EventValidationError

_FIELDS = (
    'subject', 'start_date', 'end_date', 'start_time', 'end_time',
    'visibility', 'description', 'location',
)


def _resolve_end_date(start_date: Optional[date], end_date: Optional[date],
                      start_time: Optional[time]) -> Optional[date]:
    """All-day events without an end date end on their start date."""
    if start_time is None and end_date is None:
        return start_date
    return end_date


def validate_event_fields(
    subject: Optional[str],
    start_date: Optional[date],
    end_date: Optional[date],
    start_time: Optional[time],
    end_time: Optional[time]
) -> None:
    """
    Check the invariants that every event must satisfy.

    Rules are checked in a fixed order and the first broken one is reported.

    Raises:
        EventValidationError: naming the broken rule
    """
    if subject is None or not subject.strip():
        raise EventValidationError("Subject cannot be null or blank")
    if start_date is None:
        raise EventValidationError("Start date cannot be null")
    if start_time is None and end_time is not None:
        raise EventValidationError("End time cannot be set without a start time")
    if start_time is not None and end_date is None:
        raise EventValidationError("End date is required when a start time is set")
    if start_time is not None and end_time is None:
        raise EventValidationError("End time is required when a start time is set")
    if end_date is not None and end_date < start_date:
        raise EventValidationError("End date cannot be before start date")
    if (start_time is not None and end_time is not None
            and start_date == end_date and end_time < start_time):
        raise EventValidationError("End time cannot be before start time on the same day")


class Event:
    """
    A single calendar entry: a timed interval or a whole-day span.

    Field setters re-validate the whole event and leave it unchanged when
    the new value would break an invariant.
    """

    def __init__(
        self,
        subject: str,
        start_date: date,
        end_date: Optional[date] = None,
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
        visibility: Visibility = Visibility.PUBLIC,
        description: Optional[str] = None,
        location: Optional[str] = None
    ):
        if visibility is None:
            visibility = Visibility.PUBLIC
        end_date = _resolve_end_date(start_date, end_date, start_time)
        validate_event_fields(subject, start_date, end_date, start_time, end_time)

        self._uid = uuid.uuid4().hex
        self._subject = subject
        self._start_date = start_date
        self._end_date = end_date
        self._start_time = start_time
        self._end_time = end_time
        self._visibility = Visibility(visibility)
        self._description = description
        self._location = location

    @staticmethod
    def builder(subject: str, start_date: date) -> 'EventBuilder':
        """Start building an event with its two required fields."""
        return EventBuilder(subject, start_date)

    # ==================== Identity ====================

    @property
    def uid(self) -> str:
        """Generated identifier of this particular record."""
        return self._uid

    @property
    def key(self) -> Tuple[str, date, Optional[time]]:
        """The (subject, start date, start time) identity key."""
        return (self._subject, self._start_date, self._start_time)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    # ==================== Fields ====================

    @property
    def subject(self) -> str:
        return self._subject

    @subject.setter
    def subject(self, value: str) -> None:
        self.update(subject=value)

    @property
    def start_date(self) -> date:
        return self._start_date

    @start_date.setter
    def start_date(self, value: date) -> None:
        self.update(start_date=value)

    @property
    def end_date(self) -> date:
        return self._end_date

    @end_date.setter
    def end_date(self, value: Optional[date]) -> None:
        self.update(end_date=value)

    @property
    def start_time(self) -> Optional[time]:
        return self._start_time

    @start_time.setter
    def start_time(self, value: Optional[time]) -> None:
        self.update(start_time=value)

    @property
    def end_time(self) -> Optional[time]:
        return self._end_time

    @end_time.setter
    def end_time(self, value: Optional[time]) -> None:
        self.update(end_time=value)

    @property
    def visibility(self) -> Visibility:
        return self._visibility

    @visibility.setter
    def visibility(self, value: Visibility) -> None:
        self.update(visibility=value)

    @property
    def description(self) -> Optional[str]:
        return self._description

    @description.setter
    def description(self, value: Optional[str]) -> None:
        self._description = value

    @property
    def location(self) -> Optional[str]:
        return self._location

    @location.setter
    def location(self, value: Optional[str]) -> None:
        self._location = value

    def update(self, **changes: Any) -> None:
        """
        Apply several field changes at once, validating only the final result.

        Useful when moving a timed event, where changing start and end time
        one at a time could pass through an invalid state.

        Raises:
            EventValidationError: if the resulting event is invalid (nothing is changed)
            ValueError: if visibility is set to None
            TypeError: for unknown field names
        """
        unknown = set(changes) - set(_FIELDS)
        if unknown:
            raise TypeError(f"Unknown event field(s): {', '.join(sorted(unknown))}")

        if 'visibility' in changes:
            if changes['visibility'] is None:
                raise ValueError("Visibility cannot be null")
            changes['visibility'] = Visibility(changes['visibility'])

        candidate = self.to_fields()
        candidate.update(changes)
        candidate['end_date'] = _resolve_end_date(
            candidate['start_date'], candidate['end_date'], candidate['start_time']
        )
        validate_event_fields(
            candidate['subject'],
            candidate['start_date'],
            candidate['end_date'],
            candidate['start_time'],
            candidate['end_time'],
        )
        self._assign(candidate)

    def to_fields(self) -> Dict[str, Any]:
        """Snapshot of all mutable fields, suitable for update(**fields)."""
        return {name: getattr(self, f"_{name}") for name in _FIELDS}

    def _assign(self, fields: Dict[str, Any]) -> None:
        for name in _FIELDS:
            setattr(self, f"_{name}", fields[name])

    # ==================== Interval ====================

    def is_all_day(self) -> bool:
        """An event without a start time spans whole days."""
        return self._start_time is None

    @property
    def start_datetime(self) -> datetime:
        """Inclusive start instant."""
        if self.is_all_day():
            return datetime.combine(self._start_date, time.min)
        return datetime.combine(self._start_date, self._start_time)

    @property
    def end_datetime(self) -> datetime:
        """Exclusive end instant."""
        if self.is_all_day():
            return datetime.combine(self._end_date + timedelta(days=1), time.min)
        return datetime.combine(self._end_date, self._end_time)

    def conflicts_with(self, other: 'Event') -> bool:
        """Check if the half-open intervals of two events overlap."""
        return (self.start_datetime < other.end_datetime
                and other.start_datetime < self.end_datetime)

    def contains(self, moment: datetime) -> bool:
        """Check if a moment falls within [start, end)."""
        return self.start_datetime <= moment < self.end_datetime

    def occurs_on(self, day: date) -> bool:
        """Date-only check, ignoring time of day."""
        return self._start_date <= day <= self._end_date

    def overlaps_dates(self, start: date, end: date) -> bool:
        """Date-only check against an inclusive date range."""
        return not (self._end_date < start or self._start_date > end)

    def duration_minutes(self) -> int:
        """Calculate event duration in minutes."""
        return int((self.end_datetime - self.start_datetime).total_seconds() / 60)

    # ==================== Representation ====================

    def to_dict(self) -> dict:
        """Convert to dictionary for display or JSON output."""
        return {
            'uid': self._uid,
            'subject': self._subject,
            'start_date': self._start_date.isoformat(),
            'end_date': self._end_date.isoformat(),
            'start_time': self._start_time.isoformat() if self._start_time else None,
            'end_time': self._end_time.isoformat() if self._end_time else None,
            'all_day': self.is_all_day(),
            'visibility': self._visibility.value,
            'description': self._description,
            'location': self._location,
        }

    def __str__(self) -> str:
        parts = [f"subject={self._subject}", f"startDate={self._start_date}"]
        if self.is_all_day():
            parts.append(f"endDate={self._end_date} (All-Day)")
        else:
            parts.append(f"startTime={self._start_time.strftime('%H:%M')}")
            parts.append(f"endDate={self._end_date}")
            parts.append(f"endTime={self._end_time.strftime('%H:%M')}")
        parts.append(f"visibility={self._visibility.value}")
        if self._description:
            parts.append(f"description={self._description}")
        if self._location:
            parts.append(f"location={self._location}")
        return f"Event[{', '.join(parts)}]"

    def __repr__(self) -> str:
        return (f"Event(subject={self._subject!r}, start_date={self._start_date}, "
                f"start_time={self._start_time}, uid={self._uid[:8]})")


class EventBuilder:
    """Collects event fields and validates them once in build()."""

    def __init__(self, subject: str, start_date: date):
        self._fields: Dict[str, Any] = {
            'subject': subject,
            'start_date': start_date,
            'end_date': None,
            'start_time': None,
            'end_time': None,
            'visibility': Visibility.PUBLIC,
            'description': None,
            'location': None,
        }

    def end_date(self, value: Optional[date]) -> 'EventBuilder':
        self._fields['end_date'] = value
        return self

    def start_time(self, value: Optional[time]) -> 'EventBuilder':
        self._fields['start_time'] = value
        return self

    def end_time(self, value: Optional[time]) -> 'EventBuilder':
        self._fields['end_time'] = value
        return self

    def visibility(self, value: Visibility) -> 'EventBuilder':
        if value is None:
            raise ValueError("Visibility cannot be null")
        self._fields['visibility'] = value
        return self

    def description(self, value: Optional[str]) -> 'EventBuilder':
        self._fields['description'] = value
        return self

    def location(self, value: Optional[str]) -> 'EventBuilder':
        self._fields['location'] = value
        return self

    def build(self) -> Event:
        """
        Create the event.

        Raises:
            EventValidationError: if the collected fields are invalid
        """
        return Event(**self._fields)
