# File: personal_calendar/core/calendar.py
"""
The event store.

Calendar is the only way events get added, removed or replaced. Every
mutation is checked against the two store invariants before it becomes
visible:

- no two events share an identity key (subject, start date, start time)
- no two events' [start, end) intervals overlap

Mutations are prepared on a working copy of the event list and swapped in
only after all checks pass, so a rejected call leaves the calendar exactly
as it was.
"""

from datetime import date, datetime, time
from typing import IO, Iterable, List, Optional

from personal_calendar.models.enums import Visibility
from personal_calendar.models.errors import (
    DuplicateEventError,
    EventConflictError,
    EventNotFoundError,
    NotRecurringEventError,
)
from personal_calendar.models.event import Event
from personal_calendar.core.listeners import CalendarListener, ListenerRegistry
from personal_calendar.core.recurrence import occurrence_dates
from personal_calendar.services import csv_codec
from personal_calendar.utils.logger import setup_logger

logger = setup_logger(__name__)


def _require_title(title: Optional[str]) -> str:
    if title is None or not title.strip():
        raise ValueError("Title cannot be null or blank")
    return title


def _check_against(event: Event, others: Iterable[Event],
                   duplicate_message: str, conflict_message: str) -> None:
    others = list(others)
    if any(event == other for other in others):
        raise DuplicateEventError(duplicate_message)
    if any(event.conflicts_with(other) for other in others):
        raise EventConflictError(conflict_message)


class Calendar:
    """A titled collection of non-overlapping events with recurring series."""

    DUPLICATE_MESSAGE = ("Update would create a duplicate event with the same subject, "
                         "start date, and start time")
    CONFLICT_MESSAGE = "Update would create a conflict with an existing event"

    def __init__(self, title: str, default_visibility: Optional[Visibility] = None):
        """
        Create a calendar.

        Args:
            title: Non-blank title
            default_visibility: Visibility for recurring and imported events
                that don't specify one (None means PUBLIC)
        """
        self._title = _require_title(title)
        self._default_visibility = default_visibility or Visibility.PUBLIC
        self._events: List[Event] = []
        self._series: List[List[Event]] = []
        self._listeners = ListenerRegistry()

    # ==================== Properties ====================

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: str) -> None:
        self._title = _require_title(value)

    @property
    def default_visibility(self) -> Visibility:
        return self._default_visibility

    @default_visibility.setter
    def default_visibility(self, value: Visibility) -> None:
        if value is None:
            raise ValueError("Default visibility cannot be null")
        self._default_visibility = Visibility(value)

    # ==================== Single Events ====================

    def add_event(self, event: Event) -> None:
        """
        Add a single event.

        Raises:
            ValueError: if event is None
            DuplicateEventError: if an event with the same key exists
            EventConflictError: if the event overlaps an existing event
        """
        if event is None:
            raise ValueError("Event cannot be null")

        working = self._events + [event]
        try:
            _check_against(event, self._events, self.DUPLICATE_MESSAGE, self.CONFLICT_MESSAGE)
        except (DuplicateEventError, EventConflictError) as e:
            logger.warning(f"Rejected event '{event.subject}' on {event.start_date}: {e}")
            raise

        self._events = working
        logger.debug(f"Added event '{event.subject}' on {event.start_date}")
        self._listeners.announce_added(event)

    def remove_event(self, event: Event) -> None:
        """
        Remove an event (matched by identity key) and drop it from its series.

        Raises:
            ValueError: if event is None
            EventNotFoundError: if no matching event is in the calendar
        """
        if event is None:
            raise ValueError("Event cannot be null")
        index = self._index_of(event)
        if index is None:
            raise EventNotFoundError()

        stored = self._events[index]
        self._events = self._events[:index] + self._events[index + 1:]
        self._detach_from_series(stored)
        logger.debug(f"Removed event '{stored.subject}' on {stored.start_date}")

    def update_event(self, old_event: Event, new_event: Event) -> None:
        """
        Replace old_event with new_event.

        The replacement does not inherit old_event's recurring series
        membership.

        Raises:
            ValueError: if either event is None
            EventNotFoundError: if old_event is not in the calendar
            DuplicateEventError, EventConflictError: if new_event breaks an
                invariant against the remaining events (nothing is changed)
        """
        if old_event is None or new_event is None:
            raise ValueError("Event cannot be null")
        index = self._index_of(old_event)
        if index is None:
            raise EventNotFoundError()

        stored_old = self._events[index]
        remaining = self._events[:index] + self._events[index + 1:]
        try:
            _check_against(new_event, remaining, self.DUPLICATE_MESSAGE, self.CONFLICT_MESSAGE)
        except (DuplicateEventError, EventConflictError) as e:
            logger.warning(f"Rejected update of '{stored_old.subject}': {e}")
            raise

        self._events = remaining + [new_event]
        if stored_old.uid != new_event.uid:
            self._detach_from_series(stored_old)
        logger.debug(f"Updated event '{stored_old.subject}' -> '{new_event.subject}'")
        self._listeners.announce_modified(new_event)

    # ==================== Recurring Events ====================

    def add_recurring_event(
        self,
        subject: str,
        start_date: date,
        days_of_week: Iterable,
        num_occurrences: int,
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
        description: Optional[str] = None,
        location: Optional[str] = None,
        visibility: Optional[Visibility] = None
    ) -> List[Event]:
        """
        Create a series of single-day events on the given weekdays.

        Either every occurrence is added or none is.

        Args:
            subject: Subject shared by all occurrences
            start_date: First candidate date (inclusive)
            days_of_week: Weekdays to repeat on (DayOfWeek, int or name)
            num_occurrences: Total number of occurrences
            start_time: Start time, None for all-day occurrences
            end_time: End time (required with start_time)
            description: Optional description
            location: Optional location
            visibility: Visibility (defaults to the calendar default)

        Returns:
            The created occurrences in date order

        Raises:
            ValueError: for an empty weekday set or a non-positive count
            EventValidationError: if the occurrence fields are invalid
            DuplicateEventError, EventConflictError: if any occurrence would
                break an invariant
        """
        dates = occurrence_dates(start_date, days_of_week, num_occurrences)
        event_visibility = visibility or self._default_visibility

        batch: List[Event] = []
        for occurrence_date in dates:
            builder = (Event.builder(subject, occurrence_date)
                       .end_date(occurrence_date)
                       .visibility(event_visibility)
                       .description(description)
                       .location(location))
            if start_time is not None:
                builder.start_time(start_time).end_time(end_time)
            elif end_time is not None:
                builder.end_time(end_time)
            occurrence = builder.build()

            try:
                _check_against(
                    occurrence, self._events + batch,
                    "A recurring event occurrence would duplicate an existing event",
                    "A recurring event occurrence would conflict with an existing event",
                )
            except (DuplicateEventError, EventConflictError) as e:
                logger.warning(
                    f"Rejected recurring event '{subject}' at {occurrence_date}: {e}"
                )
                raise
            batch.append(occurrence)

        self._events = self._events + batch
        self._series.append(list(batch))
        logger.info(f"Added recurring event '{subject}' with {len(batch)} occurrences")

        for occurrence in batch:
            self._listeners.announce_added(occurrence)
        return list(batch)

    def modify_recurring_event_instance(self, event: Event, **changes) -> None:
        """
        Detach one occurrence from its series after it has been edited.

        The occurrence may already have been changed through its setters, or
        the changes may be passed as keyword arguments (for example
        ``start_time=..., end_time=...``). In the latter case a rejected
        modification also restores the occurrence's previous field values.
        On any failure the occurrence keeps its place in the series.

        Raises:
            ValueError: if event is None
            NotRecurringEventError: if event is not in any series
            EventValidationError: if the changes produce an invalid event
            DuplicateEventError, EventConflictError: if the edited event
                breaks an invariant against the rest of the calendar
        """
        if event is None:
            raise ValueError("Event cannot be null")
        series = self._find_series(event)
        position = next(i for i, member in enumerate(series) if member.uid == event.uid)

        snapshot = event.to_fields()
        series.pop(position)
        try:
            if changes:
                event.update(**changes)
            others = [e for e in self._events if e.uid != event.uid]
            _check_against(event, others, self.DUPLICATE_MESSAGE, self.CONFLICT_MESSAGE)
        except (ValueError, TypeError) as e:
            if changes:
                event._assign(snapshot)
            series.insert(position, event)
            logger.warning(f"Rejected modification of '{event.subject}' on {event.start_date}: {e}")
            raise

        logger.debug(f"Modified recurring occurrence '{event.subject}' on {event.start_date}")
        self._listeners.announce_modified(event)

    def get_recurring_events_all(self, event: Event) -> List[Event]:
        """
        Get every event of the series that holds this exact event.

        Raises:
            ValueError: if event is None
            NotRecurringEventError: if event is not in any series
        """
        if event is None:
            raise ValueError("Event cannot be null")
        return list(self._find_series(event))

    def get_recurring_events_from_date(self, event: Event, start_date: date) -> List[Event]:
        """
        Get the events of this event's series starting on or after start_date.

        Raises:
            ValueError: if event or start_date is None
            NotRecurringEventError: if event is not in any series
        """
        if event is None:
            raise ValueError("Event cannot be null")
        if start_date is None:
            raise ValueError("Start date cannot be null")
        series = self._find_series(event)
        return [e for e in series if not e.start_date < start_date]

    def get_series(self) -> List[List[Event]]:
        """Get a copy of every recurring series."""
        return [list(series) for series in self._series]

    # ==================== Queries ====================

    def get_events(self) -> List[Event]:
        """Get a copy of all events in insertion order."""
        return list(self._events)

    def get_event(self, subject: str, start_date: date,
                  start_time: Optional[time] = None) -> Optional[Event]:
        """Find an event by its identity key, or None."""
        if subject is None or start_date is None:
            return None
        key = (subject, start_date, start_time)
        for event in self._events:
            if event.key == key:
                return event
        return None

    def get_events_on_date(self, day: date) -> List[Event]:
        """Get events whose date span includes the given day."""
        if day is None:
            return []
        return [e for e in self._events if e.occurs_on(day)]

    def get_events_in_range(self, start_date: date, end_date: date) -> List[Event]:
        """
        Get events whose date span overlaps [start_date, end_date].

        Raises:
            ValueError: if a date is None or start_date is after end_date
        """
        if start_date is None or end_date is None:
            raise ValueError("Start date and end date cannot be null")
        if start_date > end_date:
            raise ValueError("Start date cannot be after end date")
        return [e for e in self._events if e.overlaps_dates(start_date, end_date)]

    def is_busy(self, day: date, at: time) -> bool:
        """Check if any event covers the given moment."""
        if day is None or at is None:
            return False
        moment = datetime.combine(day, at)
        return any(e.contains(moment) for e in self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __contains__(self, event: object) -> bool:
        return isinstance(event, Event) and self._index_of(event) is not None

    # ==================== Listeners ====================

    def add_calendar_listener(self, listener: CalendarListener) -> None:
        """
        Register a listener for add/modify notifications.

        Registering the same listener twice has no effect.

        Raises:
            ValueError: if listener is None
        """
        self._listeners.add(listener)

    def remove_calendar_listener(self, listener: CalendarListener) -> None:
        """Unregister a listener. Unknown or None listeners are ignored."""
        self._listeners.remove(listener)

    # ==================== CSV ====================

    def export_to_csv(self, writer: IO[str]) -> None:
        """Write all events as CSV rows to a text stream."""
        csv_codec.export_events(self._events, writer)

    def import_from_csv(self, reader: IO[str]) -> int:
        """
        Append events read from CSV rows.

        Rows are trusted: duplicate and conflict checks are skipped. Rows
        that cannot be parsed are logged and skipped.

        Returns:
            Number of imported events
        """
        imported = 0
        for event in csv_codec.import_events(reader, self._default_visibility):
            self._events = self._events + [event]
            self._listeners.announce_added(event)
            imported += 1
        logger.info(f"Imported {imported} events into '{self._title}'")
        return imported

    # ==================== Helpers ====================

    def _index_of(self, event: Event) -> Optional[int]:
        for i, existing in enumerate(self._events):
            if existing == event:
                return i
        return None

    def _find_series(self, event: Event) -> List[Event]:
        for series in self._series:
            if any(member.uid == event.uid for member in series):
                return series
        raise NotRecurringEventError()

    def _detach_from_series(self, event: Event) -> None:
        for series in self._series:
            series[:] = [member for member in series if member.uid != event.uid]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Calendar):
            return NotImplemented
        return self._title == other._title

    def __hash__(self) -> int:
        return hash(self._title)

    def __str__(self) -> str:
        return f"Calendar [title={self._title}, events={[str(e) for e in self._events]}]"

    def __repr__(self) -> str:
        return f"Calendar(title={self._title!r}, events={len(self._events)})"
