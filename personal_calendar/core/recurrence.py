# File: personal_calendar/core/recurrence.py
"""
Occurrence dates for weekly recurring events.

A series is defined by a start date, a set of weekdays and a total number
of occurrences.
"""

from datetime import date, timedelta
from typing import FrozenSet, Iterable, Iterator, List

from personal_calendar.models.enums import DayOfWeek


def normalize_days(days_of_week: Iterable) -> FrozenSet[DayOfWeek]:
    """
    Convert a collection of weekdays to a set of DayOfWeek.
    
    Accepts DayOfWeek members, weekday integers (Monday=0) or day names.
    
    Raises:
        ValueError: if the collection is None, empty or holds an unknown day
    """
    if days_of_week is None:
        raise ValueError("Days of week cannot be null or empty")
    days = frozenset(DayOfWeek.parse(day) for day in days_of_week)
    if not days:
        raise ValueError("Days of week cannot be null or empty")
    return days


def iter_occurrence_dates(
    start_date: date,
    days_of_week: Iterable,
    num_occurrences: int
) -> Iterator[date]:
    """
    Yield the first num_occurrences dates, from start_date inclusive,
    whose weekday is in days_of_week.
    
    Example:
        >>> list(iter_occurrence_dates(date(2025, 1, 6), [DayOfWeek.MONDAY], 3))
        [datetime.date(2025, 1, 6), datetime.date(2025, 1, 13), datetime.date(2025, 1, 20)]
    """
    if start_date is None:
        raise ValueError("Start date cannot be null")
    days = normalize_days(days_of_week)
    if num_occurrences is None or num_occurrences <= 0:
        raise ValueError("Number of occurrences must be positive")
    
    current = start_date
    found = 0
    while found < num_occurrences:
        if DayOfWeek.of(current) in days:
            found += 1
            yield current
        current += timedelta(days=1)


def occurrence_dates(start_date: date, days_of_week: Iterable, num_occurrences: int) -> List[date]:
    """List form of iter_occurrence_dates; validates arguments eagerly."""
    return list(iter_occurrence_dates(start_date, days_of_week, num_occurrences))
