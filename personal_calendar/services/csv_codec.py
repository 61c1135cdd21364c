# File: personal_calendar/services/csv_codec.py
"""
CSV row format for calendar events.

One header row followed by one row per event:

    Subject,Start Date,Start Time,End Date,End Time,All Day Event,Description,Location,Private

Dates are MM/DD/YYYY, times are HH:MM (HH:MM:SS when seconds are set) or
empty for all-day events. The "All Day Event" column is written for
compatibility with spreadsheet calendars but ignored on import: an event
is all-day exactly when it has no start time.
"""

import csv
from typing import IO, Iterable, Iterator, List, Optional

from personal_calendar.core.config_manager import Config
from personal_calendar.models.common import format_time, parse_date, parse_time
from personal_calendar.models.enums import Visibility
from personal_calendar.models.errors import CsvRowError
from personal_calendar.models.event import Event
from personal_calendar.utils.logger import setup_logger

logger = setup_logger(__name__)

MIN_FIELDS = 8


def _format_date(value) -> str:
    return value.strftime(Config.CSV_DATE_FORMAT) if value else ""


def _format_bool(value: bool) -> str:
    return "True" if value else "False"


def event_to_row(event: Event) -> List[str]:
    """
    Convert an event to its CSV fields.

    Args:
        event: Event to convert

    Returns:
        List of nine strings in header order
    """
    return [
        event.subject,
        _format_date(event.start_date),
        format_time(event.start_time),
        _format_date(event.end_date),
        format_time(event.end_time),
        _format_bool(event.is_all_day()),
        event.description or "",
        event.location or "",
        _format_bool(event.visibility == Visibility.PRIVATE),
    ]


def _parse_visibility(raw: Optional[str], default: Visibility) -> Visibility:
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value == "true":
        return Visibility.PRIVATE
    if value == "false":
        return Visibility.PUBLIC
    raise ValueError(f"Invalid private flag: {raw!r}")


def row_to_event(row: List[str], default_visibility: Visibility = Visibility.PUBLIC,
                 line_number: Optional[int] = None) -> Event:
    """
    Build an event from CSV fields.

    Args:
        row: Parsed CSV fields (at least eight)
        default_visibility: Used when the Private column is blank or absent
        line_number: Source line, reported in errors

    Returns:
        The parsed event

    Raises:
        CsvRowError: if the row is short or any field is invalid
    """
    if len(row) < MIN_FIELDS:
        raise CsvRowError(
            f"Expected at least {MIN_FIELDS} fields, got {len(row)}", line_number
        )

    try:
        formats = (Config.CSV_DATE_FORMAT,)
        start_date = parse_date(row[1], formats)
        start_time = parse_time(row[2])
        end_date = parse_date(row[3], formats)
        end_time = parse_time(row[4])
        visibility = _parse_visibility(row[8] if len(row) > 8 else None, default_visibility)

        return Event(
            subject=row[0],
            start_date=start_date,
            end_date=end_date,
            start_time=start_time,
            end_time=end_time,
            visibility=visibility,
            description=row[6] or None,
            location=row[7] or None,
        )
    except CsvRowError:
        raise
    except ValueError as e:
        raise CsvRowError(str(e), line_number) from e


def export_events(events: Iterable[Event], writer: IO[str]) -> int:
    """
    Write a header and one row per event.

    Returns:
        Number of event rows written
    """
    csv_writer = csv.writer(writer, lineterminator="\n")
    csv_writer.writerow(Config.CSV_HEADERS)

    count = 0
    for event in events:
        csv_writer.writerow(event_to_row(event))
        count += 1

    logger.debug(f"Exported {count} events")
    return count


def import_events(reader: IO[str],
                  default_visibility: Visibility = Visibility.PUBLIC) -> Iterator[Event]:
    """
    Parse events from a CSV stream.

    The first row is treated as the header and skipped, as are blank lines.
    Rows that cannot be parsed, including rows the csv module itself
    rejects (bad quoting, oversized fields), are logged and skipped.

    Yields:
        Events in file order
    """
    csv_reader = csv.reader(reader)
    header_seen = False

    while True:
        last_line = csv_reader.line_num
        try:
            row = next(csv_reader)
        except StopIteration:
            return
        except csv.Error as e:
            logger.error(f"Skipping CSV row: {CsvRowError(str(e), csv_reader.line_num)}")
            header_seen = True
            if csv_reader.line_num == last_line:
                # Reader made no progress; nothing more can be read
                return
            continue

        if not header_seen:
            header_seen = True
            continue
        if not row or all(not field.strip() for field in row):
            continue

        try:
            yield row_to_event(row, default_visibility, csv_reader.line_num)
        except CsvRowError as e:
            logger.error(f"Skipping CSV row: {e}")
