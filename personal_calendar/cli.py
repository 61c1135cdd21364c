# File: personal_calendar/cli.py
"""
Command-line entry point for the personal calendar.

Examples:
    personal-calendar add "Team sync" --date 2025-01-06 --start 10:00 --end 11:00
    personal-calendar recur Standup --date 2025-01-06 --days MO,WE,FR --count 6 --start 09:00 --end 09:15
    personal-calendar list --from 2025-01-01 --to 2025-01-31
    personal-calendar busy --date 2025-01-06 --time 10:30
"""

import argparse
import sys
from datetime import date, time
from typing import List, Optional

from personal_calendar.core.calendar import Calendar
from personal_calendar.core.calendar_app import CalendarApp
from personal_calendar.core.config_manager import Config
from personal_calendar.models.common import parse_date, parse_time
from personal_calendar.models.enums import Visibility
from personal_calendar.models.event import Event
from personal_calendar.utils.logger import setup_logger

logger = setup_logger(__name__)

# Commands whose changes reach the auto-save listener
_NOTIFYING_COMMANDS = {"add", "recur"}


def _date_arg(value: str) -> date:
    try:
        return parse_date(value, Config.INPUT_DATE_FORMATS)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid date {value!r} (use YYYY-MM-DD or MM/DD/YYYY)"
        )


def _time_arg(value: str) -> time:
    try:
        return parse_time(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid time {value!r} (use HH:MM)")


def _days_arg(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def _add_event_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--start", type=_time_arg, help="Start time (HH:MM); omit for all-day")
    parser.add_argument("--end", type=_time_arg, help="End time (HH:MM)")
    parser.add_argument("--description", help="Event description")
    parser.add_argument("--location", help="Event location")
    parser.add_argument("--private", action="store_true", help="Mark the event private")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="personal-calendar",
        description="Manage a personal calendar stored as CSV files",
    )
    parser.add_argument(
        "--data-dir",
        help=f"Directory holding saved calendars (default: {Config.DATA_DIR})",
    )
    parser.add_argument(
        "--calendar",
        help="Title of the calendar to use (default: the first saved calendar)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List events")
    list_parser.add_argument("--date", type=_date_arg, help="Only events on this date")
    list_parser.add_argument("--from", dest="from_date", type=_date_arg, help="Range start")
    list_parser.add_argument("--to", dest="to_date", type=_date_arg, help="Range end")

    add_parser = subparsers.add_parser("add", help="Add a single event")
    add_parser.add_argument("subject")
    add_parser.add_argument("--date", type=_date_arg, required=True, help="Start date")
    add_parser.add_argument("--end-date", type=_date_arg, help="End date (default: start date)")
    _add_event_options(add_parser)

    recur_parser = subparsers.add_parser("recur", help="Add a weekly recurring event")
    recur_parser.add_argument("subject")
    recur_parser.add_argument("--date", type=_date_arg, required=True, help="First candidate date")
    recur_parser.add_argument("--days", type=_days_arg, required=True,
                              help="Comma-separated weekdays, e.g. MO,WE,FR")
    recur_parser.add_argument("--count", type=int, required=True, help="Number of occurrences")
    _add_event_options(recur_parser)

    remove_parser = subparsers.add_parser("remove", help="Remove an event")
    remove_parser.add_argument("subject")
    remove_parser.add_argument("--date", type=_date_arg, required=True, help="Start date")
    remove_parser.add_argument("--start", type=_time_arg, help="Start time of a timed event")

    busy_parser = subparsers.add_parser("busy", help="Check whether a moment is taken")
    busy_parser.add_argument("--date", type=_date_arg, required=True)
    busy_parser.add_argument("--time", type=_time_arg, required=True)

    export_parser = subparsers.add_parser("export", help="Export the calendar to a CSV file")
    export_parser.add_argument("path")

    import_parser = subparsers.add_parser("import", help="Import events from a CSV file")
    import_parser.add_argument("path")

    return parser


def _cmd_list(calendar: Calendar, args) -> int:
    if args.date is not None:
        events = calendar.get_events_on_date(args.date)
    elif args.from_date is not None or args.to_date is not None:
        # A single bound lists that one day
        start = args.from_date or args.to_date
        end = args.to_date or args.from_date
        events = calendar.get_events_in_range(start, end)
    else:
        events = calendar.get_events()

    events.sort(key=lambda e: e.start_datetime)
    for event in events:
        print(event)
    if not events:
        print("No events.")
    return 0


def _cmd_add(calendar: Calendar, args) -> int:
    builder = (Event.builder(args.subject, args.date)
               .end_date(args.end_date)
               .start_time(args.start)
               .end_time(args.end)
               .description(args.description)
               .location(args.location)
               .visibility(Visibility.PRIVATE if args.private else calendar.default_visibility))
    event = builder.build()
    calendar.add_event(event)
    print(f"Added {event}")
    return 0


def _cmd_recur(calendar: Calendar, args) -> int:
    occurrences = calendar.add_recurring_event(
        args.subject,
        args.date,
        args.days,
        args.count,
        start_time=args.start,
        end_time=args.end,
        description=args.description,
        location=args.location,
        visibility=Visibility.PRIVATE if args.private else None,
    )
    print(f"Added {len(occurrences)} occurrences of '{args.subject}'")
    for event in occurrences:
        print(f"  {event}")
    return 0


def _cmd_remove(app: CalendarApp, args) -> int:
    event = app.selected.get_event(args.subject, args.date, args.start)
    if event is None:
        logger.error(f"No event '{args.subject}' on {args.date}")
        return 1
    app.selected.remove_event(event)
    app.save()
    print(f"Removed {event}")
    return 0


def _cmd_busy(calendar: Calendar, args) -> int:
    print("busy" if calendar.is_busy(args.date, args.time) else "free")
    return 0


def _cmd_export(calendar: Calendar, args) -> int:
    with open(args.path, 'w', encoding='utf-8', newline='') as f:
        calendar.export_to_csv(f)
    print(f"Exported {len(calendar)} events to {args.path}")
    return 0


def _cmd_import(app: CalendarApp, args) -> int:
    with open(args.path, 'r', encoding='utf-8', newline='') as f:
        count = app.selected.import_from_csv(f)
    app.save()
    print(f"Imported {count} events from {args.path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main execution function.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = build_parser().parse_args(argv)

    if not Config.validate():
        logger.error("Configuration validation failed")
        return 1

    try:
        app = CalendarApp(args.data_dir, auto_save=args.command in _NOTIFYING_COMMANDS)
        if args.calendar:
            app.select(args.calendar)
        calendar = app.selected

        if args.command == "list":
            return _cmd_list(calendar, args)
        if args.command == "add":
            return _cmd_add(calendar, args)
        if args.command == "recur":
            return _cmd_recur(calendar, args)
        if args.command == "remove":
            return _cmd_remove(app, args)
        if args.command == "busy":
            return _cmd_busy(calendar, args)
        if args.command == "export":
            return _cmd_export(calendar, args)
        if args.command == "import":
            return _cmd_import(app, args)

    except ValueError as e:
        logger.error(f"{args.command} failed: {e}")
        return 1
    except OSError as e:
        logger.error(f"File error: {e}")
        return 1

    return 1


if __name__ == "__main__":
    sys.exit(main())
