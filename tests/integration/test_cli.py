# File: tests/integration/test_cli.py
"""
Integration tests for the command-line interface.
Each test works on its own temporary data directory.
"""

import pytest

from personal_calendar.cli import main
from personal_calendar.core.config_manager import Config
from personal_calendar.models import Visibility
from personal_calendar.services.calendar_storage import restore_all_calendars


@pytest.fixture
def run(data_dir):
    """Run the CLI against the temporary data directory."""
    def _run(*args):
        return main(["--data-dir", str(data_dir), *args])
    return _run


def _saved_events(data_dir):
    return restore_all_calendars(data_dir)[0].get_events()


class TestAddAndList:
    """Tests for add, recur and list."""

    def test_add_timed_event(self, run, data_dir, capsys):
        """Test a timed event is stored and printed."""
        code = run("add", "Team sync", "--date", "2025-01-06", "--start", "10:00", "--end", "11:00")

        assert code == 0
        assert "Added Event[subject=Team sync" in capsys.readouterr().out
        events = _saved_events(data_dir)
        assert len(events) == 1
        assert events[0].start_time.hour == 10

    def test_add_all_day_private(self, run, data_dir):
        """Test all-day events and the private flag."""
        assert run("add", "Holiday", "--date", "12/25/2025", "--private") == 0

        event = _saved_events(data_dir)[0]
        assert event.is_all_day() is True
        assert event.visibility.value == "PRIVATE"

    def test_conflict_exits_with_error(self, run, data_dir):
        """Test a rejected add returns 1 and changes nothing."""
        run("add", "A", "--date", "2025-01-06", "--start", "10:00", "--end", "11:00")

        code = run("add", "B", "--date", "2025-01-06", "--start", "10:30", "--end", "11:30")

        assert code == 1
        assert [e.subject for e in _saved_events(data_dir)] == ["A"]

    def test_invalid_event_exits_with_error(self, run):
        """Test a start time without end time is refused."""
        assert run("add", "A", "--date", "2025-01-06", "--start", "10:00") == 1

    def test_recur(self, run, data_dir, capsys):
        """Test a weekly series is created."""
        code = run("recur", "Standup", "--date", "2025-01-06", "--days", "MO,WE",
                   "--count", "4", "--start", "09:00", "--end", "09:15")

        assert code == 0
        assert "Added 4 occurrences of 'Standup'" in capsys.readouterr().out
        assert [e.start_date.day for e in _saved_events(data_dir)] == [6, 8, 13, 15]

    def test_recur_bad_count(self, run):
        """Test a non-positive count is refused."""
        assert run("recur", "Standup", "--date", "2025-01-06", "--days", "MO",
                   "--count", "0") == 1

    def test_list_filters(self, run, capsys):
        """Test list by date and by range."""
        run("add", "First", "--date", "2025-01-06")
        run("add", "Second", "--date", "2025-02-10")
        capsys.readouterr()

        run("list", "--date", "2025-01-06")
        out = capsys.readouterr().out
        assert "First" in out and "Second" not in out

        run("list", "--from", "2025-01-01", "--to", "2025-12-31")
        out = capsys.readouterr().out
        assert "First" in out and "Second" in out

    def test_list_empty(self, run, capsys):
        """Test an empty calendar says so."""
        assert run("list") == 0
        assert "No events." in capsys.readouterr().out

    def test_list_reversed_range(self, run):
        """Test a reversed range is refused."""
        assert run("list", "--from", "2025-02-01", "--to", "2025-01-01") == 1

    def test_list_with_single_bound(self, run, capsys):
        """Test --from or --to alone lists that one day."""
        run("add", "First", "--date", "2025-01-06")
        run("add", "Second", "--date", "2025-01-07")
        capsys.readouterr()

        assert run("list", "--from", "2025-01-06") == 0
        out = capsys.readouterr().out
        assert "First" in out and "Second" not in out

        assert run("list", "--to", "2025-01-07") == 0
        out = capsys.readouterr().out
        assert "Second" in out and "First" not in out

    def test_add_uses_calendar_default_visibility(self, run, data_dir, monkeypatch):
        """Test add and recur agree on the calendar's default visibility."""
        monkeypatch.setattr(Config, "DEFAULT_VISIBILITY", Visibility.PRIVATE)

        run("add", "Secret", "--date", "2025-01-01")
        run("recur", "Weekly", "--date", "2025-01-06", "--days", "MO", "--count", "1")

        assert [e.visibility for e in _saved_events(data_dir)] == [
            Visibility.PRIVATE, Visibility.PRIVATE
        ]

    def test_invalid_date_argument(self, run):
        """Test argparse rejects unparsable dates."""
        with pytest.raises(SystemExit):
            run("add", "A", "--date", "tomorrow")


class TestRemoveAndBusy:
    """Tests for remove and busy."""

    def test_remove(self, run, data_dir):
        """Test removal is persisted."""
        run("add", "A", "--date", "2025-01-06", "--start", "10:00", "--end", "11:00")

        assert run("remove", "A", "--date", "2025-01-06", "--start", "10:00") == 0
        assert _saved_events(data_dir) == []

    def test_remove_missing(self, run):
        """Test removing an unknown event returns 1."""
        assert run("remove", "Nope", "--date", "2025-01-06") == 1

    def test_busy(self, run, capsys):
        """Test busy and free answers."""
        run("add", "A", "--date", "2025-01-06", "--start", "10:00", "--end", "11:00")
        capsys.readouterr()

        run("busy", "--date", "2025-01-06", "--time", "10:30")
        assert capsys.readouterr().out.strip().endswith("busy")

        run("busy", "--date", "2025-01-06", "--time", "11:00")
        assert capsys.readouterr().out.strip().endswith("free")


class TestExportImport:
    """Tests for export and import."""

    def test_export_then_import_into_other_calendar(self, run, data_dir, tmp_path):
        """Test events move between calendars through a CSV file."""
        export_path = tmp_path / "export.csv"
        run("--calendar", "Work", "add", "Review", "--date", "2025-03-03",
            "--start", "14:00", "--end", "15:00", "--location", "Room 101")

        assert run("--calendar", "Work", "export", str(export_path)) == 0
        assert "Review,03/03/2025,14:00,03/03/2025,15:00,False,,Room 101,False" in \
            export_path.read_text(encoding="utf-8")

        assert run("--calendar", "Home", "import", str(export_path)) == 0
        calendars = {c.title: c for c in restore_all_calendars(data_dir)}
        assert calendars["Home"].get_events() == calendars["Work"].get_events()

    def test_import_missing_file(self, run, tmp_path):
        """Test a missing import file returns 1."""
        assert run("import", str(tmp_path / "missing.csv")) == 1
