from datetime import date, datetime, timedelta

import pytest

from BackEnd.core.clock import attributed_date
from BackEnd.core.models import Habit, Session


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point the per-user data dir at a temporary directory."""
    monkeypatch.delenv("HABIT_TRACKER_DATA_DIR", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    return tmp_path / "HabitTracker"


@pytest.fixture(scope="session")
def qapp():
    """A QCoreApplication so QTimer/QObject work without a display."""
    QtCore = pytest.importorskip("PySide6.QtCore")
    app = QtCore.QCoreApplication.instance()
    if app is None:
        app = QtCore.QCoreApplication([])
    return app


def make_session(session_id, habit_id, day, seconds, hour=9, minute=0):
    start = datetime(day.year, day.month, day.day, hour, minute)
    end = start + timedelta(seconds=seconds)
    return Session(
        id=str(session_id),
        habit_id=habit_id,
        start=start,
        end=end,
        duration_seconds=seconds,
        attributed_date=attributed_date(start),
    )


@pytest.fixture
def habits():
    return [
        Habit(id="A", name="Reading", color="indigo"),
        Habit(id="B", name="Exercising", color="emerald"),
        Habit(id="C", name="Music", color="rose", deleted_at=datetime(2024, 5, 1, 12, 0)),
    ]


@pytest.fixture
def june_week():
    """Sessions in the week of Sun 2024-06-02 .. Sat 2024-06-08."""
    monday = date(2024, 6, 3)
    return [
        make_session(1, "A", monday, 600),
        make_session(2, "A", monday, 1200, hour=12),
        make_session(3, "A", monday, 1800, hour=18),
        make_session(4, "B", monday, 3600, hour=20),
        make_session(5, "B", date(2024, 6, 5), 900),
        make_session(6, "C", date(2024, 6, 8), 300),
        # outside the week
        make_session(7, "A", date(2024, 6, 1), 4000),
        make_session(8, "B", date(2024, 6, 9), 5000),
    ]
