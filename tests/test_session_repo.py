"""Tests for the sqlite persistence adapter."""

from datetime import date

import pytest

from BackEnd.core.paths import db_path
from BackEnd.repos import session_repo
from BackEnd.services import aggregation
from BackEnd.services.recording import record_manual_session


def test_database_lives_in_data_dir(data_dir):
    session_repo.create_habit("Reading")
    assert db_path() == data_dir / "habits.db"
    assert db_path().exists()


def test_habit_lifecycle(data_dir):
    reading = session_repo.create_habit("Reading", color="indigo", icon="Reading")
    music = session_repo.create_habit("Music", color="rose")
    assert reading.name == "Reading"
    assert reading.color == "indigo"
    assert not reading.archived

    assert session_repo.archive_habit(music.id)
    assert not session_repo.archive_habit(music.id)  # already archived

    assert [h.name for h in session_repo.list_habits()] == ["Reading", "Music"]
    assert [h.name for h in session_repo.list_habits(include_archived=False)] == ["Reading"]
    assert session_repo.get_habit(music.id).archived


def test_empty_habit_name_rejected(data_dir):
    with pytest.raises(ValueError):
        session_repo.create_habit("   ")


def test_session_round_trip_keeps_start_day(data_dir):
    habit = session_repo.create_habit("Reading")
    recorded = record_manual_session(habit.id, "2024-03-10", 23, 30, 0, 15)
    stored = session_repo.insert_session(recorded.payload)

    [loaded] = session_repo.list_sessions()
    assert loaded == stored
    assert loaded.attributed_date == date(2024, 3, 10)
    assert loaded.duration_seconds == 2700
    assert aggregation.daily_total(session_repo.list_sessions(), date(2024, 3, 10)) == 2700


def test_update_and_delete_session(data_dir):
    reading = session_repo.create_habit("Reading")
    music = session_repo.create_habit("Music")
    stored = session_repo.insert_session(
        record_manual_session(reading.id, "2024-06-03", 9, 0, 10, 0).payload
    )

    edited = record_manual_session(music.id, "2024-06-04", 20, 0, 20, 45, session_id=stored.id)
    updated = session_repo.update_session(edited.payload)
    assert updated.id == stored.id

    [loaded] = session_repo.list_sessions()
    assert loaded.habit_id == music.id
    assert loaded.attributed_date == date(2024, 6, 4)
    assert loaded.duration_seconds == 2700

    assert session_repo.delete_session(stored.id)
    assert not session_repo.delete_session(stored.id)
    assert session_repo.list_sessions() == []
    assert session_repo.update_session(edited.payload) is None


def test_list_sessions_by_attributed_date(data_dir):
    habit = session_repo.create_habit("Reading")
    for day in ("2024-06-01", "2024-06-03", "2024-06-09"):
        session_repo.insert_session(record_manual_session(habit.id, day, 9, 0, 9, 30).payload)

    sessions = session_repo.list_sessions(since=date(2024, 6, 2), until=date(2024, 6, 8))
    assert [s.attributed_date for s in sessions] == [date(2024, 6, 3)]


def test_schema_script_creates_every_column(data_dir):
    with session_repo.connect() as conn:
        habit_cols = {r["name"] for r in conn.execute("PRAGMA table_info(habits)")}
        log_cols = {r["name"] for r in conn.execute("PRAGMA table_info(habit_logs)")}
    assert habit_cols == {"id", "name", "color", "icon", "created_at", "deleted_at"}
    assert {"habit_id", "start_time", "end_time", "duration_seconds", "attributed_date"} <= log_cols
