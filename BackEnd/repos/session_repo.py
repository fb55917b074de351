import logging
import sqlite3
from pathlib import Path
from typing import List, Optional

from BackEnd.core.clock import utc_now_iso
from BackEnd.core.models import Habit, Session, SessionPayload
from BackEnd.core.paths import db_path

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent.parent.parent / "SQL" / "schema.sql"


def connect():
	"""Open SQLite connection and ensure schema is applied."""
	dbfile = db_path()
	conn = sqlite3.connect(dbfile)
	conn.row_factory = sqlite3.Row
	with open(SCHEMA_PATH, encoding="utf-8") as f:
		conn.executescript(f.read())
	return conn


def create_habit(name, color="", icon="") -> Habit:
	"""Insert a habit and return it."""
	name = (name or "").strip()
	if not name:
		raise ValueError("Habit name cannot be empty.")
	now = utc_now_iso()
	with connect() as conn:
		cur = conn.execute(
			"INSERT INTO habits (name, color, icon, created_at) VALUES (?, ?, ?, ?)",
			(name, color, icon, now)
		)
		habit_id = cur.lastrowid
	logger.info("Created habit %s (%s)", habit_id, name)
	return get_habit(str(habit_id))


def get_habit(habit_id) -> Optional[Habit]:
	with connect() as conn:
		row = conn.execute("SELECT * FROM habits WHERE id=?", (habit_id,)).fetchone()
	return Habit.from_row(dict(row)) if row else None


def archive_habit(habit_id) -> bool:
	"""Soft delete: keep the row so historical sessions still resolve."""
	with connect() as conn:
		cur = conn.execute(
			"UPDATE habits SET deleted_at=? WHERE id=? AND deleted_at IS NULL",
			(utc_now_iso(), habit_id)
		)
		archived = cur.rowcount > 0
	if archived:
		logger.info("Archived habit %s", habit_id)
	return archived


def list_habits(include_archived=True) -> List[Habit]:
	query = "SELECT * FROM habits"
	if not include_archived:
		query += " WHERE deleted_at IS NULL"
	with connect() as conn:
		rows = conn.execute(query + " ORDER BY id").fetchall()
	return [Habit.from_row(dict(r)) for r in rows]


def insert_session(payload: SessionPayload) -> Session:
	"""Store a validated session and return it with its new id."""
	row = payload.as_dict()
	with connect() as conn:
		cur = conn.execute(
			"""
			INSERT INTO habit_logs (habit_id, start_time, end_time, duration_seconds, attributed_date, updated_at)
			VALUES (?, ?, ?, ?, ?, ?)
			""",
			(row["habit_id"], row["start_time"], row["end_time"], row["duration_seconds"],
			 row["attributed_date"], utc_now_iso())
		)
		session_id = str(cur.lastrowid)
	logger.info("Logged %ss for habit %s on %s", row["duration_seconds"], row["habit_id"], row["attributed_date"])
	return payload.to_session(session_id)


def update_session(payload: SessionPayload) -> Optional[Session]:
	"""Replace habit, start and end of an existing session. Returns None if it is gone."""
	if payload.session_id is None:
		raise ValueError("update_session needs a payload with session_id set.")
	row = payload.as_dict()
	with connect() as conn:
		cur = conn.execute(
			"""
			UPDATE habit_logs
			SET habit_id=?, start_time=?, end_time=?, duration_seconds=?, attributed_date=?, updated_at=?
			WHERE id=?
			""",
			(row["habit_id"], row["start_time"], row["end_time"], row["duration_seconds"],
			 row["attributed_date"], utc_now_iso(), payload.session_id)
		)
		if cur.rowcount == 0:
			return None
	return payload.to_session(payload.session_id)


def delete_session(session_id) -> bool:
	with connect() as conn:
		cur = conn.execute("DELETE FROM habit_logs WHERE id=?", (session_id,))
		return cur.rowcount > 0


def list_sessions(since=None, until=None) -> List[Session]:
	"""Sessions, optionally limited to attributed dates in [since, until]."""
	query = "SELECT * FROM habit_logs WHERE 1=1"
	params = []
	if since is not None:
		query += " AND attributed_date >= ?"
		params.append(since.isoformat())
	if until is not None:
		query += " AND attributed_date <= ?"
		params.append(until.isoformat())
	with connect() as conn:
		rows = conn.execute(query + " ORDER BY start_time", params).fetchall()
	return [Session.from_row(dict(r)) for r in rows]
