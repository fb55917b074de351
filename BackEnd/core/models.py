"""
Data models shared by the aggregation engine, the recording validator
and the persistence adapter.

- Habit: a named tracked activity (soft deleted, never removed)
- Session: one completed span of tracked time
- ActiveTimer: an in-progress, unpersisted span
- SessionPayload: validated session ready to be stored
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional

from BackEnd.core.clock import iso_instant, parse_date, parse_instant

MAX_SESSION_SECONDS = 6 * 60 * 60


@dataclass(frozen=True)
class Habit:
	id: str
	name: str
	color: str = ""  # semantic tag, resolved to a display value by the UI
	icon: str = ""
	created_at: Optional[datetime] = None
	deleted_at: Optional[datetime] = None

	def __post_init__(self):
		if not (self.name or "").strip():
			raise ValueError("Habit name cannot be empty.")

	@property
	def archived(self) -> bool:
		return self.deleted_at is not None

	@classmethod
	def from_row(cls, row: Mapping[str, Any]) -> "Habit":
		created = row.get("created_at")
		deleted = row.get("deleted_at")
		return cls(
			id=str(row["id"]),
			name=row["name"],
			color=row.get("color") or "",
			icon=row.get("icon") or "",
			created_at=parse_instant(created) if created else None,
			deleted_at=parse_instant(deleted) if deleted else None,
		)


@dataclass(frozen=True)
class Session:
	id: str
	habit_id: str
	start: datetime
	end: datetime
	duration_seconds: int
	attributed_date: date  # fixed by the start instant

	@classmethod
	def from_row(cls, row: Mapping[str, Any]) -> "Session":
		"""Build from a stored row: ISO instants and a YYYY-MM-DD date."""
		return cls(
			id=str(row["id"]),
			habit_id=str(row["habit_id"]),
			start=parse_instant(row["start_time"]),
			end=parse_instant(row["end_time"]),
			duration_seconds=int(row["duration_seconds"]),
			attributed_date=parse_date(row["attributed_date"]),
		)


@dataclass(frozen=True)
class ActiveTimer:
	habit_id: str
	start: datetime


@dataclass(frozen=True)
class SessionPayload:
	habit_id: str
	start_time: datetime
	end_time: datetime
	duration_seconds: int
	attributed_date: date
	session_id: Optional[str] = None  # set when editing an existing session

	def as_dict(self) -> Dict[str, Any]:
		"""Wire shape handed to the persistence layer."""
		return {
			"habit_id": self.habit_id,
			"start_time": iso_instant(self.start_time),
			"end_time": iso_instant(self.end_time),
			"duration_seconds": int(self.duration_seconds),
			"attributed_date": self.attributed_date.isoformat(),
		}

	def to_session(self, session_id: str) -> Session:
		return Session(
			id=session_id,
			habit_id=self.habit_id,
			start=self.start_time,
			end=self.end_time,
			duration_seconds=self.duration_seconds,
			attributed_date=self.attributed_date,
		)
