"""
Session recording validator.

Every way a session gets created (manual entry, edit of an existing
entry, stopping a live timer, a duration adjusted in the review step)
ends up in validate_span(), which computes the duration and the
attributed date and rejects anything outside (0, max] seconds.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any, Mapping, Optional, Union

from BackEnd.core.clock import attributed_date, fmt_duration, parse_date, parse_instant, to_local, to_utc
from BackEnd.core.errors import SessionValidationError
from BackEnd.core.models import MAX_SESSION_SECONDS, ActiveTimer, SessionPayload

logger = logging.getLogger(__name__)

REVIEW_INCREMENT_SECONDS = 5 * 60


@dataclass(frozen=True)
class RecordedSession:
	payload: SessionPayload
	crosses_midnight: bool = False

	@property
	def warning(self) -> Optional[str]:
		"""Informational note for the UI; never blocks saving."""
		if not self.crosses_midnight:
			return None
		return (
			f"This session crosses midnight. All of it counts toward "
			f"{self.payload.attributed_date.isoformat()}, the day it started."
		)


def _elapsed_seconds(start: datetime, end: datetime) -> float:
	# aware values may straddle a DST change, compare them in UTC
	if start.tzinfo is not None and end.tzinfo is not None:
		return (to_utc(end) - to_utc(start)).total_seconds()
	return (end - start).total_seconds()


def _component(value: Any, name: str, upper: int) -> int:
	try:
		number = int(value)
	except (TypeError, ValueError):
		raise SessionValidationError(f"Invalid {name} '{value}'.")
	if not 0 <= number <= upper:
		raise SessionValidationError(f"{name.capitalize()} must be between 0 and {upper}, got {number}.")
	return number


def validate_span(
	habit_id: str,
	start: datetime,
	end: datetime,
	session_id: Optional[str] = None,
	tz: Optional[tzinfo] = None,
	max_seconds: int = MAX_SESSION_SECONDS,
) -> RecordedSession:
	"""Validate a start/end pair and build the payload to store."""
	if not habit_id:
		raise SessionValidationError("A habit must be selected.")
	if (start.tzinfo is None) != (end.tzinfo is None):
		raise SessionValidationError("Start and end must both carry a timezone, or neither.")

	duration = round(_elapsed_seconds(start, end))
	if duration <= 0:
		raise SessionValidationError("End time must be after start time.")
	if duration > max_seconds:
		raise SessionValidationError(
			f"Session exceeds maximum session length of {fmt_duration(max_seconds)}. "
			"Please split the entry."
		)

	started_on = attributed_date(start, tz)
	crosses = to_local(end, tz).date() != started_on
	if crosses:
		logger.warning("Session %s-%s crosses midnight, attributed to %s", start, end, started_on)

	payload = SessionPayload(
		habit_id=habit_id,
		start_time=start,
		end_time=end,
		duration_seconds=int(duration),
		attributed_date=started_on,
		session_id=session_id,
	)
	return RecordedSession(payload=payload, crosses_midnight=crosses)


def record_manual_session(
	habit_id: str,
	day: Union[str, date],
	start_hour: Any,
	start_minute: Any,
	end_hour: Any,
	end_minute: Any,
	session_id: Optional[str] = None,
	tz: Optional[tzinfo] = None,
	max_seconds: int = MAX_SESSION_SECONDS,
) -> RecordedSession:
	"""Validate a manual entry given as a date plus start/end hour and minute.

	Both times are read on `day`, as local wall-clock. An end at or before
	the start means the session ran past midnight, so the end moves to the
	next day (23:30-00:15 is 45 minutes). The session is attributed to
	`day` either way.
	"""
	try:
		start_day = parse_date(day)
	except (TypeError, ValueError):
		raise SessionValidationError(f"Invalid date '{day}', expected YYYY-MM-DD.")

	start_t = time(_component(start_hour, "start hour", 23), _component(start_minute, "start minute", 59))
	end_t = time(_component(end_hour, "end hour", 23), _component(end_minute, "end minute", 59))

	start = datetime.combine(start_day, start_t)
	end = datetime.combine(start_day, end_t)
	if end <= start:
		end = datetime.combine(start_day + timedelta(days=1), end_t)

	if tz is not None:
		start = start.replace(tzinfo=tz)
		end = end.replace(tzinfo=tz)

	return validate_span(habit_id, start, end, session_id=session_id, tz=tz, max_seconds=max_seconds)


def complete_timer(
	active: ActiveTimer,
	elapsed_seconds: int,
	tz: Optional[tzinfo] = None,
	max_seconds: int = MAX_SESSION_SECONDS,
) -> RecordedSession:
	"""Turn a stopped timer into a session.

	`elapsed_seconds` may have been adjusted by the user in the review
	step; it is checked by the same rules as a manual entry.
	"""
	end = active.start + timedelta(seconds=int(elapsed_seconds))
	return validate_span(active.habit_id, active.start, end, tz=tz, max_seconds=max_seconds)


def validate_payload(
	row: Mapping[str, Any],
	tz: Optional[tzinfo] = None,
	max_seconds: int = MAX_SESSION_SECONDS,
) -> RecordedSession:
	"""Re-validate a session given as ISO strings (edit form, import).

	Duration and attributed date are recomputed from the instants; values
	supplied in `row` for them are ignored.
	"""
	try:
		start = parse_instant(row["start_time"])
		end = parse_instant(row["end_time"])
	except KeyError as e:
		raise SessionValidationError(f"Missing required field {e}.")
	except (TypeError, ValueError) as e:
		raise SessionValidationError(f"Invalid timestamp format. {e}")
	habit_id = row.get("habit_id")
	session_id = row.get("id")
	return validate_span(
		str(habit_id) if habit_id is not None else "",
		start,
		end,
		session_id=str(session_id) if session_id is not None else None,
		tz=tz,
		max_seconds=max_seconds,
	)


def round_to_increment(seconds: int, increment: int = REVIEW_INCREMENT_SECONDS) -> int:
	"""Round to the nearest increment (halves round up), never below one increment."""
	seconds = int(seconds)
	rounded = ((seconds + increment // 2) // increment) * increment
	return max(increment, rounded)
