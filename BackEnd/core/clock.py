from datetime import date, datetime, timezone, tzinfo
from typing import Optional, Union

DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def utc_now_iso(now: Optional[datetime] = None) -> str:
	"""Return current UTC time as ISO8601 string (no microseconds)."""
	if now is None:
		now = datetime.now(timezone.utc)
	return to_utc(now).replace(microsecond=0).isoformat()


def local_today_str(now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> str:
	"""Return local date as YYYY-MM-DD string."""
	if now is None:
		now = datetime.now(tz) if tz is not None else datetime.now()
	return attributed_date(now, tz).isoformat()


def fmt_hms(seconds: int) -> str:
	"""Format seconds as HH:MM:SS (hours are not wrapped at 24)."""
	seconds = int(seconds)
	h = seconds // 3600
	m = (seconds % 3600) // 60
	s = seconds % 60
	return f"{h:02}:{m:02}:{s:02}"


def fmt_duration(seconds: int) -> str:
	"""Format seconds as '1h 30m' or '45m'. Leftover seconds are dropped."""
	seconds = int(seconds)
	h = seconds // 3600
	m = (seconds % 3600) // 60
	if h > 0:
		return f"{h}h {m}m"
	return f"{m}m"


def to_local(instant: datetime, tz: Optional[tzinfo] = None) -> datetime:
	"""Return the wall-clock reading of `instant` in the user's zone.

	Naive datetimes are taken as local wall-clock already. Aware ones are
	converted to `tz`, or to the system zone when `tz` is None.
	"""
	if instant.tzinfo is None:
		return instant
	return instant.astimezone(tz)


def to_utc(instant: datetime) -> datetime:
	# naive values are local wall-clock, astimezone() resolves them
	return instant.astimezone(timezone.utc)


def attributed_date(start: datetime, tz: Optional[tzinfo] = None) -> date:
	"""Calendar date a session counts toward.

	Only the start instant matters: a session from 23:40 to 00:20 belongs
	entirely to the day it began. The date comes from the local
	year/month/day fields, never from the UTC rendering of the instant.
	"""
	local = to_local(start, tz)
	return date(local.year, local.month, local.day)


def parse_date(value: Union[str, date]) -> date:
	"""Parse a YYYY-MM-DD wire date. Datetimes are reduced to their date."""
	if isinstance(value, datetime):
		return value.date()
	if isinstance(value, date):
		return value
	return date.fromisoformat(value.strip())


def parse_instant(value: Union[str, datetime]) -> datetime:
	"""Parse an ISO8601 instant; a trailing 'Z' means UTC."""
	if isinstance(value, datetime):
		return value
	text = value.strip()
	if text.endswith("Z"):
		text = text[:-1] + "+00:00"
	return datetime.fromisoformat(text)


def iso_instant(instant: datetime) -> str:
	"""ISO8601 text for a timestamp; aware values keep their offset."""
	return instant.isoformat()


def day_name(day: Union[str, date]) -> str:
	"""Weekday label (Sun..Sat) from the date's own calendar fields."""
	d = parse_date(day)
	# date.weekday(): Monday == 0
	return DAY_NAMES[(d.weekday() + 1) % 7]
