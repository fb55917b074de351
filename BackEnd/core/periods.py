import calendar
from datetime import date, datetime, time, timedelta
from typing import List, Union

WEEK = "week"
MONTH = "month"
MODES = (WEEK, MONTH)

MONTH_ABBREVS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
MONTH_NAMES = (
	"January", "February", "March", "April", "May", "June",
	"July", "August", "September", "October", "November", "December",
)


def _as_date(value: Union[date, datetime]) -> date:
	if isinstance(value, datetime):
		return value.date()
	return value


def _check_mode(mode: str) -> None:
	if mode not in MODES:
		raise ValueError(f"Unknown period mode '{mode}', expected 'week' or 'month'.")


def days_in_month(year: int, month: int) -> int:
	return calendar.monthrange(year, month)[1]


def start_of_week(day: Union[date, datetime]) -> datetime:
	"""Sunday on or before `day`, at 00:00."""
	d = _as_date(day)
	# weekday(): Monday == 0, so Sunday-based index is (weekday + 1) % 7
	offset = (d.weekday() + 1) % 7
	return datetime.combine(d - timedelta(days=offset), time.min)


def end_of_week(day: Union[date, datetime]) -> datetime:
	"""Saturday after start_of_week(day), at the last instant of the day."""
	start = start_of_week(day)
	return datetime.combine(start.date() + timedelta(days=6), time.max)


def period_dates(reference: Union[date, datetime], mode: str) -> List[date]:
	"""Ordered calendar dates of the week or month containing `reference`."""
	_check_mode(mode)
	ref = _as_date(reference)
	if mode == WEEK:
		first = start_of_week(ref).date()
		return [first + timedelta(days=i) for i in range(7)]
	last = days_in_month(ref.year, ref.month)
	return [date(ref.year, ref.month, d) for d in range(1, last + 1)]


def period_label(reference: Union[date, datetime], mode: str) -> str:
	_check_mode(mode)
	ref = _as_date(reference)
	if mode == WEEK:
		start = start_of_week(ref)
		end = end_of_week(ref)
		return (
			f"{MONTH_ABBREVS[start.month - 1]} {start.day} - "
			f"{MONTH_ABBREVS[end.month - 1]} {end.day}, {end.year}"
		)
	return f"{MONTH_NAMES[ref.month - 1]} {ref.year}"


def step_reference(reference: Union[date, datetime], mode: str, steps: int = 1) -> date:
	"""Move the reference date by whole weeks or whole months.

	Month steps keep the day of month, clamped to the length of the target
	month (Jan 31 + 1 month -> Feb 28/29).
	"""
	_check_mode(mode)
	ref = _as_date(reference)
	if mode == WEEK:
		return ref + timedelta(days=7 * steps)
	index = ref.year * 12 + (ref.month - 1) + steps
	year, month = divmod(index, 12)
	month += 1
	return date(year, month, min(ref.day, days_in_month(year, month)))
