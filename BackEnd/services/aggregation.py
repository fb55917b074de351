"""
Aggregation of logged sessions into per-day, per-period and per-habit
totals.

Every function takes whatever subset of sessions the caller hands it
(use filter_by_habit() to narrow to one habit first) and returns freshly
built values. Nothing here keeps state between calls, and an empty
period always yields zero/empty results.
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from BackEnd.core.clock import day_name
from BackEnd.core.models import Habit, Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayTotal:
	date: date
	day_name: str
	seconds: int


@dataclass(frozen=True)
class HabitSplit:
	habit_id: Optional[str]  # None for sessions whose habit is not known
	habit: Optional[Habit]
	seconds: int

	@property
	def is_unknown(self) -> bool:
		return self.habit is None


def filter_by_habit(sessions: Iterable[Session], habit_id: Optional[str]) -> List[Session]:
	"""Sessions of one habit; `None` keeps every session."""
	if habit_id is None:
		return list(sessions)
	return [s for s in sessions if s.habit_id == habit_id]


def daily_total(sessions: Iterable[Session], day: date) -> int:
	return sum(s.duration_seconds for s in sessions if s.attributed_date == day)


def period_total(sessions: Iterable[Session], period_dates: Iterable[date]) -> int:
	dates = set(period_dates)
	return sum(s.duration_seconds for s in sessions if s.attributed_date in dates)


def per_habit_breakdown(
	sessions: Iterable[Session],
	habit_ids: Iterable[str],
	period_dates: Iterable[date],
) -> Dict[str, int]:
	"""Seconds per habit id, limited to `habit_ids` and to the period."""
	dates = set(period_dates)
	totals = {habit_id: 0 for habit_id in habit_ids}
	for s in sessions:
		if s.habit_id in totals and s.attributed_date in dates:
			totals[s.habit_id] += s.duration_seconds
	return totals


def daily_totals(sessions: Iterable[Session], period_dates: Iterable[date]) -> Dict[date, int]:
	totals = {d: 0 for d in period_dates}
	for s in sessions:
		if s.attributed_date in totals:
			totals[s.attributed_date] += s.duration_seconds
	return totals


def max_daily_total(sessions: Iterable[Session], period_dates: Iterable[date]) -> int:
	"""Largest single-day total in the period, or 1 when there is none.

	This is a scaling denominator for charts (bar height = day / max), not
	a general statistic: an idle period reports 1 so that division is
	always safe. Callers that need the real maximum should use
	daily_totals() directly.
	"""
	totals = daily_totals(sessions, period_dates)
	best = max(totals.values(), default=0)
	return best if best > 0 else 1


def daily_series(sessions: Iterable[Session], period_dates: Sequence[date]) -> List[DayTotal]:
	"""Per-day totals in period order, with weekday labels."""
	totals = daily_totals(sessions, period_dates)
	return [DayTotal(date=d, day_name=day_name(d), seconds=totals[d]) for d in period_dates]


def active_habits_in_period(sessions: Iterable[Session], period_dates: Iterable[date]) -> List[str]:
	"""Habit ids with time in the period, in order of first appearance."""
	dates = set(period_dates)
	seen: Dict[str, None] = {}
	for s in sessions:
		if s.attributed_date in dates and s.habit_id not in seen:
			seen[s.habit_id] = None
	return list(seen)


def habit_split(
	sessions: Iterable[Session],
	habits: Iterable[Habit],
	period_dates: Iterable[date],
) -> List[HabitSplit]:
	"""Per-habit rows for the period, largest first.

	Every live habit gets a row, even at zero. Archived habits only appear
	when they have time in the period. Sessions pointing at a habit id that
	is not in `habits` are pooled into a single trailing row with habit
	None, so their time is still counted.
	"""
	sessions = list(sessions)
	dates = set(period_dates)
	habits = list(habits)
	known = {h.id for h in habits}
	totals = per_habit_breakdown(sessions, known, dates)

	rows = [
		HabitSplit(habit_id=h.id, habit=h, seconds=totals[h.id])
		for h in habits
		if not h.archived or totals[h.id] > 0
	]
	rows.sort(key=lambda r: r.seconds, reverse=True)

	unknown = 0
	for s in sessions:
		if s.habit_id not in known and s.attributed_date in dates:
			logger.warning("Session %s references unknown habit %s", s.id, s.habit_id)
			unknown += s.duration_seconds
	if unknown:
		rows.append(HabitSplit(habit_id=None, habit=None, seconds=unknown))
	return rows


def selectable_habits(habits: Iterable[Habit]) -> List[Habit]:
	"""Habits offered when starting or recording a new session."""
	return [h for h in habits if not h.archived]


def sort_newest_first(sessions: Iterable[Session]) -> List[Session]:
	return sorted(sessions, key=lambda s: s.start.timestamp(), reverse=True)


def daily_streak(sessions: Iterable[Session], today: date) -> int:
	"""
	Consecutive days with tracked time, counting back from `today`.
	Returns 0 if nothing was tracked today.
	"""
	days = {s.attributed_date for s in sessions if s.duration_seconds > 0}
	streak = 0
	current = today
	while current in days:
		streak += 1
		current -= timedelta(days=1)
	return streak


def total_days_tracked(sessions: Iterable[Session]) -> int:
	return len({s.attributed_date for s in sessions if s.duration_seconds > 0})
