from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Sequence, Union

from BackEnd.core.clock import DAY_NAMES
from BackEnd.core.periods import days_in_month

SUNDAY = 0
MONDAY = 1


@dataclass(frozen=True)
class CalendarCell:
	day: int
	date: date


def first_weekday_offset(year: int, month: int, week_start: int = SUNDAY) -> int:
	"""Blank cells before the 1st when the grid begins on `week_start`."""
	sunday_index = (date(year, month, 1).weekday() + 1) % 7
	return (sunday_index - week_start) % 7


def weekday_headers(week_start: int = SUNDAY) -> List[str]:
	return [DAY_NAMES[(week_start + i) % 7] for i in range(7)]


def calendar_grid(reference: Union[date, datetime], week_start: int = SUNDAY) -> List[Optional[CalendarCell]]:
	"""Flat 7-column month grid: leading None blanks, then one cell per day.

	The grid stops after the last day of the month; the last row is not
	padded.
	"""
	if week_start not in (SUNDAY, MONDAY):
		raise ValueError(f"week_start must be SUNDAY (0) or MONDAY (1), got {week_start}")
	ref = reference.date() if isinstance(reference, datetime) else reference
	grid: List[Optional[CalendarCell]] = [None] * first_weekday_offset(ref.year, ref.month, week_start)
	for d in range(1, days_in_month(ref.year, ref.month) + 1):
		grid.append(CalendarCell(day=d, date=date(ref.year, ref.month, d)))
	return grid


def grid_rows(cells: Sequence[Optional[CalendarCell]]) -> List[List[Optional[CalendarCell]]]:
	return [list(cells[i:i + 7]) for i in range(0, len(cells), 7)]
