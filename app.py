"""
Habit Tracker - console summary.

Prints the current week (or month) from the local database: total time,
time per day and the split per habit.
"""

import argparse
import logging
from datetime import datetime

from BackEnd.core.calendar_grid import calendar_grid, grid_rows, weekday_headers
from BackEnd.core.clock import attributed_date, fmt_duration
from BackEnd.core.periods import MODES, WEEK, period_dates, period_label, step_reference
from BackEnd.core.settings import load_settings
from BackEnd.repos import session_repo
from BackEnd.services import aggregation


def print_summary(reference, mode, settings, habit_id=None):
    dates = period_dates(reference, mode)
    habits = session_repo.list_habits()
    sessions = aggregation.filter_by_habit(
        session_repo.list_sessions(since=dates[0], until=dates[-1]), habit_id
    )

    print("=" * 50)
    print(period_label(reference, mode))
    print("=" * 50)
    print(f"Total: {fmt_duration(aggregation.period_total(sessions, dates))}")

    if mode == WEEK:
        print()
        scale = aggregation.max_daily_total(sessions, dates)
        for day in aggregation.daily_series(sessions, dates):
            bar = "#" * round(20 * day.seconds / scale)
            print(f"  {day.day_name} {day.date.day:>2}  {fmt_duration(day.seconds):>8}  {bar}")
    else:
        totals = aggregation.daily_totals(sessions, dates)
        print()
        print("  " + " ".join(f"{h:>4}" for h in weekday_headers(settings.grid_start_index)))
        for row in grid_rows(calendar_grid(reference, settings.grid_start_index)):
            cells = []
            for cell in row:
                if cell is None:
                    cells.append("    ")
                else:
                    cells.append(f"{cell.day:>3}{'*' if totals[cell.date] else ' '}")
            print("  " + " ".join(cells))

    split = aggregation.habit_split(sessions, habits, dates)
    if split:
        print("\nBy habit:")
        for row in split:
            if row.is_unknown:
                label = "Unknown habit"
            else:
                label = row.habit.name + (" (archived)" if row.habit.archived else "")
            print(f"  {label:<24} {fmt_duration(row.seconds):>8}")


def main():
    parser = argparse.ArgumentParser(description="Show tracked habit time for a week or month.")
    parser.add_argument("--mode", choices=MODES, default=WEEK)
    parser.add_argument("--offset", type=int, default=0, help="Periods to step back (negative) or forward.")
    parser.add_argument("--habit", default=None, help="Only count this habit id.")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    settings = load_settings()
    today = attributed_date(datetime.now().astimezone(), settings.tz)
    reference = step_reference(today, args.mode, args.offset)
    print_summary(reference, args.mode, settings, habit_id=args.habit)


if __name__ == "__main__":
    main()
