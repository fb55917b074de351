"""Tests for week/month windows, labels and navigation."""

from datetime import date, datetime, timedelta

import pytest

from BackEnd.core.periods import (
    MONTH,
    WEEK,
    days_in_month,
    end_of_week,
    period_dates,
    period_label,
    start_of_week,
    step_reference,
)


def _days(start, count):
    return [start + timedelta(days=i) for i in range(count)]


def test_start_and_end_of_week():
    assert start_of_week(date(2024, 3, 13)) == datetime(2024, 3, 10)
    assert start_of_week(date(2024, 3, 10)) == datetime(2024, 3, 10)
    assert end_of_week(date(2024, 3, 13)) == datetime(2024, 3, 16, 23, 59, 59, 999999)


def test_start_of_week_accepts_datetime():
    assert start_of_week(datetime(2024, 3, 16, 23, 59)) == datetime(2024, 3, 10)


def test_week_window_shape():
    for day in _days(date(2023, 12, 1), 400):
        dates = period_dates(day, WEEK)
        assert len(dates) == 7
        assert dates == sorted(dates)
        assert all(b - a == timedelta(days=1) for a, b in zip(dates, dates[1:]))
        assert dates[0].weekday() == 6  # Sunday
        assert day in dates


def test_week_window_is_the_same_from_any_day_in_it():
    for day in _days(date(2024, 12, 20), 30):
        assert period_dates(start_of_week(day), WEEK) == period_dates(day, WEEK)


def test_week_window_across_year_end():
    assert period_dates(date(2024, 12, 31), WEEK) == _days(date(2024, 12, 29), 7)


@pytest.mark.parametrize(
    "reference, expected_len",
    [
        (date(2023, 2, 14), 28),
        (date(2024, 2, 14), 29),
        (date(2024, 4, 30), 30),
        (date(2024, 1, 1), 31),
    ],
)
def test_month_window_covers_every_day(reference, expected_len):
    dates = period_dates(reference, MONTH)
    assert len(dates) == expected_len == days_in_month(reference.year, reference.month)
    assert [d.day for d in dates] == list(range(1, expected_len + 1))
    assert all(d.month == reference.month and d.year == reference.year for d in dates)


def test_unknown_mode_is_rejected():
    with pytest.raises(ValueError):
        period_dates(date(2024, 1, 1), "year")


def test_period_labels():
    assert period_label(date(2024, 3, 13), WEEK) == "Mar 10 - Mar 16, 2024"
    assert period_label(date(2024, 12, 31), WEEK) == "Dec 29 - Jan 4, 2025"
    assert period_label(date(2024, 3, 13), MONTH) == "March 2024"


def test_step_week_moves_seven_days():
    assert step_reference(date(2024, 3, 13), WEEK, 1) == date(2024, 3, 20)
    assert step_reference(date(2024, 3, 13), WEEK, -2) == date(2024, 2, 28)


def test_step_month_clamps_day_of_month():
    assert step_reference(date(2024, 1, 31), MONTH, 1) == date(2024, 2, 29)
    assert step_reference(date(2023, 1, 31), MONTH, 1) == date(2023, 2, 28)
    assert step_reference(date(2024, 3, 31), MONTH, -1) == date(2024, 2, 29)
    assert step_reference(date(2024, 12, 15), MONTH, 1) == date(2025, 1, 15)
    assert step_reference(date(2024, 1, 15), MONTH, -1) == date(2023, 12, 15)


def test_stepping_months_never_skips_one():
    ref = date(2024, 1, 31)
    months = []
    for _ in range(12):
        months.append(ref.month)
        ref = step_reference(ref, MONTH, 1)
    assert months == list(range(1, 13))
