from datetime import date, datetime, time, timedelta

import pytest

from app.services.period_calendar import (
    is_seasonal_shift,
    period_label,
    period_windows,
    semester_year,
    span_label,
    week_bounds,
    week_dates,
    week_number,
)


def _minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def test_every_day_has_eight_ordered_non_overlapping_windows():
    day = date(2024, 1, 1)
    while day <= date(2025, 12, 31):
        windows = period_windows(day)
        assert [window.period for window in windows] == list(range(1, 9))
        for window in windows:
            assert _minutes(window.end) - _minutes(window.start) == 50
        for earlier, later in zip(windows, windows[1:]):
            assert _minutes(earlier.end) < _minutes(later.start)
        day += timedelta(days=1)


@pytest.mark.parametrize("year", [2024, 2025, 2026])
def test_seasonal_shift_window_is_closed_on_both_ends(year):
    assert is_seasonal_shift(date(year, 5, 1))
    assert is_seasonal_shift(date(year, 10, 7))
    assert is_seasonal_shift(date(year, 7, 15))
    assert not is_seasonal_shift(date(year, 4, 30))
    assert not is_seasonal_shift(date(year, 10, 8))
    assert not is_seasonal_shift(date(year, 1, 15))


def test_morning_windows_never_move():
    expected = [("08:00", "08:50"), ("09:00", "09:50"), ("10:10", "11:00"), ("11:10", "12:00")]
    for day in (date(2025, 1, 6), date(2025, 6, 2)):
        assert [(w.start, w.end) for w in period_windows(day)[:4]] == expected


def test_afternoon_tables_follow_the_season():
    winter = [(w.start, w.end) for w in period_windows(date(2025, 11, 3))[4:]]
    shifted = [(w.start, w.end) for w in period_windows(date(2025, 9, 1))[4:]]
    assert winter == [("14:00", "14:50"), ("15:00", "15:50"), ("16:10", "17:00"), ("17:10", "18:00")]
    assert shifted == [("14:30", "15:20"), ("15:30", "16:20"), ("16:40", "17:30"), ("17:40", "18:30")]


def test_period_and_span_labels():
    winter_day = date(2025, 12, 1)
    assert period_label(winter_day, 1) == "08:00-08:50"
    assert period_label(winter_day, 5) == "14:00-14:50"
    assert span_label(winter_day, 1, 2) == "08:00-09:50"
    assert span_label(winter_day, 3, 1) == "10:10-11:00"
    # Spans are clipped at the last period of the day.
    assert span_label(winter_day, 7, 4) == "16:10-18:00"
    with pytest.raises(ValueError):
        period_label(winter_day, 9)


def test_week_bounds_start_on_monday_and_cover_full_days():
    monday, sunday = week_bounds(date(2025, 9, 7))  # a Sunday
    assert monday == datetime(2025, 9, 1, 0, 0, 0)
    assert sunday == datetime(2025, 9, 7, 23, 59, 59, 999000)
    assert sunday.time() == time(23, 59, 59, 999000)

    monday, sunday = week_bounds(date(2025, 9, 1))  # already a Monday
    assert monday.date() == date(2025, 9, 1)
    assert sunday.date() == date(2025, 9, 7)


def test_week_dates_span_monday_to_sunday():
    days = week_dates(date(2025, 12, 31))
    assert days[0] == date(2025, 12, 29)
    assert days[-1] == date(2026, 1, 4)
    assert [day.isoweekday() for day in days] == [1, 2, 3, 4, 5, 6, 7]


def test_week_number_edges():
    start = date(2025, 9, 1)
    assert week_number(date(2025, 8, 31), start) == 0
    assert week_number(date(2024, 12, 1), start) == 0
    assert week_number(date(2025, 9, 1), start) == 1
    assert week_number(date(2025, 9, 7), start) == 1
    assert week_number(date(2025, 9, 8), start) == 2
    assert week_number(date(2025, 12, 31), start) == 18


def test_week_number_aligns_a_mid_week_start_to_its_monday():
    start = date(2025, 9, 3)  # Wednesday
    assert week_number(date(2025, 9, 1), start) == 1
    assert week_number(date(2025, 8, 31), start) == 0


def test_semester_year_is_the_start_year():
    assert semester_year(date(2025, 9, 1)) == 2025
    assert semester_year(date(2026, 2, 23)) == 2026
