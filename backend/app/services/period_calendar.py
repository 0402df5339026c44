"""Date to class-period arithmetic.

Everything here is pure: callers validate ``YYYY-MM-DD`` input before calling
in. Afternoon start times move half an hour later during the seasonal shift
window (May 1 through October 7, both ends inclusive); mornings never move.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

PERIOD_COUNT = 8
PERIOD_INDICES = tuple(range(1, PERIOD_COUNT + 1))

SEASONAL_SHIFT_START = (5, 1)
SEASONAL_SHIFT_END = (10, 7)


@dataclass(frozen=True)
class PeriodWindow:
    period: int
    start: str
    end: str

    def as_dict(self) -> dict:
        return {"period": self.period, "start": self.start, "end": self.end}


MORNING_WINDOWS = (
    PeriodWindow(1, "08:00", "08:50"),
    PeriodWindow(2, "09:00", "09:50"),
    PeriodWindow(3, "10:10", "11:00"),
    PeriodWindow(4, "11:10", "12:00"),
)

WINTER_AFTERNOON_WINDOWS = (
    PeriodWindow(5, "14:00", "14:50"),
    PeriodWindow(6, "15:00", "15:50"),
    PeriodWindow(7, "16:10", "17:00"),
    PeriodWindow(8, "17:10", "18:00"),
)

SHIFTED_AFTERNOON_WINDOWS = (
    PeriodWindow(5, "14:30", "15:20"),
    PeriodWindow(6, "15:30", "16:20"),
    PeriodWindow(7, "16:40", "17:30"),
    PeriodWindow(8, "17:40", "18:30"),
)

END_OF_DAY = time(23, 59, 59, 999000)


def is_valid_period(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value in PERIOD_INDICES


def is_seasonal_shift(day: date) -> bool:
    return SEASONAL_SHIFT_START <= (day.month, day.day) <= SEASONAL_SHIFT_END


def period_windows(day: date) -> list[PeriodWindow]:
    afternoon = SHIFTED_AFTERNOON_WINDOWS if is_seasonal_shift(day) else WINTER_AFTERNOON_WINDOWS
    return [*MORNING_WINDOWS, *afternoon]


def period_window(day: date, period: int) -> PeriodWindow:
    if not is_valid_period(period):
        raise ValueError(f"period must be between 1 and {PERIOD_COUNT}, got {period!r}")
    return period_windows(day)[period - 1]


def period_label(day: date, period: int) -> str:
    window = period_window(day, period)
    return f"{window.start}-{window.end}"


def span_label(day: date, period: int, duration: int) -> str:
    """Clock range covered by a session starting at ``period`` and lasting ``duration`` periods.

    A span running past the last period is clipped to the last period's end.
    """
    first = period_window(day, period)
    last_period = min(PERIOD_COUNT, period + max(1, duration) - 1)
    last = period_window(day, last_period)
    return f"{first.start}-{last.end}"


def monday_of(day: date) -> date:
    return day - timedelta(days=day.weekday())


def week_bounds(day: date) -> tuple[datetime, datetime]:
    monday = monday_of(day)
    sunday = monday + timedelta(days=6)
    return datetime.combine(monday, time.min), datetime.combine(sunday, END_OF_DAY)


def week_dates(day: date) -> list[date]:
    monday = monday_of(day)
    return [monday + timedelta(days=offset) for offset in range(7)]


def week_number(day: date, semester_start_monday: date) -> int:
    start = monday_of(semester_start_monday)
    if day < start:
        return 0
    return (monday_of(day) - start).days // 7 + 1


def semester_year(semester_start_monday: date) -> int:
    return semester_start_monday.year


def is_weekday(day: date) -> bool:
    return day.weekday() < 5
