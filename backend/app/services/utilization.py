from __future__ import annotations

from collections.abc import Callable, Hashable
from datetime import date, timedelta
import logging
from threading import Lock
import time
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.models.lab_session import LabSession
from app.schemas.stats import UtilizationOut
from app.services.calendar_overrides import CalendarOverrideRegistry, is_workday
from app.services.period_calendar import PERIOD_COUNT, semester_year, week_bounds, week_number
from app.services.rooms import RoomRegistry
from app.services.semester import get_semester_start

logger = logging.getLogger(__name__)


class SummaryCache:
    """Read-through cache for dashboard summaries. Write paths never touch it."""

    def __init__(self) -> None:
        self._entries: dict[Hashable, tuple[float, Any]] = {}
        self._lock = Lock()

    def get_or_compute(self, key: Hashable, ttl_seconds: int, compute: Callable[[], Any]) -> Any:
        now = time.monotonic()
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and now - entry[0] < ttl_seconds:
                return entry[1]
        value = compute()
        stored_at = time.monotonic()
        with self._lock:
            expired = [name for name, (created, _) in self._entries.items() if stored_at - created >= ttl_seconds]
            for name in expired:
                del self._entries[name]
            self._entries[key] = (stored_at, value)
        return value

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


_cache = SummaryCache()


def clear_summary_cache() -> None:
    _cache.clear()


def compute_utilization(db: Session, day: date, room_id: int | None = None) -> UtilizationOut:
    start = get_semester_start(db)
    anchor = day if day >= start else start
    window_end = week_bounds(anchor)[1].date()

    rooms = RoomRegistry(db)
    if room_id is not None:
        rooms.require(room_id)
        room_count = 1
    else:
        room_count = len(rooms.list())

    filters = [LabSession.date.between(start, window_end)]
    if room_id is not None:
        filters.append(LabSession.room_id == room_id)
    sessions, attendance, active_rooms = db.execute(
        select(
            func.count(LabSession.id),
            func.coalesce(func.sum(LabSession.planned), 0),
            func.count(func.distinct(LabSession.room_id)),
        ).where(*filters)
    ).one()

    overrides = CalendarOverrideRegistry(db).between(start, window_end)
    workdays = 0
    cursor = start
    while cursor <= window_end:
        if is_workday(cursor, overrides):
            workdays += 1
        cursor += timedelta(days=1)

    denominator = workdays * PERIOD_COUNT * room_count or 1
    return UtilizationOut(
        date=day,
        room_id=room_id,
        semester_start_monday=start,
        window_end=window_end,
        week_number=week_number(day, start),
        semester_year=semester_year(start),
        sessions=sessions,
        planned_attendance=attendance,
        active_rooms=active_rooms,
        rooms=room_count,
        workdays=workdays,
        utilization=round(sessions / denominator, 4),
    )


def cached_utilization(db: Session, day: date, room_id: int | None = None) -> UtilizationOut:
    ttl = get_settings().summary_cache_ttl_seconds
    key = ("utilization", day.isoformat(), room_id)
    return _cache.get_or_compute(key, ttl, lambda: compute_utilization(db, day, room_id))
