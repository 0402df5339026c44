from __future__ import annotations

from collections.abc import Iterable
import logging
from datetime import date

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.models.calendar_override import CalendarOverride, OverrideType
from app.schemas.calendar import CalendarOverrideIn
from app.services.period_calendar import is_weekday

logger = logging.getLogger(__name__)


class CalendarOverrideRegistry:
    """Date-keyed workday swaps (a Saturday made a workday, a Monday made a holiday)."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def list_all(self) -> list[CalendarOverride]:
        return list(self.db.execute(select(CalendarOverride).order_by(CalendarOverride.date.asc())).scalars())

    def between(self, start: date, end: date) -> dict[date, OverrideType]:
        rows = self.db.execute(
            select(CalendarOverride).where(CalendarOverride.date.between(start, end))
        ).scalars()
        return {row.date: row.type for row in rows}

    def upsert_many(self, overrides: Iterable[CalendarOverrideIn], *, reset: bool = False) -> list[CalendarOverride]:
        if reset:
            self.db.execute(delete(CalendarOverride))
        count = 0
        for item in overrides:
            self.db.merge(CalendarOverride(date=item.date, type=item.type))
            count += 1
        self.db.commit()
        logger.info("Stored %d calendar override(s)%s", count, " after reset" if reset else "")
        return self.list_all()

    def delete(self, day: date) -> list[CalendarOverride]:
        self.db.execute(delete(CalendarOverride).where(CalendarOverride.date == day))
        self.db.commit()
        return self.list_all()

    def is_workday(self, day: date, overrides: dict[date, OverrideType] | None = None) -> bool:
        if overrides is None:
            overrides = self.between(day, day)
        return is_workday(day, overrides)


def is_workday(day: date, overrides: dict[date, OverrideType]) -> bool:
    override = overrides.get(day)
    if override is OverrideType.work:
        return True
    if override is OverrideType.off:
        return False
    return is_weekday(day)
