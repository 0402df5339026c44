from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import get_calendar_overrides, get_db
from app.api.routes.timetable import query_date
from app.schemas.calendar import (
    CalendarOverrideBatch,
    CalendarOverrideOut,
    PeriodScheduleOut,
    SemesterStartOut,
    SemesterStartUpdate,
)
from app.schemas.timetable import PeriodWindowOut, WeekRangeOut
from app.services.calendar_overrides import CalendarOverrideRegistry
from app.services.period_calendar import (
    is_seasonal_shift,
    period_windows,
    semester_year,
    week_bounds,
    week_number,
)
from app.services.semester import get_semester_start, set_semester_start

router = APIRouter()


@router.get("/semester-start", response_model=SemesterStartOut)
def read_semester_start(db: Session = Depends(get_db)) -> SemesterStartOut:
    start = get_semester_start(db)
    return SemesterStartOut(semester_start_monday=start, semester_year=semester_year(start))


@router.put("/semester-start", response_model=SemesterStartOut)
def update_semester_start(payload: SemesterStartUpdate, db: Session = Depends(get_db)) -> SemesterStartOut:
    start = set_semester_start(db, payload.date)
    return SemesterStartOut(semester_start_monday=start, semester_year=semester_year(start))


@router.get("/overrides", response_model=list[CalendarOverrideOut])
def list_overrides(overrides: CalendarOverrideRegistry = Depends(get_calendar_overrides)) -> list[CalendarOverrideOut]:
    return overrides.list_all()


@router.post("/overrides", response_model=list[CalendarOverrideOut])
def upsert_overrides(
    payload: CalendarOverrideBatch,
    overrides: CalendarOverrideRegistry = Depends(get_calendar_overrides),
) -> list[CalendarOverrideOut]:
    return overrides.upsert_many(payload.overrides, reset=payload.reset)


@router.delete("/overrides/{override_date}", response_model=list[CalendarOverrideOut])
def delete_override(
    override_date: str,
    overrides: CalendarOverrideRegistry = Depends(get_calendar_overrides),
) -> list[CalendarOverrideOut]:
    return overrides.delete(query_date(override_date))


@router.get("/periods", response_model=PeriodScheduleOut)
def read_periods(
    date_value: str | None = Query(default=None, alias="date"),
    db: Session = Depends(get_db),
) -> PeriodScheduleOut:
    day = query_date(date_value)
    start = get_semester_start(db)
    monday, sunday = week_bounds(day)
    return PeriodScheduleOut(
        date=day,
        seasonal_shift=is_seasonal_shift(day),
        workday=CalendarOverrideRegistry(db).is_workday(day),
        week=WeekRangeOut(monday=monday.date(), sunday=sunday.date()),
        week_number=week_number(day, start),
        semester_year=semester_year(start),
        periods=[PeriodWindowOut(**window.as_dict()) for window in period_windows(day)],
    )
