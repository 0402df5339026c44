from datetime import date

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_timetable_store
from app.core.exceptions import ValidationFailedError
from app.schemas.common import parse_iso_date
from app.schemas.timetable import (
    ClearRequest,
    ClearResult,
    ImportRequest,
    ImportResult,
    WeekReplaceRequest,
    WeekViewOut,
)
from app.services.timetable_store import TimetableStore

router = APIRouter()


def query_date(value: str | None, *, field: str = "date") -> date:
    if value is None:
        return date.today()
    try:
        return parse_iso_date(value)
    except ValueError as exc:
        raise ValidationFailedError(str(exc), field=field) from exc


@router.get("/rooms/{room_id}/week", response_model=WeekViewOut)
def get_week(
    room_id: int,
    date_value: str | None = Query(default=None, alias="date"),
    store: TimetableStore = Depends(get_timetable_store),
) -> WeekViewOut:
    return store.week_view(room_id, query_date(date_value))


@router.put("/rooms/{room_id}/week", response_model=WeekViewOut)
def replace_week(
    room_id: int,
    payload: WeekReplaceRequest,
    date_value: str = Query(alias="date"),
    store: TimetableStore = Depends(get_timetable_store),
) -> WeekViewOut:
    return store.replace_week(room_id, query_date(date_value), payload.sessions)


@router.post("/import", response_model=ImportResult)
def import_rows(
    payload: ImportRequest,
    dry_run: bool = Query(default=False, alias="dryRun"),
    store: TimetableStore = Depends(get_timetable_store),
) -> ImportResult:
    return store.upsert_rows(payload.rows, dry_run=dry_run)


@router.post("/clear", response_model=ClearResult)
def clear_sessions(payload: ClearRequest, store: TimetableStore = Depends(get_timetable_store)) -> ClearResult:
    deleted = store.clear_room(payload.room_id)
    return ClearResult(room_id=payload.room_id, deleted=deleted)


@router.get("/courses", response_model=list[str])
def list_courses(store: TimetableStore = Depends(get_timetable_store)) -> list[str]:
    return store.list_courses()
