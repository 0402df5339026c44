from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.api.routes.timetable import query_date
from app.schemas.stats import UtilizationOut
from app.services.utilization import cached_utilization

router = APIRouter()


@router.get("/utilization", response_model=UtilizationOut)
def read_utilization(
    date_value: str | None = Query(default=None, alias="date"),
    room_id: int | None = Query(default=None),
    db: Session = Depends(get_db),
) -> UtilizationOut:
    return cached_utilization(db, query_date(date_value), room_id)
