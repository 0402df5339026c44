from __future__ import annotations

import datetime as dt

from pydantic import BaseModel


class UtilizationOut(BaseModel):
    date: dt.date
    room_id: int | None = None
    semester_start_monday: dt.date
    window_end: dt.date
    week_number: int
    semester_year: int
    sessions: int
    planned_attendance: int
    active_rooms: int
    rooms: int
    workdays: int
    utilization: float
