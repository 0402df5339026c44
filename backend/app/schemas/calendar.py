from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field, field_validator

from app.models.calendar_override import OverrideType
from app.schemas.common import parse_iso_date
from app.schemas.timetable import PeriodWindowOut, WeekRangeOut


class SemesterStartUpdate(BaseModel):
    date: dt.date

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, value: object) -> dt.date:
        return parse_iso_date(value)


class SemesterStartOut(BaseModel):
    semester_start_monday: dt.date
    semester_year: int


class CalendarOverrideIn(BaseModel):
    date: dt.date
    type: OverrideType

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, value: object) -> dt.date:
        return parse_iso_date(value)


class CalendarOverrideOut(BaseModel):
    date: dt.date
    type: OverrideType

    model_config = {"from_attributes": True}


class CalendarOverrideBatch(BaseModel):
    overrides: list[CalendarOverrideIn] = Field(default_factory=list, max_length=1000)
    reset: bool = False


class PeriodScheduleOut(BaseModel):
    date: dt.date
    seasonal_shift: bool
    workday: bool
    week: WeekRangeOut
    week_number: int
    semester_year: int
    periods: list[PeriodWindowOut]
