from __future__ import annotations

import datetime as dt
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator

from app.schemas.common import parse_iso_date
from app.schemas.room import RoomOut


class SessionFields(BaseModel):
    """Fields shared by week submissions and import rows.

    ``allow_overflow`` is deliberately absent: it is always derived server-side
    and any client-supplied value is dropped.
    """

    date: dt.date
    period: int = Field(ge=1, le=8)
    course: str = Field(min_length=1, max_length=200)
    teacher: str = Field(min_length=1, max_length=100)
    content: str | None = Field(default=None, max_length=5000)
    planned: int | None = Field(default=None, ge=0)
    capacity: int | None = Field(default=None, ge=0)
    duration: int | None = Field(default=None, ge=1, le=8)
    class_names: str | None = Field(
        default=None,
        validation_alias=AliasChoices("class_names", "classNames"),
        max_length=5000,
    )

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, value: object) -> dt.date:
        return parse_iso_date(value)

    @field_validator("planned", "capacity", "duration", mode="before")
    @classmethod
    def blank_number_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("course", "teacher")
    @classmethod
    def strip_text(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("must not be blank")
        return text

    @field_validator("class_names")
    @classmethod
    def blank_class_names_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class WeekSessionIn(SessionFields):
    pass


class WeekReplaceRequest(BaseModel):
    sessions: list[WeekSessionIn] = Field(default_factory=list, max_length=56)


class ImportRow(SessionFields):
    """One spreadsheet row; the room is resolved separately before this model is validated."""


class ImportRequest(BaseModel):
    rows: list[dict[str, Any]] = Field(
        default_factory=list,
        validation_alias=AliasChoices("rows", "sessions"),
        max_length=5000,
    )


class RowError(BaseModel):
    index: int
    kind: Literal["validation", "unresolved_reference"]
    field: str | None = None
    message: str
    names: list[str] = Field(default_factory=list)


class PlannedRow(BaseModel):
    index: int
    action: Literal["insert", "update"]
    room_id: int
    date: dt.date
    period: int
    course: str
    teacher: str
    content: str | None = None
    planned: int
    capacity: int
    allow_overflow: bool
    duration: int
    class_names: str | None = None


class ImportResult(BaseModel):
    dry_run: bool = False
    inserted: int = 0
    updated: int = 0
    failed: int = 0
    errors: list[RowError] = Field(default_factory=list)
    rows: list[PlannedRow] = Field(default_factory=list)


class ClearRequest(BaseModel):
    room_id: int | None = Field(default=None, validation_alias=AliasChoices("room_id", "roomId", "labId"))


class ClearResult(BaseModel):
    room_id: int | None
    deleted: int


class SessionOut(BaseModel):
    id: int
    room_id: int
    date: dt.date
    period: int
    course: str
    teacher: str
    content: str | None = None
    planned: int
    capacity: int
    allow_overflow: bool
    duration: int
    class_names: str | None = None
    time: str | None = None

    model_config = {"from_attributes": True}


class PeriodWindowOut(BaseModel):
    period: int
    start: str
    end: str


class SlotOut(PeriodWindowOut):
    label: str
    session: SessionOut | None = None


class DayOut(BaseModel):
    date: dt.date
    day_of_week: int
    seasonal_shift: bool
    slots: list[SlotOut]


class WeekRangeOut(BaseModel):
    monday: dt.date
    sunday: dt.date


class WeekViewOut(BaseModel):
    room: RoomOut
    week: WeekRangeOut
    periods: list[PeriodWindowOut]
    days: list[DayOut]
