import datetime as dt
from enum import Enum

from sqlalchemy import Date, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class OverrideType(str, Enum):
    work = "work"
    off = "off"


class CalendarOverride(Base):
    __tablename__ = "calendar_overrides"

    date: Mapped[dt.date] = mapped_column(Date, primary_key=True)
    type: Mapped[OverrideType] = mapped_column(SAEnum(OverrideType, name="calendar_override_type"), nullable=False)
