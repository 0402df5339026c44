from datetime import date, datetime

from sqlalchemy import Date, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.db.base import Base


class SchedulingSettings(Base):
    __tablename__ = "scheduling_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=1)
    semester_start_monday: Mapped[date] = mapped_column(Date, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
