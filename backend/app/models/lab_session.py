import datetime as dt

from sqlalchemy import Boolean, CheckConstraint, Date, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class LabSession(Base):
    """One course occupying a (room, date, period) slot."""

    __tablename__ = "sessions"
    __table_args__ = (
        UniqueConstraint("room_id", "date", "period", name="uq_sessions_slot"),
        CheckConstraint("period BETWEEN 1 AND 8", name="ck_sessions_period_range"),
        CheckConstraint("duration >= 1", name="ck_sessions_duration_positive"),
        CheckConstraint("planned >= 0", name="ck_sessions_planned_non_negative"),
        CheckConstraint("capacity >= 0", name="ck_sessions_capacity_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    room_id: Mapped[int] = mapped_column(ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False, index=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    period: Mapped[int] = mapped_column(Integer, nullable=False)
    course: Mapped[str] = mapped_column(String(200), nullable=False)
    teacher: Mapped[str] = mapped_column(String(100), nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    planned: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Snapshot of the room capacity at write time.
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    allow_overflow: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False, default=2)
    class_names: Mapped[str | None] = mapped_column(Text, nullable=True)
