from __future__ import annotations

import logging

from sqlalchemy import func, inspect, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

import app.models  # noqa: F401
from app.core.config import get_settings
from app.db.base import Base
from app.db.session import engine as default_engine
from app.models.room import Room
from app.models.scheduling_settings import SchedulingSettings
from app.services.semester import SETTINGS_ROW_ID, default_semester_start

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: dict[str, set[str]] = {
    "rooms": {"id", "name", "capacity"},
    "classes": {"id", "name", "major", "student_count"},
    "sessions": {
        "id",
        "room_id",
        "date",
        "period",
        "course",
        "teacher",
        "planned",
        "capacity",
        "allow_overflow",
        "duration",
        "class_names",
    },
    "calendar_overrides": {"date", "type"},
    "scheduling_settings": {"id", "semester_start_monday"},
}


def _assert_required_columns(engine: Engine) -> None:
    with engine.begin() as connection:
        inspector = inspect(connection)
        table_names = set(inspector.get_table_names())
        missing_tables = [name for name in REQUIRED_COLUMNS if name not in table_names]
        if missing_tables:
            raise RuntimeError(f"Missing required tables: {', '.join(sorted(missing_tables))}")

        missing_columns: list[str] = []
        for table_name, required in REQUIRED_COLUMNS.items():
            existing = {item["name"] for item in inspector.get_columns(table_name)}
            for column_name in sorted(required - existing):
                missing_columns.append(f"{table_name}.{column_name}")
        if missing_columns:
            raise RuntimeError(f"Missing required columns: {', '.join(missing_columns)}")


def seed_defaults(db: Session) -> None:
    """Insert the fixed room set and the semester settings row on first boot."""
    if db.execute(select(func.count(Room.id))).scalar_one() == 0:
        seed_rooms = get_settings().seed_rooms
        db.add_all(Room(id=item.id, name=item.name, capacity=item.capacity) for item in seed_rooms)
        logger.info("Seeded %d room(s)", len(seed_rooms))
    if db.get(SchedulingSettings, SETTINGS_ROW_ID) is None:
        db.add(SchedulingSettings(id=SETTINGS_ROW_ID, semester_start_monday=default_semester_start()))
    db.commit()


def ensure_runtime_schema_compatibility(engine: Engine | None = None) -> None:
    bind = engine or default_engine
    try:
        Base.metadata.create_all(bind=bind)
        _assert_required_columns(bind)
        with Session(bind) as db:
            seed_defaults(db)
    except Exception as exc:  # pragma: no cover - runtime environment dependent
        logger.exception("Runtime schema compatibility bootstrap failed")
        raise RuntimeError("Runtime schema compatibility bootstrap failed") from exc
