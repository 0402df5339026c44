import pytest
from sqlalchemy import create_engine, func, select, text
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from app.db import bootstrap
from app.models.room import Room
from app.models.scheduling_settings import SchedulingSettings


def _raise_error(message: str):
    raise RuntimeError(message)


def _memory_engine():
    return create_engine("sqlite+pysqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)


def test_runtime_schema_bootstrap_raises_on_validation_failure(monkeypatch):
    monkeypatch.setattr(bootstrap.Base.metadata, "create_all", lambda bind: None)
    monkeypatch.setattr(
        bootstrap,
        "_assert_required_columns",
        lambda engine: _raise_error("missing required schema"),
    )

    with pytest.raises(RuntimeError, match="Runtime schema compatibility bootstrap failed"):
        bootstrap.ensure_runtime_schema_compatibility(_memory_engine())


def test_bootstrap_seeds_rooms_once():
    engine = _memory_engine()
    bootstrap.ensure_runtime_schema_compatibility(engine)
    bootstrap.ensure_runtime_schema_compatibility(engine)

    with Session(engine) as db:
        rooms = db.execute(select(Room).order_by(Room.id)).scalars().all()
        assert [(room.id, room.name, room.capacity) for room in rooms] == [
            (1, "西116", 40),
            (2, "西108", 36),
            (3, "西106", 32),
            (4, "西102", 30),
            (5, "东131", 28),
        ]
        settings_row = db.get(SchedulingSettings, 1)
        assert settings_row.semester_start_monday.isoformat() == "2025-09-01"


def test_bootstrap_keeps_edited_capacities():
    engine = _memory_engine()
    bootstrap.ensure_runtime_schema_compatibility(engine)
    with Session(engine) as db:
        db.get(Room, 2).capacity = 50
        db.commit()

    bootstrap.ensure_runtime_schema_compatibility(engine)
    with Session(engine) as db:
        assert db.get(Room, 2).capacity == 50
        assert db.execute(select(func.count(Room.id))).scalar_one() == 5


def test_bootstrap_refuses_a_sessions_table_missing_columns():
    engine = _memory_engine()
    with engine.begin() as connection:
        connection.execute(
            text(
                "CREATE TABLE sessions ("
                "id INTEGER PRIMARY KEY, room_id INTEGER NOT NULL, date DATE NOT NULL, "
                "period INTEGER NOT NULL, course VARCHAR(200) NOT NULL, teacher VARCHAR(100) NOT NULL)"
            )
        )

    with pytest.raises(RuntimeError, match="Runtime schema compatibility bootstrap failed") as excinfo:
        bootstrap.ensure_runtime_schema_compatibility(engine)
    assert "sessions.duration" in str(excinfo.value.__cause__)
    assert "sessions.class_names" in str(excinfo.value.__cause__)
