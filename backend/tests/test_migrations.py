from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from app.db.bootstrap import REQUIRED_COLUMNS

MIGRATIONS_DIR = Path(__file__).resolve().parents[2] / "database" / "migrations"


def _config(url: str) -> Config:
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    config.set_main_option("sqlalchemy.url", url)
    return config


def test_migrations_create_the_runtime_schema(tmp_path):
    url = f"sqlite+pysqlite:///{tmp_path / 'migrated.db'}"
    command.upgrade(_config(url), "head")

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        for table_name, required in REQUIRED_COLUMNS.items():
            columns = {item["name"] for item in inspector.get_columns(table_name)}
            assert required <= columns, table_name
        constraints = {item["name"] for item in inspector.get_unique_constraints("sessions")}
        assert "uq_sessions_slot" in constraints
    finally:
        engine.dispose()


def test_migrations_downgrade_to_empty(tmp_path):
    url = f"sqlite+pysqlite:///{tmp_path / 'migrated.db'}"
    config = _config(url)
    command.upgrade(config, "head")
    command.downgrade(config, "base")

    engine = create_engine(url)
    try:
        assert set(inspect(engine).get_table_names()) <= {"alembic_version"}
    finally:
        engine.dispose()
