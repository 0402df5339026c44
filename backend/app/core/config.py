from functools import lru_cache
import json
from pathlib import Path

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


BACKEND_ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class SeedRoom(BaseModel):
    id: int
    name: str
    capacity: int


DEFAULT_SEED_ROOMS = [
    SeedRoom(id=1, name="西116", capacity=40),
    SeedRoom(id=2, name="西108", capacity=36),
    SeedRoom(id=3, name="西106", capacity=32),
    SeedRoom(id=4, name="西102", capacity=30),
    SeedRoom(id=5, name="东131", capacity=28),
]


def _split_list(value: str) -> list[str]:
    stripped = value.strip()
    if stripped.startswith("["):
        try:
            parsed = json.loads(stripped)
            if isinstance(parsed, list):
                return [str(item).strip() for item in parsed if str(item).strip()]
        except json.JSONDecodeError:
            pass
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    # Resolve to backend/.env so `uvicorn --app-dir backend` works from any cwd.
    model_config = SettingsConfigDict(env_file=str(BACKEND_ENV_FILE), env_file_encoding="utf-8")

    project_name: str = "LabTrack API"
    api_prefix: str = "/api"
    log_level: str = "INFO"

    database_url: str = "sqlite+pysqlite:///./data/labtrack.db"

    default_semester_start: str = "2025-09-01"
    seed_rooms: list[SeedRoom] = DEFAULT_SEED_ROOMS

    summary_cache_ttl_seconds: int = 30
    max_request_size_bytes: int = 5_000_000

    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return _split_list(value)
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
