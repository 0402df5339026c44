import os
import tempfile

# The application engine is built at import time; point it at a throwaway file
# so startup bootstrap never touches a real database.
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///" + os.path.join(tempfile.mkdtemp(), "labtrack-test.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db
from app.db.base import Base
from app.db.bootstrap import seed_defaults
from app.main import app
from app.services.rooms import RoomRegistry
from app.services.roster import RosterRegistry
from app.services.timetable_store import TimetableStore
from app.services.utilization import clear_summary_cache


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    with TestingSessionLocal() as seed_session:
        seed_defaults(seed_session)
    yield engine
    engine.dispose()


@pytest.fixture()
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def store(db):
    return TimetableStore(db, RoomRegistry(db), RosterRegistry(db))


@pytest.fixture()
def client(engine):
    clear_summary_cache()
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    clear_summary_cache()
