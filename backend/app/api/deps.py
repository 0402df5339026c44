from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.services.calendar_overrides import CalendarOverrideRegistry
from app.services.rooms import RoomRegistry
from app.services.roster import RosterRegistry
from app.services.timetable_store import TimetableStore


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_room_registry(db: Session = Depends(get_db)) -> RoomRegistry:
    return RoomRegistry(db)


def get_roster_registry(db: Session = Depends(get_db)) -> RosterRegistry:
    return RosterRegistry(db)


def get_calendar_overrides(db: Session = Depends(get_db)) -> CalendarOverrideRegistry:
    return CalendarOverrideRegistry(db)


def get_timetable_store(
    db: Session = Depends(get_db),
    rooms: RoomRegistry = Depends(get_room_registry),
    roster: RosterRegistry = Depends(get_roster_registry),
) -> TimetableStore:
    return TimetableStore(db, rooms, roster)
