from __future__ import annotations

import logging
import math

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.exceptions import ResourceNotFoundError
from app.models.room import Room

logger = logging.getLogger(__name__)


class RoomRegistry:
    """The fixed set of lab rooms. Only capacity changes after seeding."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def list(self) -> list[Room]:
        return list(self.db.execute(select(Room).order_by(Room.id.asc())).scalars())

    def get(self, room_id: int) -> Room | None:
        return self.db.get(Room, room_id)

    def require(self, room_id: int) -> Room:
        room = self.get(room_id)
        if room is None:
            raise ResourceNotFoundError("Room", room_id)
        return room

    def resolve_id_by_name(self, name: str | None) -> int | None:
        cleaned = str(name or "").strip()
        if not cleaned:
            return None
        return self.db.execute(select(Room.id).where(Room.name == cleaned)).scalar_one_or_none()

    def update_capacity(self, room_id: int, capacity: float) -> Room:
        # Stored sessions keep the capacity they were written with.
        room = self.require(room_id)
        previous = room.capacity
        room.capacity = math.floor(capacity)
        self.db.commit()
        self.db.refresh(room)
        logger.info("Room %s capacity changed from %s to %s", room.name, previous, room.capacity)
        return room
