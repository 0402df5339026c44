from fastapi import APIRouter, Depends

from app.api.deps import get_room_registry
from app.schemas.room import RoomCapacityUpdate, RoomOut
from app.services.rooms import RoomRegistry

router = APIRouter()


@router.get("", response_model=list[RoomOut])
def list_rooms(rooms: RoomRegistry = Depends(get_room_registry)) -> list[RoomOut]:
    return rooms.list()


@router.patch("/{room_id}", response_model=RoomOut)
def update_room_capacity(
    room_id: int,
    payload: RoomCapacityUpdate,
    rooms: RoomRegistry = Depends(get_room_registry),
) -> RoomOut:
    return rooms.update_capacity(room_id, payload.capacity)
