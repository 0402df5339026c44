from pydantic import BaseModel, Field


class RoomOut(BaseModel):
    id: int
    name: str
    capacity: int

    model_config = {"from_attributes": True}


class RoomCapacityUpdate(BaseModel):
    # Fractional input is floored by the registry.
    capacity: float = Field(ge=1, le=10000)
