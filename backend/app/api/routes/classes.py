from fastapi import APIRouter, Depends, status

from app.api.deps import get_roster_registry
from app.schemas.class_roster import (
    ClassRosterBatchCreate,
    ClassRosterBatchResult,
    ClassRosterCreate,
    ClassRosterOut,
    ClassRosterUpdate,
    HeadcountOut,
    HeadcountRequest,
)
from app.services.roster import RosterRegistry, split_class_names

router = APIRouter()


@router.get("", response_model=list[ClassRosterOut])
def list_classes(roster: RosterRegistry = Depends(get_roster_registry)) -> list[ClassRosterOut]:
    return roster.list_all()


@router.post("", response_model=ClassRosterOut, status_code=status.HTTP_201_CREATED)
def create_class(payload: ClassRosterCreate, roster: RosterRegistry = Depends(get_roster_registry)) -> ClassRosterOut:
    return roster.create(payload)


@router.post("/batch", response_model=ClassRosterBatchResult)
def batch_create_classes(
    payload: ClassRosterBatchCreate,
    roster: RosterRegistry = Depends(get_roster_registry),
) -> ClassRosterBatchResult:
    return roster.batch_create(payload.classes)


@router.post("/clear")
def clear_classes(roster: RosterRegistry = Depends(get_roster_registry)) -> dict:
    deleted = roster.clear_all()
    return {"success": True, "deleted": deleted}


@router.post("/resolve", response_model=HeadcountOut)
def resolve_headcount(payload: HeadcountRequest, roster: RosterRegistry = Depends(get_roster_registry)) -> HeadcountOut:
    total = roster.resolve_total_headcount(payload.class_names)
    return HeadcountOut(class_names=split_class_names(payload.class_names), total=total)


@router.get("/{class_id}", response_model=ClassRosterOut)
def get_class(class_id: int, roster: RosterRegistry = Depends(get_roster_registry)) -> ClassRosterOut:
    return roster.get(class_id)


@router.put("/{class_id}", response_model=ClassRosterOut)
def update_class(
    class_id: int,
    payload: ClassRosterUpdate,
    roster: RosterRegistry = Depends(get_roster_registry),
) -> ClassRosterOut:
    return roster.update(class_id, payload)


@router.delete("/{class_id}")
def delete_class(class_id: int, roster: RosterRegistry = Depends(get_roster_registry)) -> dict:
    roster.delete(class_id)
    return {"success": True}
