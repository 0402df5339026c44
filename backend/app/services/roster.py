from __future__ import annotations

import logging
import re

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, ResourceNotFoundError, UnknownClassNamesError
from app.models.class_roster import ClassRoster
from app.schemas.class_roster import ClassRosterBatchResult, ClassRosterCreate, ClassRosterUpdate

logger = logging.getLogger(__name__)

# ASCII comma, full-width comma, ideographic enumeration comma.
CLASS_NAME_DELIMITERS = re.compile(r"[,，、]")


def split_class_names(value: str | None) -> list[str]:
    """Split a delimited class-name list, dropping blanks. Repeated names are kept."""
    names: list[str] = []
    for part in CLASS_NAME_DELIMITERS.split(value or ""):
        name = part.strip()
        if name:
            names.append(name)
    return names


class RosterRegistry:
    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_name(self, name: str) -> ClassRoster | None:
        return self.db.execute(select(ClassRoster).where(ClassRoster.name == name.strip())).scalar_one_or_none()

    def list_all(self) -> list[ClassRoster]:
        return list(self.db.execute(select(ClassRoster).order_by(ClassRoster.name.asc())).scalars())

    def get(self, class_id: int) -> ClassRoster:
        entry = self.db.get(ClassRoster, class_id)
        if entry is None:
            raise ResourceNotFoundError("Class", class_id)
        return entry

    def resolve_total_headcount(self, class_names: str | None) -> int:
        """Sum the headcount of every listed class.

        Raises UnknownClassNamesError naming all unknown classes at once; no
        partial total is ever returned.
        """
        names = split_class_names(class_names)
        if not names:
            return 0
        counts = dict(
            self.db.execute(
                select(ClassRoster.name, ClassRoster.student_count).where(ClassRoster.name.in_(names))
            ).all()
        )
        missing = list(dict.fromkeys(name for name in names if name not in counts))
        if missing:
            raise UnknownClassNamesError(missing)
        return sum(counts[name] for name in names)

    def create(self, payload: ClassRosterCreate) -> ClassRoster:
        if self.find_by_name(payload.name) is not None:
            raise ConflictError(f"Class already exists: {payload.name}")
        entry = ClassRoster(name=payload.name, major=payload.major, student_count=payload.student_count)
        self.db.add(entry)
        self._commit(payload.name)
        self.db.refresh(entry)
        return entry

    def update(self, class_id: int, payload: ClassRosterUpdate) -> ClassRoster:
        entry = self.get(class_id)
        data = payload.model_dump(exclude_unset=True)
        new_name = data.get("name")
        if new_name is not None and new_name != entry.name:
            if self.find_by_name(new_name) is not None:
                raise ConflictError(f"Class already exists: {new_name}")
            entry.name = new_name
        if "major" in data:
            entry.major = (data["major"] or "").strip() or None
        if data.get("student_count") is not None:
            entry.student_count = data["student_count"]
        self._commit(entry.name)
        self.db.refresh(entry)
        return entry

    def delete(self, class_id: int) -> None:
        # Sessions captured their headcount at write time and are left untouched.
        entry = self.get(class_id)
        self.db.delete(entry)
        self.db.commit()
        logger.info("Deleted class %s", entry.name)

    def batch_create(self, entries: list[ClassRosterCreate]) -> ClassRosterBatchResult:
        success = 0
        errors: list[str] = []
        for payload in entries:
            try:
                self.create(payload)
            except ConflictError as exc:
                errors.append(f"{payload.name}: {exc.message}")
                continue
            success += 1
        if errors:
            logger.warning("Class batch import skipped %d of %d entries", len(errors), len(entries))
        return ClassRosterBatchResult(success=success, failed=len(errors), errors=errors)

    def clear_all(self) -> int:
        result = self.db.execute(delete(ClassRoster))
        self.db.commit()
        logger.info("Cleared %d class roster entries", result.rowcount)
        return result.rowcount

    def _commit(self, name: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            # Lost a race against another writer using the same name.
            self.db.rollback()
            raise ConflictError(f"Class already exists: {name}") from exc
