"""Session storage for lab rooms.

Two write protocols exist side by side:

* ``replace_week`` validates a whole week up front, then deletes every session
  of that room/week and inserts the submitted set in one transaction.
* ``upsert_rows`` applies import rows one at a time, updating the session
  already sitting in a slot or inserting a new one, and reports failing rows
  without stopping the rest of the batch.

The ``uq_sessions_slot`` constraint is the final guard against duplicate
slots; ``allow_overflow`` is recomputed on every write.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
import logging
from datetime import date, timedelta
from typing import Any

from pydantic import ValidationError
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    InvariantViolationError,
    UnknownClassNamesError,
    UnresolvedReferenceError,
    ValidationFailedError,
)
from app.models.lab_session import LabSession
from app.models.room import Room
from app.schemas.room import RoomOut
from app.schemas.timetable import (
    DayOut,
    ImportResult,
    ImportRow,
    PeriodWindowOut,
    PlannedRow,
    RowError,
    SessionFields,
    SessionOut,
    SlotOut,
    WeekRangeOut,
    WeekViewOut,
)
from app.services.period_calendar import (
    is_seasonal_shift,
    is_valid_period,
    monday_of,
    period_label,
    period_windows,
    span_label,
    week_dates,
)
from app.services.roster import RosterRegistry
from app.services.rooms import RoomRegistry

logger = logging.getLogger(__name__)

DEFAULT_DURATION = 2

ROOM_ID_KEYS = ("room_id", "roomId", "labId", "lab_id")
ROOM_NAME_KEYS = ("room", "lab", "教室", "实验室")

WRITABLE_FIELDS = ("course", "teacher", "content", "planned", "capacity", "allow_overflow", "duration", "class_names")


def _present(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


class TimetableStore:
    def __init__(self, db: Session, rooms: RoomRegistry, roster: RosterRegistry) -> None:
        self.db = db
        self.rooms = rooms
        self.roster = roster

    # Read model

    def week_view(self, room_id: int, any_date: date) -> WeekViewOut:
        room = self.rooms.require(room_id)
        days = week_dates(any_date)
        monday, sunday = days[0], days[-1]
        stored = {
            (item.date, item.period): item
            for item in self.db.execute(
                select(LabSession)
                .where(LabSession.room_id == room_id, LabSession.date.between(monday, sunday))
                .order_by(LabSession.date.asc(), LabSession.period.asc())
            ).scalars()
        }

        day_views: list[DayOut] = []
        for day in days:
            slots = []
            for window in period_windows(day):
                item = stored.get((day, window.period))
                slots.append(
                    SlotOut(
                        period=window.period,
                        start=window.start,
                        end=window.end,
                        label=period_label(day, window.period),
                        session=self._session_out(item) if item is not None else None,
                    )
                )
            day_views.append(
                DayOut(date=day, day_of_week=day.isoweekday(), seasonal_shift=is_seasonal_shift(day), slots=slots)
            )

        return WeekViewOut(
            room=RoomOut.model_validate(room),
            week=WeekRangeOut(monday=monday, sunday=sunday),
            periods=[PeriodWindowOut(**window.as_dict()) for window in period_windows(any_date)],
            days=day_views,
        )

    def list_courses(self) -> list[str]:
        rows = self.db.execute(select(LabSession.course).distinct().order_by(LabSession.course.asc())).scalars()
        return [course for course in rows if course]

    # Whole-week replace

    def replace_week(self, room_id: int, any_date: date, sessions: Sequence[SessionFields]) -> WeekViewOut:
        room = self.rooms.require(room_id)
        monday = monday_of(any_date)
        sunday = monday + timedelta(days=6)

        replacements: list[LabSession] = []
        seen_slots: set[tuple[date, int]] = set()
        for index, item in enumerate(sessions, start=1):
            if not monday <= item.date <= sunday:
                raise ValidationFailedError(
                    f"date {item.date.isoformat()} not in target week {monday.isoformat()}..{sunday.isoformat()}",
                    field="date",
                    index=index,
                )
            if not is_valid_period(item.period):
                raise ValidationFailedError(f"invalid period {item.period}", field="period", index=index)
            slot = (item.date, item.period)
            if slot in seen_slots:
                raise ValidationFailedError(
                    f"slot {item.date.isoformat()} period {item.period} submitted more than once",
                    field="period",
                    index=index,
                )
            seen_slots.add(slot)
            try:
                values = self._derive_values(room, item)
            except UnknownClassNamesError as exc:
                exc.details["index"] = index
                raise
            replacements.append(LabSession(room_id=room.id, date=item.date, period=item.period, **values))

        try:
            self.db.execute(
                delete(LabSession).where(LabSession.room_id == room.id, LabSession.date.between(monday, sunday))
            )
            self.db.add_all(replacements)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.exception("Week replace for room %s (%s) hit a slot constraint", room.id, monday.isoformat())
            raise InvariantViolationError(
                "Slot uniqueness violated during week replace",
                details={"room_id": room.id, "monday": monday.isoformat()},
            ) from exc

        logger.info(
            "Replaced week %s..%s of room %s with %d session(s)",
            monday.isoformat(),
            sunday.isoformat(),
            room.id,
            len(replacements),
        )
        return self.week_view(room.id, any_date)

    # Incremental upsert

    def upsert_rows(self, rows: Sequence[Any], *, dry_run: bool = False) -> ImportResult:
        result = ImportResult(dry_run=dry_run)
        pending_slots: set[tuple[int, date, int]] = set()

        for index, raw in enumerate(rows, start=1):
            try:
                room, row, values = self._prepare_row(raw)
            except ValidationError as exc:
                result.errors.append(self._validation_row_error(index, exc))
                continue
            except UnknownClassNamesError as exc:
                result.errors.append(
                    RowError(
                        index=index,
                        kind="unresolved_reference",
                        field="class_names",
                        message=exc.message,
                        names=exc.names,
                    )
                )
                continue
            except UnresolvedReferenceError as exc:
                result.errors.append(
                    RowError(index=index, kind="unresolved_reference", field=exc.field, message=exc.message)
                )
                continue
            except ValidationFailedError as exc:
                result.errors.append(RowError(index=index, kind="validation", field=exc.field, message=exc.message))
                continue

            slot = (room.id, row.date, row.period)
            if dry_run:
                exists = slot in pending_slots or self._find_slot(*slot) is not None
                action = "update" if exists else "insert"
                pending_slots.add(slot)
            else:
                action = self._apply_row(slot, values)

            if action == "insert":
                result.inserted += 1
            else:
                result.updated += 1
            result.rows.append(
                PlannedRow(index=index, action=action, room_id=room.id, date=row.date, period=row.period, **values)
            )

        result.failed = len(result.errors)
        if result.errors:
            logger.warning(
                "Import finished with %d failed row(s) of %d%s",
                result.failed,
                len(rows),
                " (dry run)" if dry_run else "",
            )
        logger.info(
            "Import %s: %d inserted, %d updated",
            "validated" if dry_run else "applied",
            result.inserted,
            result.updated,
        )
        return result

    # Bulk clear

    def clear_room(self, room_id: int | None = None) -> int:
        statement = delete(LabSession)
        if room_id is not None:
            self.rooms.require(room_id)
            statement = statement.where(LabSession.room_id == room_id)
        deleted = self.db.execute(statement).rowcount
        self.db.commit()
        logger.info("Cleared %d session(s) for %s", deleted, f"room {room_id}" if room_id is not None else "all rooms")
        return deleted

    # Helpers

    def _derive_values(self, room: Room, item: SessionFields) -> dict[str, Any]:
        class_names = item.class_names
        if item.planned is not None:
            # An explicit headcount wins; class names stay as descriptive metadata.
            planned = max(0, int(item.planned))
        elif class_names:
            planned = self.roster.resolve_total_headcount(class_names)
        else:
            planned = 0
        capacity = room.capacity if item.capacity is None else int(item.capacity)
        duration = DEFAULT_DURATION if item.duration is None else max(1, int(item.duration))
        return {
            "course": item.course,
            "teacher": item.teacher,
            "content": item.content,
            "planned": planned,
            "capacity": capacity,
            "allow_overflow": planned < capacity,
            "duration": duration,
            "class_names": class_names,
        }

    def _resolve_room(self, raw: Mapping[str, Any]) -> Room:
        room_id = next((raw[key] for key in ROOM_ID_KEYS if _present(raw.get(key))), None)
        if room_id is not None:
            try:
                parsed = int(str(room_id).strip())
            except ValueError as exc:
                raise ValidationFailedError(f"room id must be an integer, got {room_id!r}", field="room_id") from exc
            room = self.rooms.get(parsed)
            if room is None:
                raise UnresolvedReferenceError(f"Room {parsed} does not exist", field="room_id", value=parsed)
            return room

        name = next((raw[key] for key in ROOM_NAME_KEYS if _present(raw.get(key))), None)
        if name is None:
            raise ValidationFailedError("room is required: give a room id or a room name", field="room")
        resolved = self.rooms.resolve_id_by_name(str(name))
        if resolved is None:
            raise UnresolvedReferenceError(f"Room name not found: {str(name).strip()}", field="room", value=str(name))
        return self.rooms.require(resolved)

    def _prepare_row(self, raw: Any) -> tuple[Room, ImportRow, dict[str, Any]]:
        if not isinstance(raw, Mapping):
            raise ValidationFailedError("row must be an object", field=None)
        room = self._resolve_room(raw)
        row = ImportRow.model_validate(raw)
        return room, row, self._derive_values(room, row)

    def _find_slot(self, room_id: int, day: date, period: int) -> LabSession | None:
        return self.db.execute(
            select(LabSession).where(
                LabSession.room_id == room_id,
                LabSession.date == day,
                LabSession.period == period,
            )
        ).scalar_one_or_none()

    def _apply_row(self, slot: tuple[int, date, int], values: dict[str, Any]) -> str:
        existing = self._find_slot(*slot)
        if existing is not None:
            self._assign(existing, values)
            self.db.commit()
            return "update"

        room_id, day, period = slot
        self.db.add(LabSession(room_id=room_id, date=day, period=period, **values))
        try:
            self.db.commit()
            return "insert"
        except IntegrityError:
            # Another writer filled the slot after our lookup; fold into an update.
            self.db.rollback()

        existing = self._find_slot(*slot)
        if existing is None:
            logger.error("Insert into room %s %s P%s failed without a conflicting row", room_id, day, period)
            raise InvariantViolationError(
                "Session insert rejected by the datastore",
                details={"room_id": room_id, "date": day.isoformat(), "period": period},
            )
        self._assign(existing, values)
        self.db.commit()
        return "update"

    @staticmethod
    def _assign(target: LabSession, values: dict[str, Any]) -> None:
        for key in WRITABLE_FIELDS:
            setattr(target, key, values[key])

    @staticmethod
    def _session_out(item: LabSession) -> SessionOut:
        out = SessionOut.model_validate(item)
        out.time = span_label(item.date, item.period, item.duration)
        return out

    @staticmethod
    def _validation_row_error(index: int, exc: ValidationError) -> RowError:
        issues = exc.errors()
        first = issues[0] if issues else {}
        location = first.get("loc") or ()
        field = str(location[0]) if location else None
        message = "; ".join(
            f"{'.'.join(str(part) for part in issue.get('loc', ())) or 'row'}: {issue.get('msg', 'invalid')}"
            for issue in issues
        )
        return RowError(index=index, kind="validation", field=field, message=message)
