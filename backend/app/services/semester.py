from __future__ import annotations

import logging
from datetime import date

from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.exceptions import ConfigurationError
from app.models.scheduling_settings import SchedulingSettings
from app.schemas.common import parse_iso_date
from app.services.period_calendar import monday_of

logger = logging.getLogger(__name__)

SETTINGS_ROW_ID = 1


def default_semester_start() -> date:
    raw = get_settings().default_semester_start
    try:
        return monday_of(parse_iso_date(raw))
    except ValueError as exc:
        raise ConfigurationError(f"default_semester_start is not a YYYY-MM-DD date: {raw!r}") from exc


def get_semester_start(db: Session) -> date:
    record = db.get(SchedulingSettings, SETTINGS_ROW_ID)
    if record is None:
        return default_semester_start()
    return record.semester_start_monday


def set_semester_start(db: Session, day: date) -> date:
    """Store the Monday of the week containing ``day`` as the semester start."""
    monday = monday_of(day)
    record = db.get(SchedulingSettings, SETTINGS_ROW_ID)
    if record is None:
        record = SchedulingSettings(id=SETTINGS_ROW_ID, semester_start_monday=monday)
        db.add(record)
    else:
        record.semester_start_monday = monday
    db.commit()
    logger.info("Semester start set to %s", monday.isoformat())
    return monday
