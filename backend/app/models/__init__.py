from app.models.calendar_override import CalendarOverride, OverrideType  # noqa: F401
from app.models.class_roster import ClassRoster  # noqa: F401
from app.models.lab_session import LabSession  # noqa: F401
from app.models.room import Room  # noqa: F401
from app.models.scheduling_settings import SchedulingSettings  # noqa: F401
