"""Timetable core: period table, consolidation, colors and overlap layout."""

from .colors import color_for
from .consolidator import consolidate, expand
from .errors import (
    AmbiguousStartError,
    BlockNotFoundError,
    CalendarImportError,
    ConfigLoadError,
    CourseGridError,
    EmptyCalendarError,
    InvalidSlotRangeError,
)
from .layout import resolve_overlaps
from .models import (
    CourseTemplate,
    ImportResult,
    OverlapInfo,
    Period,
    RawMeeting,
    Schedule,
    ScheduleBlock,
    SkippedEvent,
)
from .repository import InMemoryScheduleRepository, ScheduleRepository, reschedule_week
from .timeslots import TimeSlotTable, get_default_table

__all__ = [
    "AmbiguousStartError",
    "BlockNotFoundError",
    "CalendarImportError",
    "ConfigLoadError",
    "CourseGridError",
    "CourseTemplate",
    "EmptyCalendarError",
    "ImportResult",
    "InMemoryScheduleRepository",
    "InvalidSlotRangeError",
    "OverlapInfo",
    "Period",
    "RawMeeting",
    "Schedule",
    "ScheduleBlock",
    "ScheduleRepository",
    "SkippedEvent",
    "TimeSlotTable",
    "color_for",
    "consolidate",
    "expand",
    "get_default_table",
    "reschedule_week",
    "resolve_overlaps",
]
