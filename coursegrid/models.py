"""Data models for timetable periods, meetings and schedule blocks."""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime


def _format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


@dataclass(frozen=True)
class Period:
    """A single class period of the day (e.g. slot 3 = 09:45-10:25)."""

    slot: int
    name: str
    start_minute: int
    end_minute: int

    def __post_init__(self) -> None:
        if self.slot < 1:
            raise ValueError(f"Period slot must be positive, got {self.slot}")
        for minute in (self.start_minute, self.end_minute):
            if not 0 <= minute <= 1439:
                raise ValueError(f"Minute of day must be 0-1439, got {minute}")
        if self.start_minute >= self.end_minute:
            raise ValueError(f"Period {self.slot}: start must be before end")

    @property
    def start_label(self) -> str:
        return _format_minutes(self.start_minute)

    @property
    def end_label(self) -> str:
        return _format_minutes(self.end_minute)


@dataclass(frozen=True)
class RawMeeting:
    """One physical class meeting, as produced by a source-system parser."""

    name: str
    teacher: str
    location: str
    weeks: tuple[int, ...]
    day_of_week: int  # 1-7: Monday-Sunday
    period_slot: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "weeks", tuple(sorted(set(self.weeks))))
        if any(week < 1 for week in self.weeks):
            raise ValueError(f"Weeks must be positive, got {self.weeks}")
        if not 1 <= self.day_of_week <= 7:
            raise ValueError(f"Day of week must be 1-7, got {self.day_of_week}")
        if self.period_slot < 1:
            raise ValueError(f"Period slot must be positive, got {self.period_slot}")


@dataclass(frozen=True)
class ScheduleBlock:
    """A consolidated run of contiguous periods for one recurring class.

    ``block_id`` is identity only and takes no part in equality, so two block
    sets can be compared by value.
    """

    name: str
    teacher: str
    location: str
    weeks: tuple[int, ...]
    day_of_week: int
    start_slot: int
    slot_span: int
    color: str
    schedule_id: str
    block_id: str = field(default_factory=lambda: str(uuid.uuid4()), compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "weeks", tuple(sorted(set(self.weeks))))
        if not 1 <= self.day_of_week <= 7:
            raise ValueError(f"Day of week must be 1-7, got {self.day_of_week}")
        if self.start_slot < 1:
            raise ValueError(f"Start slot must be positive, got {self.start_slot}")
        if self.slot_span < 1:
            raise ValueError(f"Slot span must be at least 1, got {self.slot_span}")

    @property
    def end_slot(self) -> int:
        return self.start_slot + self.slot_span - 1

    def occurs_in_week(self, week: int) -> bool:
        return week in self.weeks


@dataclass(frozen=True)
class CourseTemplate:
    """A block recovered from an imported calendar, not yet bound to a schedule."""

    name: str
    teacher: str
    location: str
    weeks: tuple[int, ...]
    day_of_week: int
    start_slot: int
    slot_span: int
    color: str

    def to_block(self, schedule_id: str) -> ScheduleBlock:
        return ScheduleBlock(
            name=self.name,
            teacher=self.teacher,
            location=self.location,
            weeks=self.weeks,
            day_of_week=self.day_of_week,
            start_slot=self.start_slot,
            slot_span=self.slot_span,
            color=self.color,
            schedule_id=schedule_id,
        )


@dataclass(frozen=True)
class Schedule:
    """A named timetable owning a set of blocks."""

    name: str
    term_name: str
    schedule_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=datetime.now)
    is_active: bool = False


@dataclass(frozen=True)
class SkippedEvent:
    """An imported event that could not be mapped onto the period table."""

    title: str
    start: datetime
    reason: str


@dataclass
class ImportResult:
    """Outcome of importing an interchange document."""

    schedule_name: str
    term_name: str
    semester_start: date
    templates: list[CourseTemplate]
    skipped: list[SkippedEvent] = field(default_factory=list)

    def to_blocks(self, schedule_id: str) -> list[ScheduleBlock]:
        return [template.to_block(schedule_id) for template in self.templates]


@dataclass(frozen=True)
class OverlapInfo:
    """Display column of a block within its cluster of concurrent blocks."""

    column: int
    total_columns: int

