"""Exception types raised by the timetable core and calendar codec."""


class CourseGridError(Exception):
    """Base class for all coursegrid exceptions."""


class ConfigLoadError(CourseGridError):
    """Raised when the period table resource cannot be read or validated.

    Never escapes the table loader; it is logged and the builtin table is used.
    """


class InvalidSlotRangeError(CourseGridError):
    """Raised when a start slot and span do not resolve in the period table."""

    def __init__(self, start_slot: int, span: int):
        self.start_slot = start_slot
        self.span = span
        super().__init__(f"Slot range {start_slot}+{span} is not in the period table")


class BlockNotFoundError(CourseGridError):
    """Raised when a repository has no block with the requested id."""

    def __init__(self, block_id: str):
        self.block_id = block_id
        super().__init__(f"Block with id {block_id} not found")


class CalendarImportError(CourseGridError):
    """Base class for errors that abort a calendar import."""


class EmptyCalendarError(CalendarImportError):
    """Raised when an imported document contains no usable events."""

    def __init__(self):
        super().__init__("Calendar contains no events")


class AmbiguousStartError(CalendarImportError):
    """Raised when the earliest event start cannot be determined."""

    def __init__(self):
        super().__init__("Cannot determine the start of the semester")
