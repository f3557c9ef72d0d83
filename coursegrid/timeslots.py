"""Period table: ordered lookup from slot number to clock times."""

import json
import logging
import threading
from importlib import resources
from pathlib import Path
from typing import Iterator, Optional, Union

from .errors import ConfigLoadError, InvalidSlotRangeError
from .models import Period

logger = logging.getLogger(__name__)

# (slot, start HHmm, end HHmm)
DEFAULT_PERIODS = [
    (1, "0800", "0840"),
    (2, "0845", "0925"),
    (3, "0945", "1025"),
    (4, "1035", "1115"),
    (5, "1120", "1200"),
    (6, "1330", "1410"),
    (7, "1415", "1455"),
    (8, "1515", "1555"),
    (9, "1600", "1640"),
    (10, "1830", "1910"),
    (11, "1915", "1955"),
    (12, "2005", "2045"),
]


def parse_hhmm(value: str) -> int:
    """Convert an ``HHmm`` string to minutes since midnight."""
    value = value.strip()
    if len(value) != 4 or not value.isdigit():
        raise ValueError(f"Expected HHmm time, got {value!r}")
    hour, minute = int(value[:2]), int(value[2:])
    if hour > 23 or minute > 59:
        raise ValueError(f"Time out of range: {value!r}")
    return hour * 60 + minute


class TimeSlotTable:
    """Immutable, ordered table of class periods.

    Build one with :meth:`from_json`, :meth:`load` or :meth:`default`, or use
    the process-wide shared instance from :func:`get_default_table`.
    """

    def __init__(self, periods: list[Period]) -> None:
        """Initialize the table.

        Args:
            periods: Periods in any order; they are sorted by slot.

        Raises:
            ValueError: If slots repeat or consecutive periods overlap.
        """
        ordered = sorted(periods, key=lambda p: p.slot)
        for previous, current in zip(ordered, ordered[1:]):
            if previous.slot == current.slot:
                raise ValueError(f"Duplicate period slot {current.slot}")
            if previous.end_minute > current.start_minute:
                raise ValueError(
                    f"Period {previous.slot} ends after period {current.slot} starts"
                )
        self._periods = tuple(ordered)
        self._by_slot = {p.slot: p for p in ordered}

    @classmethod
    def default(cls) -> "TimeSlotTable":
        """Return the builtin 12-period table."""
        return cls([
            Period(slot, str(slot), parse_hhmm(start), parse_hhmm(end))
            for slot, start, end in DEFAULT_PERIODS
        ])

    @classmethod
    def from_json(cls, raw: Union[str, bytes]) -> "TimeSlotTable":
        """Parse a ``{"classtime": [...]}`` document.

        Raises:
            ConfigLoadError: If the document is malformed or violates the
                table invariants.
        """
        try:
            document = json.loads(raw)
            entries = document["classtime"]
            periods = []
            for entry in entries:
                name = str(entry["name"])
                periods.append(Period(
                    slot=int(name),
                    name=name,
                    start_minute=parse_hhmm(entry["start_time"]),
                    end_minute=parse_hhmm(entry["end_time"]),
                ))
            if not periods:
                raise ValueError("Period table is empty")
            return cls(periods)
        except (ValueError, KeyError, TypeError) as e:
            raise ConfigLoadError(f"Invalid period table: {e}") from e

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "TimeSlotTable":
        """Load a table from ``path`` or from the bundled resource.

        Never raises: any failure is logged and the builtin table is returned.
        """
        try:
            if path is None:
                raw = resources.files("coursegrid").joinpath("data/classtime.json").read_text(
                    encoding="utf-8"
                )
                source = "bundled classtime.json"
            else:
                raw = Path(path).read_text(encoding="utf-8")
                source = str(path)
            table = cls.from_json(raw)
            logger.info("Loaded %d periods from %s", len(table), source)
            return table
        except (OSError, UnicodeDecodeError, ConfigLoadError) as e:
            logger.warning("Falling back to builtin period table: %s", e)
            return cls.default()

    def __len__(self) -> int:
        return len(self._periods)

    def __iter__(self) -> Iterator[Period]:
        return iter(self._periods)

    @property
    def periods(self) -> tuple[Period, ...]:
        return self._periods

    @property
    def max_slot(self) -> int:
        return self._periods[-1].slot if self._periods else 0

    def lookup(self, slot: int) -> Optional[Period]:
        return self._by_slot.get(slot)

    def next_period(self, slot: int) -> Optional[Period]:
        """Return the period following ``slot`` in table order, if any."""
        for index, period in enumerate(self._periods):
            if period.slot == slot:
                if index + 1 < len(self._periods):
                    return self._periods[index + 1]
                return None
        return None

    def start_minutes(self, slot: int) -> int:
        period = self.lookup(slot)
        return period.start_minute if period else 0

    def end_minutes(self, slot: int) -> int:
        period = self.lookup(slot)
        return period.end_minute if period else 0

    def time_range(self, slot: int) -> Optional[tuple[str, str]]:
        """Return ``("HH:MM", "HH:MM")`` for ``slot``."""
        period = self.lookup(slot)
        if period is None:
            return None
        return period.start_label, period.end_label

    def span_minutes(self, start_slot: int, span: int) -> tuple[int, int]:
        """Return the (start, end) minute range covered by a slot run.

        Raises:
            InvalidSlotRangeError: If either end of the run is not in the table.
        """
        first = self.lookup(start_slot)
        last = self.lookup(start_slot + span - 1)
        if span < 1 or first is None or last is None:
            raise InvalidSlotRangeError(start_slot, span)
        return first.start_minute, last.end_minute

    def duration_minutes(self, start_slot: int, span: int) -> int:
        """Minutes from the start of ``start_slot`` to the end of the run.

        Returns 0 when the run does not resolve in the table.
        """
        try:
            start, end = self.span_minutes(start_slot, span)
        except InvalidSlotRangeError as e:
            logger.warning("%s", e)
            return 0
        return end - start


_default_table: Optional[TimeSlotTable] = None
_default_lock = threading.Lock()


def get_default_table() -> TimeSlotTable:
    """Return the shared period table, loading it on first use."""
    global _default_table
    if _default_table is None:
        with _default_lock:
            if _default_table is None:
                _default_table = TimeSlotTable.load()
    return _default_table
