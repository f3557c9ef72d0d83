"""iCalendar transformer for schedule blocks."""

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from icalendar import Calendar, Event, vText

from coursegrid.models import ScheduleBlock
from coursegrid.timeslots import TimeSlotTable, get_default_table
from coursegrid.weeks import date_for
from .base import DEFAULT_TIMEZONE, BaseTransformer, get_zone

logger = logging.getLogger(__name__)


def escape_text(text: str) -> str:
    """Escape backslash, semicolon, comma and newline for a TEXT value."""
    return vText(text).to_ical().decode("utf-8")


class ICalTransformer(BaseTransformer):
    """Transformer that converts schedule blocks to iCalendar format.

    Every block produces one event per week it meets in, so the output needs
    no recurrence rules.
    """

    PRODID = "-//coursegrid//coursegrid-ics//EN"

    def __init__(
        self,
        schedule_name: str = "Schedule",
        timezone_id: str = DEFAULT_TIMEZONE,
        table: Optional[TimeSlotTable] = None,
    ) -> None:
        """Initialize the iCalendar transformer.

        Args:
            schedule_name: Display name written to the calendar header.
            timezone_id: IANA timezone of the wall-clock period times.
            table: Period table; the shared default table if omitted.

        Raises:
            ValueError: If ``timezone_id`` is unknown.
        """
        self._schedule_name = schedule_name
        self._tzid = timezone_id
        self._zone = get_zone(timezone_id)
        self._table = table if table is not None else get_default_table()
        self._calendar: Optional[Calendar] = None

    def _generate_uid(self, block: ScheduleBlock, week: int) -> str:
        return f"{block.block_id}_week{week}"

    def _event_times(self, block: ScheduleBlock, semester_start: date, week: int) -> Optional[tuple[datetime, datetime]]:
        """Return the wall-clock start and end of one weekly occurrence."""
        duration = self._table.duration_minutes(block.start_slot, block.slot_span)
        if duration <= 0:
            return None

        day = date_for(semester_start, week, block.day_of_week)
        start_minutes = self._table.start_minutes(block.start_slot)
        start_datetime = datetime.combine(
            day,
            time(start_minutes // 60, start_minutes % 60),
            tzinfo=self._zone,
        )
        return start_datetime, start_datetime + timedelta(minutes=duration)

    def transform(self, blocks: list[ScheduleBlock], semester_start: date) -> Calendar:
        """Transform schedule blocks into iCalendar format.

        Args:
            blocks: Blocks to export.
            semester_start: Any day of the first academic week.

        Returns:
            iCalendar Calendar object.
        """
        self._calendar = Calendar()
        self._calendar.add("prodid", self.PRODID)
        self._calendar.add("version", "2.0")
        self._calendar.add("calscale", "GREGORIAN")
        self._calendar.add("timezone-id", self._tzid)
        self._calendar.add("x-wr-calname", self._schedule_name)
        self._calendar.add("x-wr-timezone", self._tzid)
        self._calendar.add("name", self._schedule_name)

        stamp = datetime.now(timezone.utc)
        count = 0
        for block in blocks:
            for week in block.weeks:
                if week <= 0:
                    continue
                times = self._event_times(block, semester_start, week)
                if times is None:
                    logger.warning(
                        "Skipping %r week %d: slots %d-%d are not in the period table",
                        block.name, week, block.start_slot, block.end_slot,
                    )
                    continue
                start_datetime, end_datetime = times

                ical_event = Event()
                ical_event.add("uid", self._generate_uid(block, week))
                ical_event.add("dtstamp", stamp)
                ical_event.add("summary", block.name)
                ical_event.add("description", block.teacher)
                ical_event.add("dtstart", start_datetime)
                ical_event.add("dtend", end_datetime)
                ical_event.add("location", block.location)
                ical_event.add("sequence", 0)
                ical_event.add("transp", "OPAQUE")
                self._calendar.add_component(ical_event)
                count += 1

        logger.info("Exported %d events from %d blocks", count, len(blocks))
        return self._calendar

    def to_text(self) -> str:
        """Return the calendar as LF-joined text.

        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        if self._calendar is None:
            raise RuntimeError("No calendar data. Call transform() first.")
        return self._calendar.to_ical().decode("utf-8").replace("\r\n", "\n").rstrip("\n")

    def save(self, output_path: str) -> None:
        """Save the calendar to an .ics file.

        Args:
            output_path: Path to the output file.

        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        text = self.to_text()
        with open(output_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
