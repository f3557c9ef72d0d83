"""iCalendar importer: rebuild course templates from exported calendars.

The parser is lenient. It accepts any line-ending convention,
timestamps with or without seconds, date-only values and UTC ``Z`` values,
and silently drops events it cannot read.
"""

import dataclasses
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
from pathlib import Path
from typing import Optional, Union

from icalendar import vText
from icalendar.parser import Contentline

from coursegrid.colors import color_for
from coursegrid.errors import EmptyCalendarError
from coursegrid.models import CourseTemplate, ImportResult, Period, SkippedEvent
from coursegrid.timeslots import TimeSlotTable, get_default_table
from coursegrid.weeks import week_start
from .base import DEFAULT_TIMEZONE, get_zone

logger = logging.getLogger(__name__)

TIMESTAMP_FORMATS = ("%Y%m%dT%H%M%S", "%Y%m%dT%H%M", "%Y%m%d")
UNTITLED_COURSE = "Untitled course"


@dataclass(frozen=True)
class CalendarEvent:
    """A VEVENT reduced to the fields the importer needs."""

    title: str
    location: Optional[str]
    description: Optional[str]
    start: datetime
    end: datetime


def unfold_lines(text: str) -> list[str]:
    """Normalize line endings and join folded continuation lines."""
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    lines: list[str] = []
    for line in normalized.split("\n"):
        if lines and line[:1] in (" ", "\t"):
            lines[-1] += line[1:]
        else:
            lines.append(line)
    return lines


def extract_calendar_name(lines: list[str]) -> Optional[str]:
    for line in lines:
        if line.startswith("X-WR-CALNAME:"):
            return str(vText.from_ical(line[len("X-WR-CALNAME:"):]))
    return None


def parse_timestamp(value: str, tzid: Optional[str], ambient: tzinfo) -> Optional[datetime]:
    """Parse a DTSTART/DTEND value into an aware datetime.

    A TZID parameter wins over a trailing ``Z``; values with neither are read
    in the ambient zone. Unknown TZIDs also fall back to the ambient zone.
    """
    value = value.strip()
    zone: tzinfo
    if tzid:
        try:
            zone = get_zone(tzid)
        except ValueError:
            logger.debug("Unknown TZID %r, using ambient timezone", tzid)
            zone = ambient
    elif value.endswith("Z"):
        zone = timezone.utc
    else:
        zone = ambient

    cleaned = value[:-1] if value.endswith("Z") else value
    for fmt in TIMESTAMP_FORMATS:
        try:
            naive = datetime.strptime(cleaned, fmt)
        except ValueError:
            continue
        return naive.replace(tzinfo=zone)
    return None


def _build_event(properties: dict, ambient: tzinfo) -> Optional[CalendarEvent]:
    if "DTSTART" not in properties or "DTEND" not in properties:
        return None
    start = parse_timestamp(properties["DTSTART"][1], properties["DTSTART"][0].get("TZID"), ambient)
    end = parse_timestamp(properties["DTEND"][1], properties["DTEND"][0].get("TZID"), ambient)
    if start is None or end is None:
        return None

    def text(name: str) -> Optional[str]:
        if name not in properties:
            return None
        return str(vText.from_ical(properties[name][1]))

    return CalendarEvent(
        title=text("SUMMARY") or "",
        location=text("LOCATION"),
        description=text("DESCRIPTION"),
        start=start,
        end=end,
    )


def parse_events(lines: list[str], ambient: tzinfo) -> list[CalendarEvent]:
    """Collect the VEVENTs of an unfolded document.

    Properties of components nested in an event (such as VALARM) are ignored.
    """
    events: list[CalendarEvent] = []
    properties: Optional[dict] = None
    depth = 0

    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            continue
        if line == "BEGIN:VEVENT":
            properties = {}
            depth = 0
            continue
        if properties is None:
            continue
        if line == "END:VEVENT":
            event = _build_event(properties, ambient)
            if event is None:
                logger.debug("Dropping event without readable start/end: %s", properties.get("UID"))
            else:
                events.append(event)
            properties = None
            continue
        if line.startswith("BEGIN:"):
            depth += 1
            continue
        if line.startswith("END:"):
            depth = max(0, depth - 1)
            continue
        if depth:
            continue

        try:
            name, params, value = Contentline(line).parts()
        except ValueError:
            logger.debug("Skipping unparsable line: %r", line)
            continue
        properties[name.upper()] = (params, value.strip())

    return events


def build_term_name(day: date) -> str:
    """Name the term an event falls in: February-July is spring."""
    season = "spring" if 2 <= day.month <= 7 else "autumn"
    return f"{day.year} {season}"


class ICalImporter:
    """Convert interchange text back into course templates.

    Events are matched to the period table by start time, then stretched
    over following periods while the event runs past the current period.
    """

    START_TOLERANCE_MINUTES = 5
    END_TOLERANCE_MINUTES = 2

    def __init__(
        self,
        timezone_id: str = DEFAULT_TIMEZONE,
        table: Optional[TimeSlotTable] = None,
        start_tolerance: int = START_TOLERANCE_MINUTES,
        end_tolerance: int = END_TOLERANCE_MINUTES,
    ) -> None:
        """Initialize the importer.

        Args:
            timezone_id: Ambient IANA timezone for values without TZID.
            table: Period table; the shared default table if omitted.
            start_tolerance: Max minutes between event and period start.
            end_tolerance: Minutes an event may overrun a period's end
                before the next period is included.

        Raises:
            ValueError: If ``timezone_id`` is unknown.
        """
        self._zone = get_zone(timezone_id)
        self._table = table if table is not None else get_default_table()
        self._start_tolerance = start_tolerance
        self._end_tolerance = end_tolerance

    def import_file(self, path: Union[str, Path]) -> ImportResult:
        """Import an .ics file; the file name is the fallback schedule name."""
        path = Path(path)
        return self.import_text(path.read_text(encoding="utf-8"), fallback_name=path.stem)

    def import_text(self, text: str, fallback_name: str = "Imported schedule") -> ImportResult:
        """Import interchange text.

        Raises:
            EmptyCalendarError: If the text contains no readable events.
        """
        lines = unfold_lines(text)
        schedule_name = extract_calendar_name(lines) or fallback_name

        events = parse_events(lines, self._zone)
        if not events:
            raise EmptyCalendarError()

        earliest_local = min(event.start for event in events).astimezone(self._zone)
        semester_start = week_start(earliest_local.date())

        templates, skipped = self._convert(events, semester_start)
        logger.info(
            "Imported %d events into %d courses (%d skipped)",
            len(events), len(templates), len(skipped),
        )
        return ImportResult(
            schedule_name=schedule_name,
            term_name=build_term_name(earliest_local.date()),
            semester_start=semester_start,
            templates=templates,
            skipped=skipped,
        )

    def _match_periods(self, start_minutes: int, end_minutes: int) -> Optional[tuple[Period, Period]]:
        """Return the first and last period an event covers, or None."""
        first = next(
            (p for p in self._table if abs(p.start_minute - start_minutes) <= self._start_tolerance),
            None,
        )
        if first is None:
            return None

        last = first
        while last.end_minute < end_minutes - self._end_tolerance:
            following = self._table.next_period(last.slot)
            if following is None:
                break
            last = following
        return first, last

    def _convert(self, events: list[CalendarEvent], semester_start: date) -> tuple[list[CourseTemplate], list[SkippedEvent]]:
        groups: dict[str, CourseTemplate] = {}
        weeks: dict[str, set[int]] = {}
        skipped: list[SkippedEvent] = []

        for event in events:
            start = event.start.astimezone(self._zone)
            end = event.end.astimezone(self._zone)
            start_minutes = start.hour * 60 + start.minute
            end_minutes = end.hour * 60 + end.minute
            if end_minutes <= start_minutes:
                skipped.append(SkippedEvent(event.title, start, "ends before it starts"))
                continue

            matched = self._match_periods(start_minutes, end_minutes)
            if matched is None:
                logger.debug("No period starts near %s for %r", start.time(), event.title)
                skipped.append(SkippedEvent(event.title, start, "no matching period"))
                continue
            first, last = matched

            week = (week_start(start.date()) - semester_start).days // 7 + 1
            if week <= 0:
                skipped.append(SkippedEvent(event.title, start, "before the first week"))
                continue

            day = start.isoweekday()
            key = f"{event.title}_{event.description or ''}_{event.location or ''}_{day}_{first.slot}"
            if key not in groups:
                groups[key] = CourseTemplate(
                    name=event.title or UNTITLED_COURSE,
                    teacher=event.description or "",
                    location=event.location or "",
                    weeks=(),
                    day_of_week=day,
                    start_slot=first.slot,
                    slot_span=last.slot - first.slot + 1,
                    color=color_for(key),
                )
                weeks[key] = set()
            weeks[key].add(week)

        templates = [
            dataclasses.replace(template, weeks=tuple(sorted(weeks[key])))
            for key, template in groups.items()
        ]
        templates.sort(key=lambda t: t.name)
        return templates, skipped
