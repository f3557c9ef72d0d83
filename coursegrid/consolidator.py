"""Merge per-meeting records into contiguous schedule blocks."""

import logging
from typing import Optional

from .colors import color_for
from .models import RawMeeting, ScheduleBlock
from .timeslots import TimeSlotTable

logger = logging.getLogger(__name__)


def _group_key(meeting: RawMeeting) -> tuple[str, str, str, int]:
    return (meeting.name, meeting.teacher, meeting.location, meeting.day_of_week)


def consolidate(
    meetings: list[RawMeeting],
    schedule_id: str,
    table: Optional[TimeSlotTable] = None,
) -> list[ScheduleBlock]:
    """Merge meetings of the same course on the same day into blocks.

    Meetings are grouped by name, teacher, location and day of week. Within
    a group, meetings in consecutive period slots form one block.

    A merged block keeps the weeks of the first meeting in its run; the
    weeks of the other meetings are not combined.

    Args:
        meetings: Raw meetings for one schedule.
        schedule_id: Identifier stamped on every produced block.
        table: If given, blocks whose slots do not resolve are logged.

    Returns:
        Blocks in first-seen group order, ordered by start slot per group.
    """
    groups: dict[tuple[str, str, str, int], list[RawMeeting]] = {}
    for meeting in meetings:
        groups.setdefault(_group_key(meeting), []).append(meeting)

    blocks: list[ScheduleBlock] = []
    for group in groups.values():
        ordered = sorted(group, key=lambda m: m.period_slot)

        i = 0
        while i < len(ordered):
            first = ordered[i]
            end_slot = first.period_slot
            span = 1
            while i + span < len(ordered) and ordered[i + span].period_slot == end_slot + 1:
                end_slot += 1
                span += 1

            block = ScheduleBlock(
                name=first.name,
                teacher=first.teacher,
                location=first.location,
                weeks=first.weeks,
                day_of_week=first.day_of_week,
                start_slot=first.period_slot,
                slot_span=span,
                color=color_for(first.name),
                schedule_id=schedule_id,
            )
            if table is not None and table.lookup(block.end_slot) is None:
                logger.warning(
                    "Block %r ends at slot %d, which is not in the period table",
                    block.name, block.end_slot,
                )
            blocks.append(block)
            i += span

    logger.debug("Consolidated %d meetings into %d blocks", len(meetings), len(blocks))
    return blocks


def expand(blocks: list[ScheduleBlock]) -> list[RawMeeting]:
    """Split blocks back into one meeting per occupied slot."""
    return [
        RawMeeting(
            name=block.name,
            teacher=block.teacher,
            location=block.location,
            weeks=block.weeks,
            day_of_week=block.day_of_week,
            period_slot=slot,
        )
        for block in blocks
        for slot in range(block.start_slot, block.end_slot + 1)
    ]
