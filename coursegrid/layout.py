"""Column layout for blocks that overlap on the same day."""

import logging
from typing import NamedTuple, Optional

from .errors import InvalidSlotRangeError
from .models import OverlapInfo, ScheduleBlock
from .timeslots import TimeSlotTable, get_default_table

logger = logging.getLogger(__name__)


class _Interval(NamedTuple):
    start: int
    end: int
    block_id: str


def resolve_overlaps(
    blocks: list[ScheduleBlock],
    table: Optional[TimeSlotTable] = None,
) -> dict[str, OverlapInfo]:
    """Assign display columns to blocks active on one calendar day.

    A sweep over the blocks ordered by start (then end) puts each block in
    the lowest column not held by a block still running. Blocks connected by
    overlap form a cluster and all report the cluster's column count.

    Args:
        blocks: Blocks already filtered to a single week and day.
        table: Period table used to turn slots into minutes.

    Returns:
        Mapping of block id to its column and the column count of its cluster.
        Blocks whose slots do not resolve in the table are left out.
    """
    if table is None:
        table = get_default_table()

    intervals: list[_Interval] = []
    for block in blocks:
        try:
            start, end = table.span_minutes(block.start_slot, block.slot_span)
        except InvalidSlotRangeError as e:
            logger.warning("Skipping block %r in layout: %s", block.name, e)
            continue
        intervals.append(_Interval(start, end, block.block_id))
    intervals.sort(key=lambda iv: (iv.start, iv.end))

    columns: dict[str, int] = {}
    clusters: list[list[str]] = []
    active: list[tuple[int, int]] = []  # (end, column)

    for interval in intervals:
        active = [(end, col) for end, col in active if end > interval.start]
        if not active:
            clusters.append([])

        used = {col for _, col in active}
        column = 0
        while column in used:
            column += 1

        columns[interval.block_id] = column
        active.append((interval.end, column))
        clusters[-1].append(interval.block_id)

    result: dict[str, OverlapInfo] = {}
    for cluster in clusters:
        total = max(columns[block_id] for block_id in cluster) + 1
        for block_id in cluster:
            result[block_id] = OverlapInfo(column=columns[block_id], total_columns=total)
    return result
