"""Block storage interface and the single-week reschedule operation."""

import dataclasses
import logging
from abc import ABC, abstractmethod
from typing import Optional

from .errors import BlockNotFoundError
from .models import ScheduleBlock

logger = logging.getLogger(__name__)


class ScheduleRepository(ABC):
    """Abstract store for schedule blocks, keyed by block id.

    Implement this over whatever persistence the host application uses.
    """

    @abstractmethod
    def add(self, block: ScheduleBlock) -> ScheduleBlock:
        """Store a new block and return it."""
        pass

    @abstractmethod
    def get(self, block_id: str) -> ScheduleBlock:
        """Return the block with ``block_id``.

        Raises:
            BlockNotFoundError: If no such block is stored.
        """
        pass

    @abstractmethod
    def update(self, block: ScheduleBlock) -> ScheduleBlock:
        """Replace the stored block that has the same id.

        Raises:
            BlockNotFoundError: If no such block is stored.
        """
        pass

    @abstractmethod
    def delete(self, block_id: str) -> None:
        """Remove a block.

        Raises:
            BlockNotFoundError: If no such block is stored.
        """
        pass

    @abstractmethod
    def list_blocks(self, schedule_id: str) -> list[ScheduleBlock]:
        """Return all blocks of one schedule."""
        pass

    def replace_schedule(self, schedule_id: str, blocks: list[ScheduleBlock]) -> None:
        """Drop every block of ``schedule_id`` and store ``blocks`` instead."""
        for block in self.list_blocks(schedule_id):
            self.delete(block.block_id)
        for block in blocks:
            self.add(block)


class InMemoryScheduleRepository(ScheduleRepository):
    """Dictionary-backed repository, preserving insertion order."""

    def __init__(self) -> None:
        self._blocks: dict[str, ScheduleBlock] = {}

    def add(self, block: ScheduleBlock) -> ScheduleBlock:
        self._blocks[block.block_id] = block
        return block

    def get(self, block_id: str) -> ScheduleBlock:
        try:
            return self._blocks[block_id]
        except KeyError:
            raise BlockNotFoundError(block_id) from None

    def update(self, block: ScheduleBlock) -> ScheduleBlock:
        if block.block_id not in self._blocks:
            raise BlockNotFoundError(block.block_id)
        self._blocks[block.block_id] = block
        return block

    def delete(self, block_id: str) -> None:
        if self._blocks.pop(block_id, None) is None:
            raise BlockNotFoundError(block_id)

    def list_blocks(self, schedule_id: str) -> list[ScheduleBlock]:
        return [b for b in self._blocks.values() if b.schedule_id == schedule_id]


def reschedule_week(
    repo: ScheduleRepository,
    block_id: str,
    from_week: int,
    to_week: int,
    day_of_week: int,
    start_slot: int,
    end_slot: int,
    location: str,
) -> Optional[ScheduleBlock]:
    """Move a single occurrence of a block to another week, day, slot or room.

    ``from_week`` is removed from the original block, which is deleted when
    no weeks remain. A new block occurring only in ``to_week`` is added with
    the new placement and the original name, teacher, color and schedule.

    Returns:
        The new block, or None if the block does not meet in ``from_week``.

    Raises:
        BlockNotFoundError: If ``block_id`` is not stored.
        ValueError: If ``end_slot`` is before ``start_slot``.
    """
    if end_slot < start_slot:
        raise ValueError(f"End slot {end_slot} is before start slot {start_slot}")

    block = repo.get(block_id)
    if from_week not in block.weeks:
        logger.info("Block %r does not meet in week %d; nothing to move", block.name, from_week)
        return None

    remaining = tuple(week for week in block.weeks if week != from_week)
    if remaining:
        repo.update(dataclasses.replace(block, weeks=remaining))
    else:
        repo.delete(block.block_id)

    moved = ScheduleBlock(
        name=block.name,
        teacher=block.teacher,
        location=location,
        weeks=(to_week,),
        day_of_week=day_of_week,
        start_slot=start_slot,
        slot_span=end_slot - start_slot + 1,
        color=block.color,
        schedule_id=block.schedule_id,
    )
    return repo.add(moved)
