"""Abstract base class for schedule transformers."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from coursegrid.models import ScheduleBlock

DEFAULT_TIMEZONE = "Asia/Shanghai"


def get_zone(tzid: str) -> ZoneInfo:
    """Return the timezone for an IANA identifier.

    Raises:
        ValueError: If the identifier is unknown.
    """
    try:
        return ZoneInfo(tzid)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: '{tzid}'") from e


class BaseTransformer(ABC):
    """Abstract base class defining the interface for schedule transformers.

    Extend this class to implement transformers for different output formats
    (e.g., iCalendar, JSON, etc.).
    """

    @abstractmethod
    def transform(self, blocks: list[ScheduleBlock], semester_start: date) -> Any:
        """Transform schedule blocks into the target format.

        Args:
            blocks: Blocks to transform.
            semester_start: Any day of the first academic week.

        Returns:
            Transformed data in the target format.
        """
        pass

    @abstractmethod
    def save(self, output_path: str) -> None:
        """Save the transformed data to a file.

        Args:
            output_path: Path to the output file.
        """
        pass
