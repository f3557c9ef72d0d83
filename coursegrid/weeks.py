"""Academic week arithmetic. Weeks start on Monday."""

from datetime import date, timedelta

from .models import ScheduleBlock


def week_start(day: date) -> date:
    """Return the Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def day_of_week(day: date) -> int:
    """Return 1-7 for Monday-Sunday."""
    return day.isoweekday()


def week_number(day: date, semester_start: date) -> int:
    """Return the 1-based academic week of ``day``.

    Days before the semester's first week give 0 or a negative number.
    """
    days_between = (week_start(day) - week_start(semester_start)).days
    return days_between // 7 + 1


def current_week_number(day: date, semester_start: date) -> int:
    """Like :func:`week_number`, but never less than 1."""
    return max(1, week_number(day, semester_start))


def week_dates(day: date) -> list[date]:
    """Return the seven dates of the week containing ``day``."""
    monday = week_start(day)
    return [monday + timedelta(days=offset) for offset in range(7)]


def date_for(semester_start: date, week: int, day: int) -> date:
    """Return the calendar date of ``day`` (1-7) in academic ``week``."""
    return week_start(semester_start) + timedelta(days=(week - 1) * 7 + (day - 1))


def blocks_for_week(blocks: list[ScheduleBlock], week: int) -> list[ScheduleBlock]:
    if week <= 0:
        return []
    return [block for block in blocks if block.occurs_in_week(week)]


def blocks_for_day(blocks: list[ScheduleBlock], week: int, day: int) -> list[ScheduleBlock]:
    """Return the blocks meeting on ``day`` (1-7) of academic ``week``."""
    return [block for block in blocks_for_week(blocks, week) if block.day_of_week == day]
