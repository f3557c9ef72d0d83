from datetime import date

from coursegrid.consolidator import consolidate
from coursegrid.weeks import (
    blocks_for_day,
    blocks_for_week,
    current_week_number,
    date_for,
    day_of_week,
    week_dates,
    week_number,
    week_start,
)

SEMESTER = date(2025, 9, 3)  # a Wednesday


def test_week_start_is_monday():
    assert week_start(date(2025, 9, 3)) == date(2025, 9, 1)
    assert week_start(date(2025, 9, 7)) == date(2025, 9, 1)
    assert week_start(date(2025, 9, 8)) == date(2025, 9, 8)


def test_day_of_week():
    assert day_of_week(date(2025, 9, 1)) == 1
    assert day_of_week(date(2025, 9, 7)) == 7


def test_week_number():
    assert week_number(date(2025, 9, 1), SEMESTER) == 1
    assert week_number(date(2025, 9, 14), SEMESTER) == 2
    assert week_number(date(2025, 12, 1), SEMESTER) == 14
    assert week_number(date(2025, 8, 31), SEMESTER) == 0


def test_current_week_number_is_at_least_one():
    assert current_week_number(date(2025, 8, 1), SEMESTER) == 1
    assert current_week_number(date(2025, 9, 10), SEMESTER) == 2


def test_week_dates():
    dates = week_dates(date(2025, 9, 4))
    assert dates[0] == date(2025, 9, 1)
    assert dates[-1] == date(2025, 9, 7)
    assert len(dates) == 7


def test_date_for():
    assert date_for(SEMESTER, 1, 1) == date(2025, 9, 1)
    assert date_for(SEMESTER, 3, 5) == date(2025, 9, 19)


def test_blocks_for_week_and_day(meeting):
    blocks = consolidate([
        meeting(slot=1, day=1, weeks=(1, 2)),
        meeting(name="Physics", slot=1, day=2, weeks=(2,)),
        meeting(name="History", slot=5, day=1, weeks=(3,)),
    ], "s1")

    assert {b.name for b in blocks_for_week(blocks, 2)} == {"Algebra", "Physics"}
    assert [b.name for b in blocks_for_day(blocks, 2, 1)] == ["Algebra"]
    assert blocks_for_week(blocks, 0) == []
