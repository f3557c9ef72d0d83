import pytest

from coursegrid import RawMeeting, TimeSlotTable


@pytest.fixture
def table():
    return TimeSlotTable.default()


@pytest.fixture
def meeting():
    """Factory for meetings with sensible defaults."""
    def make(name="Algebra", slot=3, day=1, weeks=(1, 2, 3), teacher="Dr. Smith", location="A101"):
        return RawMeeting(
            name=name,
            teacher=teacher,
            location=location,
            weeks=weeks,
            day_of_week=day,
            period_slot=slot,
        )
    return make
