from datetime import date

from coursegrid.consolidator import consolidate
from ics_transformer import ICalImporter, ICalTransformer


def test_export_then_import_restores_blocks(meeting, table):
    meetings = [
        meeting(slot=3, weeks=tuple(range(1, 17))),
        meeting(slot=4, weeks=tuple(range(1, 17))),
        meeting(name="Physics", slot=1, day=3, weeks=(1, 3, 5, 7),
                teacher="Prof. Curie, M.", location="Lab 2; East wing"),
        meeting(name="Physics", slot=2, day=3, weeks=(1, 3, 5, 7),
                teacher="Prof. Curie, M.", location="Lab 2; East wing"),
        meeting(name="Evening seminar", slot=10, day=7, weeks=(2,), teacher="", location=""),
    ]
    blocks = consolidate(meetings, "s1", table)

    transformer = ICalTransformer(schedule_name="Autumn, 2025", timezone_id="Asia/Shanghai", table=table)
    transformer.transform(blocks, date(2025, 9, 1))
    text = transformer.to_text()

    result = ICalImporter(timezone_id="Asia/Shanghai", table=table).import_text(text)

    assert result.schedule_name == "Autumn, 2025"
    assert result.term_name == "2025 autumn"
    assert result.semester_start == date(2025, 9, 1)
    assert result.skipped == []

    restored = {
        (t.name, t.teacher, t.location, t.day_of_week, t.start_slot, t.slot_span, t.weeks)
        for t in result.templates
    }
    expected = {
        (b.name, b.teacher, b.location, b.day_of_week, b.start_slot, b.slot_span, b.weeks)
        for b in blocks
    }
    assert restored == expected


def test_round_trip_across_timezones(meeting, table):
    blocks = consolidate([meeting(slot=5), meeting(slot=6, name="Chemistry")], "s1", table)

    transformer = ICalTransformer(timezone_id="America/New_York", table=table)
    transformer.transform(blocks, date(2025, 9, 1))

    result = ICalImporter(timezone_id="America/New_York", table=table).import_text(transformer.to_text())
    assert {(t.name, t.start_slot) for t in result.templates} == {("Algebra", 5), ("Chemistry", 6)}


def test_imported_templates_become_blocks(meeting, table):
    blocks = consolidate([meeting(slot=1)], "s1", table)
    transformer = ICalTransformer(table=table)
    transformer.transform(blocks, date(2025, 9, 1))

    result = ICalImporter(table=table).import_text(transformer.to_text())
    new_blocks = result.to_blocks("s2")

    assert [b.schedule_id for b in new_blocks] == ["s2"]
    assert new_blocks[0].weeks == blocks[0].weeks
