import json

import pytest

import grid2ics


@pytest.fixture
def meetings_file(tmp_path):
    path = tmp_path / "meetings.json"
    path.write_text(json.dumps([
        {"name": "Algebra", "teacher": "Dr. Smith", "location": "A101",
         "weeks": [1, 2], "day_of_week": 1, "period_slot": 3},
        {"name": "Algebra", "teacher": "Dr. Smith", "location": "A101",
         "weeks": [1, 2], "day_of_week": 1, "period_slot": 4},
    ]), encoding="utf-8")
    return path


def test_export_then_import(tmp_path, meetings_file, capsys):
    output = tmp_path / "term"
    grid2ics.main([
        "export", "--meetings", str(meetings_file),
        "--start-date", "2025-09-01", "--name", "Autumn", "-o", str(output),
    ])
    assert "2025 autumn" in capsys.readouterr().out

    ics_path = tmp_path / "term.ics"
    assert ics_path.exists()
    assert ics_path.read_text(encoding="utf-8").count("BEGIN:VEVENT") == 2

    courses_path = tmp_path / "courses.json"
    grid2ics.main(["import", str(ics_path), "-o", str(courses_path)])

    payload = json.loads(courses_path.read_text(encoding="utf-8"))
    assert payload["schedule_name"] == "Autumn"
    assert payload["semester_start"] == "2025-09-01"
    assert payload["templates"][0]["start_slot"] == 3
    assert payload["templates"][0]["slot_span"] == 2
    assert payload["templates"][0]["weeks"] == [1, 2]


def test_import_prints_json_to_stdout(tmp_path, meetings_file, capsys):
    ics_path = tmp_path / "schedule.ics"
    grid2ics.main(["export", "--meetings", str(meetings_file), "--start-date", "2025-09-01",
                   "-o", str(ics_path)])
    capsys.readouterr()

    grid2ics.main(["import", str(ics_path)])

    payload = json.loads(capsys.readouterr().out)
    assert payload["templates"][0]["name"] == "Algebra"


def test_import_empty_calendar_exits_with_error(tmp_path, capsys):
    path = tmp_path / "empty.ics"
    path.write_text("BEGIN:VCALENDAR\nEND:VCALENDAR", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        grid2ics.main(["import", str(path)])

    assert excinfo.value.code == 1
    assert "no events" in capsys.readouterr().err


def test_export_invalid_meetings_file(tmp_path, capsys):
    path = tmp_path / "meetings.json"
    path.write_text(json.dumps([{"name": "Algebra"}]), encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        grid2ics.main(["export", "--meetings", str(path), "--start-date", "2025-09-01"])

    assert excinfo.value.code == 1
    assert "missing" in capsys.readouterr().err


def test_invalid_start_date_rejected(meetings_file):
    with pytest.raises(SystemExit) as excinfo:
        grid2ics.main(["export", "--meetings", str(meetings_file), "--start-date", "09/01/2025"])
    assert excinfo.value.code == 2
