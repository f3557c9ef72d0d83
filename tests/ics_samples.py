"""Helpers for building small iCalendar documents in tests."""


def vevent(summary, start, end, description=None, location=None, extra=()):
    """Build the lines of one VEVENT; ``start``/``end`` are full property lines."""
    lines = ["BEGIN:VEVENT", f"SUMMARY:{summary}", start, end]
    if description is not None:
        lines.append(f"DESCRIPTION:{description}")
    if location is not None:
        lines.append(f"LOCATION:{location}")
    lines.extend(extra)
    lines.append("END:VEVENT")
    return lines


def vcalendar(*events, name=None, newline="\n"):
    lines = ["BEGIN:VCALENDAR", "VERSION:2.0"]
    if name is not None:
        lines.append(f"X-WR-CALNAME:{name}")
    for event in events:
        lines.extend(event)
    lines.append("END:VCALENDAR")
    return newline.join(lines)
