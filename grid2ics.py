#!/usr/bin/env python3
"""Timetable to iCalendar converter.

Consolidates per-meeting course records into schedule blocks and exports
them as an iCalendar (.ics) file, or imports an .ics file back into course
templates.
"""

import argparse
import dataclasses
import json
import logging
import sys
from datetime import date, datetime
from typing import Optional

from coursegrid import RawMeeting, Schedule, TimeSlotTable, consolidate
from coursegrid.errors import CalendarImportError
from ics_transformer import ICalImporter, ICalTransformer
from ics_transformer.base import DEFAULT_TIMEZONE
from ics_transformer.ical_importer import build_term_name


def parse_date(date_str: str) -> date:
    """Parse date string in YYYY-MM-DD format."""
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid date format: '{date_str}'. Expected YYYY-MM-DD."
        )


def load_meetings(path: str) -> list[RawMeeting]:
    """Read a JSON array of meeting objects.

    Raises:
        ValueError: If the file is not a list of valid meetings.
    """
    with open(path, encoding="utf-8") as f:
        records = json.load(f)

    if not isinstance(records, list):
        raise ValueError(f"{path}: expected a JSON array of meetings")

    meetings = []
    for index, record in enumerate(records):
        try:
            meetings.append(RawMeeting(
                name=record["name"],
                teacher=record.get("teacher", ""),
                location=record.get("location", ""),
                weeks=tuple(record["weeks"]),
                day_of_week=int(record["day_of_week"]),
                period_slot=int(record["period_slot"]),
            ))
        except (KeyError, TypeError) as e:
            raise ValueError(f"{path}: meeting #{index} is missing {e}") from e
    return meetings


def _json_default(value: object) -> str:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    raise TypeError(f"Cannot serialize {type(value).__name__}")


def run_export(args: argparse.Namespace, table: TimeSlotTable) -> None:
    output_path = args.output
    if not output_path.lower().endswith(".ics"):
        output_path = f"{output_path}.ics"

    meetings = load_meetings(args.meetings)
    print(f"Read {len(meetings)} meetings from: {args.meetings}")

    schedule = Schedule(name=args.name, term_name=build_term_name(args.start_date))
    blocks = consolidate(meetings, schedule_id=schedule.schedule_id, table=table)
    print(f"Consolidated into {len(blocks)} schedule blocks for the {schedule.term_name} term.")

    if not blocks:
        print("Warning: No blocks found. The output file will be empty.")

    transformer = ICalTransformer(
        schedule_name=schedule.name,
        timezone_id=args.timezone,
        table=table,
    )
    transformer.transform(blocks, args.start_date)
    transformer.save(output_path)

    print(f"Schedule saved to: {output_path}")


def run_import(args: argparse.Namespace, table: TimeSlotTable) -> None:
    importer = ICalImporter(timezone_id=args.timezone, table=table)
    result = importer.import_file(args.input)

    print(
        f"Imported '{result.schedule_name}' ({result.term_name}), "
        f"semester starting {result.semester_start}: "
        f"{len(result.templates)} courses, {len(result.skipped)} events skipped.",
        file=sys.stderr,
    )

    payload = json.dumps(dataclasses.asdict(result), default=_json_default, ensure_ascii=False, indent=2)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(payload)
        print(f"Courses saved to: {args.output}", file=sys.stderr)
    else:
        print(payload)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert timetables to and from iCalendar format.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 grid2ics.py export --meetings meetings.json --start-date 2025-09-01
  python3 grid2ics.py export --meetings meetings.json --start-date 2025-09-01 --name "Autumn 2025" -o autumn.ics
  python3 grid2ics.py import autumn.ics -o courses.json
        """
    )
    parser.add_argument(
        "--timezone",
        default=DEFAULT_TIMEZONE,
        help=f"IANA timezone of the class periods (default: {DEFAULT_TIMEZONE})"
    )
    parser.add_argument(
        "--classtime",
        default=None,
        help="Path to a classtime JSON period table (default: bundled table)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    export_parser = subparsers.add_parser("export", help="Export meetings to an .ics file")
    export_parser.add_argument(
        "--meetings",
        required=True,
        help="JSON file with an array of meetings"
    )
    export_parser.add_argument(
        "--start-date",
        type=parse_date,
        required=True,
        help="Any day of the first semester week (format: YYYY-MM-DD)"
    )
    export_parser.add_argument(
        "--name",
        default="Schedule",
        help="Calendar display name (default: Schedule)"
    )
    export_parser.add_argument(
        "-o", "--output",
        default="schedule.ics",
        help="Output file path (default: schedule.ics)"
    )

    import_parser = subparsers.add_parser("import", help="Import an .ics file as course templates")
    import_parser.add_argument("input", help="Path to the .ics file")
    import_parser.add_argument(
        "-o", "--output",
        default=None,
        help="Write courses JSON to this file instead of stdout"
    )

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the converter."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        table = TimeSlotTable.load(args.classtime)
        if args.command == "export":
            run_export(args, table)
        else:
            run_import(args, table)

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(130)
    except (CalendarImportError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
