"""
Main CLI entry point for the syllabus-to-assignments extractor.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .assignment_store import get_assignment_store
from .calendar_export import AssignmentCalendarGenerator
from .config import EXTRACTION_MODES, load_config
from .exceptions import SyllabusError
from .models import ExtractionResult, assignment_to_dict, course_info_to_dict
from .pdf_text import extract_text
from .pipeline import process_syllabus


def serialize_result(result: ExtractionResult) -> dict:
    """Serialize an ExtractionResult to a JSON-serializable dict."""
    return {
        "course": course_info_to_dict(result.course),
        "strategy": result.strategy,
        "table_score": result.table_score,
        "assignments": [assignment_to_dict(a) for a in result.assignments],
    }


def print_assignments(result: ExtractionResult):
    """Print a short summary of the extracted assignments."""
    if not result.assignments:
        print("\nNo assignments found.")
        return

    print(f"\nFound {len(result.assignments)} assignment(s) via {result.strategy}:")
    for i, assignment in enumerate(result.assignments, start=1):
        due = assignment.due_date.isoformat() if assignment.due_date else "no date"
        print(f"  {i}. [{due}] {assignment.title} ({assignment.category})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract a list of assignments from a course syllabus (PDF or text)"
    )
    parser.add_argument(
        "path",
        type=str,
        help="Path to the syllabus (.pdf or plain text)"
    )
    parser.add_argument(
        "--mode",
        choices=EXTRACTION_MODES,
        default=None,
        help="Fallback when no schedule table is found (default: SYLLABUS_EXTRACTION_MODE or hybrid)"
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=".",
        help="Output directory for JSON and .ics files (default: current directory)"
    )
    parser.add_argument(
        "--course-id",
        type=str,
        default=None,
        help="Store the assignments under this course identifier"
    )
    parser.add_argument(
        "--ics",
        action="store_true",
        help="Also write an iCalendar file with one all-day event per due date"
    )
    parser.add_argument(
        "--keep-undated",
        action="store_true",
        help="Keep assignments that have no due date"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    config = load_config()
    if args.mode:
        config.mode = args.mode
    if args.keep_undated:
        config.keep_undated = True

    path = Path(args.path)
    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    try:
        print(f"Reading syllabus: {path}")
        text = extract_text(path)

        store = get_assignment_store() if args.course_id else None
        result = process_syllabus(text, args.course_id, store=store, config=config)
    except SyllabusError as e:
        print(f"Error: {e.message}")
        return 1

    print_assignments(result)

    base_name = path.stem
    json_path = output_dir / f"{base_name}_assignments.json"
    with open(json_path, 'w') as f:
        json.dump(serialize_result(result), f, indent=2)
    print(f"\nSaved assignments to: {json_path}")

    if args.ics:
        cal_gen = AssignmentCalendarGenerator(result.course)
        calendar = cal_gen.generate_calendar(result.assignments)
        ics_path = output_dir / f"{base_name}.ics"
        cal_gen.export_to_file(calendar, str(ics_path))
        print(f"Saved calendar to: {ics_path}")

    if store is not None and result.assignments:
        print(f"Stored {len(result.assignments)} assignment(s) for course {args.course_id}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
