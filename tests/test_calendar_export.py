"""Unit tests for iCalendar export."""

from datetime import date
from icalendar import Calendar
from syllabus_extractor.calendar_export import AssignmentCalendarGenerator
from syllabus_extractor.models import Assignment, CourseInfo


def test_all_day_due_events(tmp_path):
    """One all-day event per dated assignment; undated ones are skipped."""
    assignments = [
        Assignment(title="Quiz 1", due_date=date(2025, 2, 1), category="Quiz"),
        Assignment(title="Reading log"),
    ]
    cal_gen = AssignmentCalendarGenerator(CourseInfo(code="CS 101"))
    calendar = cal_gen.generate_calendar(assignments)

    ics_path = tmp_path / "course.ics"
    cal_gen.export_to_file(calendar, str(ics_path))

    parsed = Calendar.from_ical(ics_path.read_bytes())
    events = list(parsed.walk("VEVENT"))
    assert len(events) == 1
    event = events[0]
    assert str(event.get("summary")) == "DUE: CS 101: Quiz 1"
    assert event.decoded("dtstart") == date(2025, 2, 1)
    assert event.decoded("dtend") == date(2025, 2, 2)
    assert "Quiz assessment: Quiz 1" in str(event.get("description"))


def test_calendar_without_course_code():
    """Summaries carry no prefix when the course code is unknown."""
    calendar = AssignmentCalendarGenerator().generate_calendar(
        [Assignment(title="Paper", due_date=date(2025, 3, 3))]
    )
    event = list(calendar.walk("VEVENT"))[0]
    assert str(event.get("summary")) == "DUE: Paper"
    assert str(calendar.get("prodid")) == "-//Syllabus Assignment Extractor//EN"
