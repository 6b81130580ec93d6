"""
iCalendar export module.

Writes extracted assignments as all-day due-date events in a .ics file so
a student can import the schedule into any calendar application.
"""

import uuid
from datetime import timedelta
from typing import List, Optional

from icalendar import Calendar, Event

from .models import Assignment, CourseInfo, describe_assignment


class AssignmentCalendarGenerator:
    """Generates iCalendar (.ics) files from extracted assignments."""

    def __init__(self, course: Optional[CourseInfo] = None):
        """Initialize calendar generator.

        Args:
            course: Course details used to prefix event summaries
        """
        self.course = course or CourseInfo()

    def generate_calendar(self, assignments: List[Assignment]) -> Calendar:
        """Generate a calendar with one event per dated assignment.

        Undated assignments have nowhere to go on a calendar and are skipped.

        Args:
            assignments: Post-filtered assignments

        Returns:
            Calendar object ready for export
        """
        cal = Calendar()
        cal.add('prodid', '-//Syllabus Assignment Extractor//EN')
        cal.add('version', '2.0')
        cal.add('calscale', 'GREGORIAN')
        cal.add('method', 'PUBLISH')
        if self.course.code:
            cal.add('x-wr-calname', self.course.code)

        for assignment in assignments:
            if assignment.due_date:
                cal.add_component(self._create_due_event(assignment))

        return cal

    def _create_due_event(self, assignment: Assignment) -> Event:
        """Create an all-day event on the assignment's due date."""
        event = Event()
        event.add('uid', f"{uuid.uuid4()}@syllabus-extractor")
        event.add('dtstart', assignment.due_date)
        event.add('dtend', assignment.due_date + timedelta(days=1))

        prefix = f"{self.course.code}: " if self.course.code else ""
        event.add('summary', f"DUE: {prefix}{assignment.title}")

        desc_parts = [describe_assignment(assignment), f"Category: {assignment.category}"]
        event.add('description', "\n".join(desc_parts))
        event.add('categories', [assignment.category])
        event.add('priority', 5)  # Medium-high priority for due dates
        return event

    def export_to_file(self, calendar: Calendar, filepath: str):
        """Export calendar to .ics file.

        Args:
            calendar: Calendar object
            filepath: Path to output file
        """
        with open(filepath, 'wb') as f:
            f.write(calendar.to_ical())
