"""
Data models for the syllabus-to-assignments extractor.

This module defines the data structures shared by every stage of the
pipeline. All models use Python dataclasses, which generate __init__ and
__repr__ for us and keep the records easy to read and compare in tests.

These models represent:
- Assignments (the final output handed to the store)
- Candidate lines (classifier output, lives for one scan)
- Extracted tables (table extractor output, lives for one request)
- Course information recovered from the syllabus header
- The result of one extraction run
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

DEFAULT_CATEGORY = "Assignment"


@dataclass
class Assignment:
    """Represents one gradable item recovered from a syllabus.

    The title is required. The due date is optional while the record moves
    through the parsers, but once set it is always a real calendar date,
    never a raw string from the document.
    """
    title: str                          # e.g. "Module 1 Discussion: Introduction"
    due_date: Optional[date] = None     # Normalized calendar date, or None if unknown
    category: str = DEFAULT_CATEGORY    # "Assignment", "Quiz", "Exam", ... or free text from a type column
    source: str = "unknown"             # Which strategy produced it: "table", "line", "ai", "client"


@dataclass
class CandidateLine:
    """A trimmed, non-blank syllabus line plus the flags the classifier set."""
    text: str
    columns: List[str] = field(default_factory=list)  # Segments split on tabs / 3+ spaces
    is_multi_column: bool = False
    has_date: bool = False
    is_bullet: bool = False
    is_module: bool = False
    is_section_header: bool = False


@dataclass
class ExtractedTable:
    """A run of tabular or dated lines split into header and rows.

    Rows keep whatever cell count their line produced; they are never
    padded to the header width.
    """
    headers: List[str]
    rows: List[List[str]] = field(default_factory=list)
    score: int = 0

    @property
    def num_rows(self) -> int:
        return len(self.rows)


@dataclass
class CourseInfo:
    """Course details found near the top of a syllabus."""
    code: Optional[str] = None          # e.g. "WW-UNSY 315"
    name: Optional[str] = None          # e.g. "Uncrewed Aircraft Systems and Operations"
    term: Optional[str] = None          # e.g. "May 2025"
    description: Optional[str] = None


@dataclass
class ExtractionResult:
    """Container for everything one extraction run produced."""
    assignments: List[Assignment]
    strategy: str                       # "table", "line", "ai", "client" or "none"
    table_score: Optional[int] = None   # Score of the best table, if any table was found
    course: CourseInfo = field(default_factory=CourseInfo)


# Serialization helpers for JSON conversion

def serialize_date(d: Optional[date]) -> Optional[str]:
    """Convert date to ISO format string (None stays None)."""
    return d.isoformat() if d else None


def assignment_to_dict(assignment: Assignment) -> Dict[str, Any]:
    """Convert an Assignment to its JSON shape."""
    return {
        "title": assignment.title,
        "dueDate": serialize_date(assignment.due_date),
        "category": assignment.category,
        "source": assignment.source,
    }


def course_info_to_dict(course: CourseInfo) -> Dict[str, Optional[str]]:
    """Convert CourseInfo to a JSON-serializable dict."""
    return {
        "code": course.code,
        "name": course.name,
        "term": course.term,
        "description": course.description,
    }


# Checked in order against the lowercased title; first hit wins
DESCRIPTION_TEMPLATES = (
    ("discussion", "Discussion assignment: {title}"),
    ("quiz", "Quiz assessment: {title}"),
    ("exam", "Exam assessment: {title}"),
    ("essay", "Written essay assignment: {title}"),
    ("project", "Project assignment: {title}"),
    ("lab", "Laboratory assignment: {title}"),
    ("worksheet", "Worksheet assignment: {title}"),
)


def describe_assignment(assignment: Assignment) -> str:
    """Short human-readable description stored alongside each record."""
    title_lower = assignment.title.lower()
    for keyword, template in DESCRIPTION_TEMPLATES:
        if keyword in title_lower:
            return template.format(title=assignment.title)
    return f"Assignment: {assignment.title}"
