"""Unit tests for data models."""

import pytest
from datetime import date
from syllabus_extractor.models import (
    Assignment, CandidateLine, ExtractedTable, CourseInfo, ExtractionResult,
    DEFAULT_CATEGORY,
    serialize_date, assignment_to_dict, course_info_to_dict,
    describe_assignment,
)


def test_assignment_defaults():
    """Test Assignment model defaults."""
    assignment = Assignment(title="Paper 1")
    assert assignment.title == "Paper 1"
    assert assignment.due_date is None
    assert assignment.category == DEFAULT_CATEGORY == "Assignment"
    assert assignment.source == "unknown"


def test_candidate_line_defaults():
    """Test CandidateLine model."""
    line = CandidateLine(text="Week 1")
    assert line.columns == []
    assert not line.is_multi_column
    assert not line.has_date
    assert not line.is_bullet
    assert not line.is_module
    assert not line.is_section_header


def test_extracted_table_dimensions():
    """Rows are kept as split, without padding."""
    table = ExtractedTable(
        headers=["Date", "Title"],
        rows=[["3/15/25", "Midterm", "100"], ["3/22/25"]],
    )
    assert table.num_rows == 2
    assert table.score == 0
    assert table.rows[1] == ["3/22/25"]


def test_extraction_result_defaults():
    """Test ExtractionResult model."""
    result = ExtractionResult(assignments=[], strategy="none")
    assert result.table_score is None
    assert result.course == CourseInfo()


def test_serialize_date():
    """Test date serialization."""
    d = date(2026, 9, 15)
    serialized = serialize_date(d)
    assert serialized == "2026-09-15"
    assert serialize_date(None) is None


def test_assignment_to_dict():
    """Test the JSON shape of an assignment."""
    assignment = Assignment(
        title="Midterm Exam",
        due_date=date(2025, 3, 15),
        category="Assignment",
        source="table",
    )
    assert assignment_to_dict(assignment) == {
        "title": "Midterm Exam",
        "dueDate": "2025-03-15",
        "category": "Assignment",
        "source": "table",
    }


def test_course_info_to_dict():
    """Test CourseInfo serialization."""
    course = CourseInfo(code="CS 101", name="Intro to Computing", term="Fall 2025")
    assert course_info_to_dict(course) == {
        "code": "CS 101",
        "name": "Intro to Computing",
        "term": "Fall 2025",
        "description": None,
    }


@pytest.mark.parametrize("title,expected", [
    ("Module 1 Discussion: Introduction", "Discussion assignment: Module 1 Discussion: Introduction"),
    ("Quiz 2", "Quiz assessment: Quiz 2"),
    ("Final Exam", "Exam assessment: Final Exam"),
    ("Reflective Essay", "Written essay assignment: Reflective Essay"),
    ("Lab 3", "Laboratory assignment: Lab 3"),
    ("Chapter 4 Worksheet", "Worksheet assignment: Chapter 4 Worksheet"),
    ("Paper 1", "Assignment: Paper 1"),
])
def test_describe_assignment(title, expected):
    """Descriptions are keyed on title keywords, case-insensitively."""
    assert describe_assignment(Assignment(title=title)) == expected
