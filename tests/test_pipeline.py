"""Unit tests for the extraction pipeline and its outer boundary."""

import pytest
from datetime import date

from syllabus_extractor.config import AIConfig, ExtractorConfig
from syllabus_extractor.exceptions import EmptySyllabusError, PersistenceError
from syllabus_extractor.models import Assignment
from syllabus_extractor.pipeline import (
    SyllabusExtractor, accept_client_assignments, process_syllabus,
)


class RecordingAI:
    """Stands in for AIAssignmentExtractor and records how often it was asked."""

    def __init__(self, assignments=None):
        self.assignments = assignments or []
        self.calls = 0

    def extract(self, lines):
        self.calls += 1
        return list(self.assignments)


class MemoryStore:
    def __init__(self):
        self.saved = []

    def save_assignments(self, course_id, assignments):
        self.saved.append((course_id, list(assignments)))
        return len(assignments)


class BrokenStore:
    def save_assignments(self, course_id, assignments):
        raise RuntimeError("database is down")


TABLE_SYLLABUS = """CS 101 Introduction to Computing
Fall 2025

SCHEDULE
Due Date    Assignment    Type
9/8/25    Syllabus quiz    Quiz
9/15/25    Lab 1    Lab
9/29/25    Project proposal    Project
Late work is not accepted.
"""

LINE_SYLLABUS = """Course Outline
Assignments
9/8/25 - Reflection 1
9/22/25 - Reflection 2
- Module 1 Discussion: Introduction
COURSE POLICIES
- Be kind
"""

PROSE_SYLLABUS = """Course Outline
We meet twice a week.
Paper one is due on 10/6/25 at noon.
"""


def make_extractor(mode="hybrid", ai_assignments=None, **kwargs):
    config = ExtractorConfig(mode=mode, ai=AIConfig(api_key="k"), **kwargs)
    ai = RecordingAI(ai_assignments)
    return SyllabusExtractor(config, ai_extractor=ai), ai


def test_scenario_table_path():
    """A two-line table scoring 2 goes through the table parser."""
    extractor, ai = make_extractor()
    result = extractor.extract("Date    Title\n3/15/25    Midterm Exam")
    assert result.strategy == "table"
    assert result.table_score == 2
    assert [(a.title, a.due_date, a.category) for a in result.assignments] == [
        ("Midterm Exam", date(2025, 3, 15), "Assignment"),
    ]
    assert ai.calls == 0


def test_table_path_with_course_info():
    """The schedule table wins and course details come along."""
    extractor, ai = make_extractor()
    result = extractor.extract(TABLE_SYLLABUS)
    assert result.strategy == "table"
    assert [a.title for a in result.assignments] == ["Syllabus quiz", "Lab 1", "Project proposal"]
    assert [a.category for a in result.assignments] == ["Quiz", "Lab", "Project"]
    assert result.course.code == "CS 101"
    assert result.course.term == "Fall 2025"
    assert ai.calls == 0


def test_deterministic_mode_uses_line_parser():
    """Below-threshold tables fall through to the line parser."""
    extractor, ai = make_extractor(mode="deterministic")
    result = extractor.extract(LINE_SYLLABUS)
    assert result.strategy == "line"
    assert [(a.title, a.due_date) for a in result.assignments] == [
        ("Reflection 1", date(2025, 9, 8)),
        ("Reflection 2", date(2025, 9, 22)),
    ]
    assert ai.calls == 0


def test_deterministic_mode_keep_undated():
    """Undated bullet items survive when configured to."""
    extractor, _ = make_extractor(mode="deterministic", keep_undated=True)
    result = extractor.extract(LINE_SYLLABUS)
    assert [a.title for a in result.assignments] == [
        "Reflection 1", "Reflection 2", "Module 1 Discussion: Introduction",
    ]


def test_deterministic_mode_never_calls_ai():
    """Nothing found deterministically is an empty result, not an AI call."""
    extractor, ai = make_extractor(mode="deterministic")
    result = extractor.extract(PROSE_SYLLABUS)
    assert result.assignments == []
    assert result.strategy == "none"
    assert ai.calls == 0


def test_ai_mode_skips_line_parser():
    """In ai mode the fallback is called even when line patterns would match."""
    ai_result = [Assignment(title="From AI", due_date=date(2025, 9, 8), source="ai")]
    extractor, ai = make_extractor(mode="ai", ai_assignments=ai_result)
    result = extractor.extract(LINE_SYLLABUS)
    assert result.strategy == "ai"
    assert [a.title for a in result.assignments] == ["From AI"]
    assert ai.calls == 1


def test_hybrid_mode_falls_back_to_ai():
    """Hybrid tries line patterns first, then the AI fallback."""
    ai_result = [Assignment(title="Paper one", due_date=date(2025, 10, 6), source="ai")]
    extractor, ai = make_extractor(mode="hybrid", ai_assignments=ai_result)
    result = extractor.extract(PROSE_SYLLABUS)
    assert result.strategy == "ai"
    assert [a.title for a in result.assignments] == ["Paper one"]
    assert ai.calls == 1

    extractor, ai = make_extractor(mode="hybrid")
    assert extractor.extract(LINE_SYLLABUS).strategy == "line"
    assert ai.calls == 0


def test_fallback_is_deterministic():
    """The same input takes the same fallback path every time."""
    extractor, ai = make_extractor(mode="hybrid")
    first = extractor.extract(PROSE_SYLLABUS)
    second = extractor.extract(PROSE_SYLLABUS)
    assert first.strategy == second.strategy == "none"
    assert first.assignments == second.assignments == []
    assert ai.calls == 2


def test_low_scoring_table_is_not_used():
    """A table scoring under the threshold never reaches the table parser."""
    text = "Week    Topic\n1    Intro 9/1/25\nAssignments\n9/5/25 - Reading quiz"
    extractor, _ = make_extractor(mode="deterministic")
    result = extractor.extract(text)
    assert result.strategy == "line"
    assert result.table_score is not None and result.table_score < 2
    assert [a.title for a in result.assignments] == ["Reading quiz"]


def test_ai_output_is_post_filtered():
    """Every path goes through the post-filter."""
    ai_result = [
        Assignment(title="Stray", due_date=date(2024, 1, 1), source="ai"),
        Assignment(title="Real 2", due_date=date(2025, 9, 15), source="ai"),
        Assignment(title="Real 1", due_date=date(2025, 9, 8), source="ai"),
        Assignment(title="", due_date=date(2025, 9, 9), source="ai"),
    ]
    extractor, _ = make_extractor(mode="ai", ai_assignments=ai_result)
    result = extractor.extract(PROSE_SYLLABUS)
    assert [a.title for a in result.assignments] == ["Real 1", "Real 2"]


def test_process_syllabus_rejects_empty_text():
    """No text at all is a hard failure, distinct from zero assignments."""
    with pytest.raises(EmptySyllabusError) as exc_info:
        process_syllabus("", "course-1")
    assert exc_info.value.http_status == 400

    with pytest.raises(EmptySyllabusError):
        process_syllabus(None, "course-1")
    with pytest.raises(EmptySyllabusError):
        process_syllabus("   \n  ", "course-1")


def test_process_syllabus_stores_results():
    """Assignments are handed to the store with the course id."""
    extractor, _ = make_extractor()
    store = MemoryStore()
    result = process_syllabus(TABLE_SYLLABUS, "course-1", store=store, extractor=extractor)
    assert len(store.saved) == 1
    course_id, saved = store.saved[0]
    assert course_id == "course-1"
    assert saved == result.assignments


def test_process_syllabus_nothing_found_is_not_an_error():
    """Zero assignments is an ordinary result and nothing is stored."""
    extractor, _ = make_extractor(mode="deterministic")
    store = MemoryStore()
    result = process_syllabus(PROSE_SYLLABUS, "course-1", store=store, extractor=extractor)
    assert result.assignments == []
    assert store.saved == []


def test_process_syllabus_wraps_store_failure():
    """A failing store surfaces as PersistenceError."""
    extractor, _ = make_extractor()
    with pytest.raises(PersistenceError) as exc_info:
        process_syllabus(TABLE_SYLLABUS, "course-1", store=BrokenStore(), extractor=extractor)
    assert exc_info.value.code == "SYLLABUS_PERSIST_FAILED"
    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_client_assignments_bypass_extraction():
    """Pre-parsed client assignments replace extraction."""
    extractor, ai = make_extractor()
    payload = [
        {"title": "Client quiz", "dueDate": "2025-09-10", "category": "Quiz"},
        {"title": "", "dueDate": "2025-09-11"},
        {"dueDate": "2025-09-12"},
    ]
    result = process_syllabus(TABLE_SYLLABUS, "course-1", extractor=extractor, client_assignments=payload)
    assert result.strategy == "client"
    assert [(a.title, a.source) for a in result.assignments] == [("Client quiz", "client")]
    assert result.course.code == "CS 101"
    assert ai.calls == 0


def test_accept_client_assignments():
    """Client items are validated field by field and post-filtered."""
    payload = [
        {"title": "B", "dueDate": "2025-02-01"},
        {"title": "A", "dueDate": "1/15/25"},
        "garbage",
        {"title": "No date"},
    ]
    assignments = accept_client_assignments(payload)
    assert [(a.title, a.due_date) for a in assignments] == [
        ("A", date(2025, 1, 15)),
        ("B", date(2025, 2, 1)),
    ]
    assert accept_client_assignments(None) == []
