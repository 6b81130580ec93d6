"""
Table-based assignment parsing.

Given the table the selector chose, map its headers to semantic columns
(date, title, type) and emit one Assignment per usable row.
"""

import logging
from typing import List, Sequence

from .date_normalizer import is_date, normalize_date
from .models import DEFAULT_CATEGORY, Assignment, ExtractedTable

logger = logging.getLogger(__name__)

DATE_KEYWORDS = ('date', 'due', 'deadline')
TITLE_KEYWORDS = ('name', 'title', 'assignment', 'task')
TYPE_KEYWORDS = ('type', 'category', 'kind')

# Checked in order against the title as written; first hit wins
CATEGORY_HINTS = (
    ('discussion', 'Discussion'),
    ('quiz', 'Quiz'),
    ('exam', 'Exam'),
    ('project', 'Project'),
    ('lab', 'Lab'),
)

NOT_FOUND = -1


def find_column(headers: Sequence[str], keywords: Sequence[str]) -> int:
    """Index of the first header containing any keyword, else -1."""
    for idx, header in enumerate(headers):
        header_lower = (header or "").lower()
        if any(kw in header_lower for kw in keywords):
            return idx
    return NOT_FOUND


def infer_category(title: str) -> str:
    """Infer a category from title substrings.

    The test is case-sensitive, so "Midterm Exam" stays an Assignment
    while "final exam review" becomes an Exam.
    """
    for hint, category in CATEGORY_HINTS:
        if hint in title:
            return category
    return DEFAULT_CATEGORY


def _cell(row: Sequence[str], idx: int) -> str:
    """Cell at idx, or "" when the column is missing or the row is short."""
    if idx == NOT_FOUND or idx >= len(row):
        return ""
    return (row[idx] or "").strip()


class TableAssignmentParser:
    """Turns the rows of a selected table into Assignment records."""

    def __init__(self, table: ExtractedTable):
        self.table = table
        self.date_col = find_column(table.headers, DATE_KEYWORDS)
        self.title_col = find_column(table.headers, TITLE_KEYWORDS)
        self.type_col = find_column(table.headers, TYPE_KEYWORDS)

    def parse(self) -> List[Assignment]:
        """Parse every row; rows that fail are skipped, never fatal."""
        logger.debug(
            "Column map: date=%d title=%d type=%d",
            self.date_col, self.title_col, self.type_col,
        )
        assignments = []
        for row_idx, row in enumerate(self.table.rows, 1):
            try:
                assignment = self._parse_row(row)
            except (ValueError, IndexError, TypeError, AttributeError) as e:
                logger.debug("Skipping table row %d %r: %s", row_idx, row, e)
                continue
            if assignment is not None:
                assignments.append(assignment)

        logger.info("Table parser emitted %d of %d rows", len(assignments), self.table.num_rows)
        return assignments

    def _parse_row(self, row: Sequence[str]):
        due_date = self._resolve_date(row)
        if due_date is None:
            return None

        title = self._resolve_title(row)
        if not title:
            return None

        category = _cell(row, self.type_col) or infer_category(title)
        return Assignment(title=title, due_date=due_date, category=category, source="table")

    def _resolve_date(self, row: Sequence[str]):
        """Date from the date column, else the first cell holding a date."""
        if self.date_col != NOT_FOUND:
            parsed = normalize_date(_cell(row, self.date_col))
            if parsed is not None:
                return parsed

        for cell in row:
            parsed = normalize_date(cell)
            if parsed is not None:
                return parsed
        return None

    def _resolve_title(self, row: Sequence[str]) -> str:
        """Title from the title column, else the longest non-date cell."""
        if self.title_col != NOT_FOUND:
            title = _cell(row, self.title_col)
            if title:
                return title

        best = ""
        for cell in row:
            text = (cell or "").strip()
            if is_date(text):
                continue
            if len(text) > len(best):
                best = text
        return best


def parse_table(table: ExtractedTable) -> List[Assignment]:
    """Convenience function wrapping TableAssignmentParser."""
    return TableAssignmentParser(table).parse()
