"""
Ad-hoc table extraction from classified syllabus lines.

Syllabus PDFs rarely carry real table structure once they are flattened to
text, but schedules still survive as runs of lines whose cells are separated
by tabs or wide whitespace, or as runs of dated lines. This module groups
such runs into ExtractedTable objects.

Everything here is a pure function of the classified lines: no I/O and no
state carried between calls.
"""

import logging
from typing import List

from .line_classifier import classify_lines
from .models import CandidateLine, ExtractedTable

logger = logging.getLogger(__name__)

# A single line never becomes a table
MIN_TABLE_LINES = 2


def is_table_line(line: CandidateLine) -> bool:
    """A line can be part of a table if it is multi-column or carries a date."""
    return line.is_multi_column or line.has_date


def _cells(line: CandidateLine) -> List[str]:
    return list(line.columns) if line.columns else [line.text]


class TableExtractor:
    """Partitions a line sequence into non-overlapping ad-hoc tables."""

    def __init__(self, lines: List[CandidateLine]):
        self.lines = lines
        self.tables: List[ExtractedTable] = []
        self._current: List[CandidateLine] = []

    def extract(self) -> List[ExtractedTable]:
        """Scan the lines once and return every table found, in order."""
        for line in self.lines:
            if is_table_line(line):
                self._current.append(line)
            else:
                self._close()

        # End of input closes the open run under the same rule
        self._close()

        logger.debug("Extracted %d table(s) from %d lines", len(self.tables), len(self.lines))
        return self.tables

    def _close(self):
        """Turn the accumulated run into a table if it is long enough."""
        run, self._current = self._current, []
        if len(run) < MIN_TABLE_LINES:
            return

        headers = _cells(run[0])
        rows = [_cells(line) for line in run[1:]]
        self.tables.append(ExtractedTable(headers=headers, rows=rows))


def extract_tables(lines: List[CandidateLine]) -> List[ExtractedTable]:
    """Convenience function: classified lines in, tables out."""
    return TableExtractor(lines).extract()


def extract_tables_from_text(text: str) -> List[ExtractedTable]:
    """Classify raw syllabus text and extract its tables."""
    return extract_tables(classify_lines(text))
