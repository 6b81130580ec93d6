"""
Deterministic line-pattern parsing.

A table-free path over the raw line sequence. It finds the assignments
section of the syllabus and reads three line shapes from it:

    3/15/25 - Paper 1 draft             dated bullet   -> dated record
    - 3/22/25 - Paper 1 final           (bullet prefix allowed)
    - Module 1 Discussion: Introduction plain bullet   -> undated record
    Module 2: Case study                module line    -> undated record
"""

import logging
import re
from typing import List, Optional

from .date_normalizer import DATE_PATTERN, normalize_date
from .line_classifier import BULLET_PATTERN, MODULE_PATTERN, classify_line, split_lines
from .models import DEFAULT_CATEGORY, Assignment

logger = logging.getLogger(__name__)

DATED_BULLET_PATTERN = re.compile(rf'^(?:[-•*]\s+)?({DATE_PATTERN})\s*[-–—]\s*(.+)$', re.IGNORECASE)


def is_assignments_header(line: str) -> bool:
    lowered = line.lower()
    return 'assignments' in lowered or ('schedule' in lowered and 'assignment' in lowered)


def find_assignments_header(lines: List[str]) -> Optional[int]:
    """Index of the first assignments header line, or None."""
    for idx, line in enumerate(lines):
        if is_assignments_header(line):
            return idx
    return None


def parse_line(line: str) -> Optional[Assignment]:
    """Match one line against the three shapes, in priority order."""
    match = DATED_BULLET_PATTERN.match(line)
    if match:
        due_date = normalize_date(match.group(1))
        if due_date is None:
            logger.debug("Dated line with an invalid date skipped: %r", line)
            return None
        return Assignment(
            title=match.group(2).strip(),
            due_date=due_date,
            category=DEFAULT_CATEGORY,
            source="line",
        )

    match = BULLET_PATTERN.match(line) or MODULE_PATTERN.match(line)
    if match:
        # Module lines drop their "Module N:" prefix
        return Assignment(title=match.group(1).strip(), category=DEFAULT_CATEGORY, source="line")

    return None


class LinePatternParser:
    """Scans the assignments section of a syllabus line by line."""

    def parse(self, text: str) -> List[Assignment]:
        return self.parse_lines(split_lines(text))

    def parse_lines(self, lines: List[str]) -> List[Assignment]:
        header_idx = find_assignments_header(lines)
        if header_idx is None:
            logger.debug("No assignments section header found")
            return []

        header = lines[header_idx]
        assignments = []
        for line in lines[header_idx + 1:]:
            if line != header and classify_line(line).is_section_header:
                logger.debug("Section ended at %r", line)
                break
            assignment = parse_line(line)
            if assignment is not None and assignment.title:
                assignments.append(assignment)

        logger.info("Line parser found %d assignment(s) under %r", len(assignments), header)
        return assignments


def parse_assignment_lines(text: str) -> List[Assignment]:
    """Convenience function wrapping LinePatternParser."""
    return LinePatternParser().parse(text)
