"""
Line classification for raw syllabus text.

Scans the text once and flags each line with the structural hints the
extractors need: is it a table-like multi-column line, does it carry a date,
is it a bullet, a "Module N:" line, or a shouted ALL-CAPS section heading.
"""

import logging
import re
from typing import List

from .date_normalizer import find_date
from .models import CandidateLine

logger = logging.getLogger(__name__)

# A tab or a run of 3+ whitespace characters separates columns
COLUMN_SEPARATOR = re.compile(r'\t|\s{3,}')
BULLET_PATTERN = re.compile(r'^[-•*]\s+(.+)$')
MODULE_PATTERN = re.compile(r'^module\s+\d+[:\s]+(.+)$', re.IGNORECASE)


def split_columns(line: str) -> List[str]:
    """Split a line into non-empty cells on tabs / 3+ whitespace runs."""
    return [cell.strip() for cell in COLUMN_SEPARATOR.split(line) if cell.strip()]


def is_multi_column(line: str) -> bool:
    if not COLUMN_SEPARATOR.search(line):
        return False
    return len(split_columns(line)) >= 2


def is_bullet(line: str) -> bool:
    return BULLET_PATTERN.match(line) is not None


def is_module_line(line: str) -> bool:
    return MODULE_PATTERN.match(line) is not None


def is_section_header(line: str) -> bool:
    """Heuristic for a shouted heading such as "COURSE POLICIES".

    The line must read the same when uppercased, be longer than five
    characters and contain no hyphen.
    """
    return line == line.upper() and len(line) > 5 and '-' not in line


def split_lines(text: str) -> List[str]:
    """Trim every line and drop the blank ones."""
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


def classify_line(line: str) -> CandidateLine:
    """Build a CandidateLine for a single already-trimmed line."""
    columns = split_columns(line)
    return CandidateLine(
        text=line,
        columns=columns if columns else [line],
        is_multi_column=is_multi_column(line),
        has_date=find_date(line) is not None,
        is_bullet=is_bullet(line),
        is_module=is_module_line(line),
        is_section_header=is_section_header(line),
    )


def classify_lines(text: str) -> List[CandidateLine]:
    """Classify every non-blank line of the syllabus text, in order."""
    lines = [classify_line(line) for line in split_lines(text)]
    logger.debug(
        "Classified %d lines: %d multi-column, %d dated, %d bullets",
        len(lines),
        sum(1 for l in lines if l.is_multi_column),
        sum(1 for l in lines if l.has_date),
        sum(1 for l in lines if l.is_bullet),
    )
    return lines
