"""
Course Information Extraction Module

Recovers the course code, name, term and a one-line description from the
first lines of a syllabus. Every field is optional; a syllabus that does
not state one simply yields None for it.
"""

import logging
import re
from typing import List, Optional

from .line_classifier import split_lines
from .models import CourseInfo

logger = logging.getLogger(__name__)


class CourseInfoExtractor:
    """
    Extracts course details from plain syllabus text.
    """

    # Course code pattern, e.g. "CS 101", "WW-HUMN 340", "MATH1010A"
    COURSE_CODE_PATTERN = re.compile(r'\b([A-Z]{2,4}[-\s]?[A-Z]*\s*\d{3,4}[A-Z]?)\b')

    TERM_PATTERN = re.compile(
        r'\b(Spring|Summer|Fall|Winter|January|February|March|April|May|June|July|'
        r'August|September|October|November|December)\s+(20\d{2})\b',
        re.IGNORECASE,
    )

    # Lines that name the institution rather than the course
    NEGATIVE_KEYWORDS = ('University', 'College')

    DESCRIPTION_KEYWORDS = ('description', 'overview', 'course goals', 'learning outcomes')

    # How far into the document each field is searched
    CODE_SEARCH_LINES = 20
    NAME_SEARCH_LINES = 10
    TERM_SEARCH_LINES = 30
    DESCRIPTION_LOOKAHEAD = 4

    def __init__(self, text: str):
        self.lines: List[str] = split_lines(text)
        self.course_code: Optional[str] = None

    def extract(self) -> CourseInfo:
        """
        Extract all course fields.

        Returns:
            CourseInfo with None for anything not found
        """
        self.course_code = self._extract_course_code()
        info = CourseInfo(
            code=self.course_code,
            name=self._extract_course_name(),
            term=self._extract_term(),
            description=self._extract_description(),
        )
        logger.debug("Course info: %s", info)
        return info

    def _extract_course_code(self) -> Optional[str]:
        for line in self.lines[:self.CODE_SEARCH_LINES]:
            for match in self.COURSE_CODE_PATTERN.finditer(line):
                code = match.group(1).strip()
                # "MAY 2025" has the shape of a course code
                if self.TERM_PATTERN.fullmatch(code):
                    continue
                return code
        return None

    def _extract_course_name(self) -> Optional[str]:
        # Usually on the same line as the code: "WW-UNSY 315 - Uncrewed Aircraft Systems"
        if self.course_code:
            for line in self.lines[:self.CODE_SEARCH_LINES]:
                if self.course_code not in line:
                    continue
                rest = line.replace(self.course_code, '', 1).strip()
                if 5 < len(rest) < 100:
                    return re.sub(r'^[-\s:]+|[-\s:]+$', '', rest)

        # Otherwise the first title-like line near the top
        for line in self.lines[:self.NAME_SEARCH_LINES]:
            if 10 < len(line) < 100 and not any(kw in line for kw in self.NEGATIVE_KEYWORDS):
                return line
        return None

    def _extract_term(self) -> Optional[str]:
        for line in self.lines[:self.TERM_SEARCH_LINES]:
            match = self.TERM_PATTERN.search(line)
            if match:
                return match.group(0)
        return None

    def _extract_description(self) -> Optional[str]:
        for idx, line in enumerate(self.lines):
            lowered = line.lower()
            if not any(kw in lowered for kw in self.DESCRIPTION_KEYWORDS):
                continue
            following = self.lines[idx + 1:idx + 1 + self.DESCRIPTION_LOOKAHEAD]
            candidates = [l for l in following if 20 < len(l) < 500]
            if candidates:
                return candidates[0]
        return None


def extract_course_info(text: str) -> CourseInfo:
    """Convenience function to extract course information from text."""
    return CourseInfoExtractor(text).extract()
