"""
Date normalization for syllabus text.

Recognizes exactly two grammars and turns them into calendar dates:

- Numeric, US order: M/D/YY or M/D/YYYY ("3/15/25", "03/15/2025")
- Textual: Month D, YYYY where the month is a case-insensitive
  abbreviation or full name ("Mar 15, 2025", "march 15 2025", "Sept. 5, 2025")

Anything else (ISO dates, ordinals like "March 3rd", relative dates such as
"next Friday") is deliberately not recognized. Not matching is a normal
outcome and is reported as None, never as an exception.

Two-digit years use one sliding window everywhere in the project:
00-49 -> 2000-2049, 50-99 -> 1950-1999.
"""

import re
from datetime import date
from typing import List, Optional, Tuple

TWO_DIGIT_YEAR_PIVOT = 50

MONTHS = {
    'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'may': 5, 'jun': 6,
    'jul': 7, 'aug': 8, 'sep': 9, 'oct': 10, 'nov': 11, 'dec': 12,
}

# Regex sources are exported so line-level parsers can anchor them
NUMERIC_DATE = r'(?<!\d)\d{1,2}/\d{1,2}/(?:\d{4}|\d{2})(?!\d)'
MONTH_NAME = (
    r'jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?'
    r'|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?'
)
TEXTUAL_DATE = (
    rf'\b(?:{MONTH_NAME})\.?'
    r'\s+\d{1,2},?\s+\d{4}(?!\d)'
)
DATE_PATTERN = rf'(?:{NUMERIC_DATE}|{TEXTUAL_DATE})'

_NUMERIC_RE = re.compile(r'(?<!\d)(\d{1,2})/(\d{1,2})/(\d{4}|\d{2})(?!\d)')
_TEXTUAL_RE = re.compile(
    rf'\b({MONTH_NAME})\.?\s+(\d{{1,2}}),?\s+(\d{{4}})(?!\d)',
    re.IGNORECASE,
)


def expand_year(year: int) -> int:
    """Expand a two-digit year with the project-wide sliding window."""
    if year >= 100:
        return year
    return 2000 + year if year < TWO_DIGIT_YEAR_PIVOT else 1900 + year


def _build_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _numeric(match: re.Match) -> Optional[date]:
    month, day, year = match.groups()
    return _build_date(expand_year(int(year)), int(month), int(day))


def _textual(match: re.Match) -> Optional[date]:
    month_word, day, year = match.groups()
    return _build_date(int(year), MONTHS[month_word.lower()[:3]], int(day))


def _candidates(text: str) -> List[Tuple[int, Optional[date]]]:
    """All grammar matches in text as (position, date-or-None), in reading order."""
    found = [(m.start(), _numeric(m)) for m in _NUMERIC_RE.finditer(text)]
    found += [(m.start(), _textual(m)) for m in _TEXTUAL_RE.finditer(text)]
    found.sort(key=lambda item: item[0])
    return found


def find_date(text: str) -> Optional[date]:
    """Return the first valid date found anywhere in text, or None.

    Grammar matches that are not real calendar dates (2/30/2025) are
    skipped and the scan continues.
    """
    if not text:
        return None
    for _, parsed in _candidates(text):
        if parsed is not None:
            return parsed
    return None


def normalize_date(fragment: str) -> Optional[date]:
    """Normalize a text fragment to a date, or None if it holds no date."""
    return find_date(fragment)


def is_date(text: str) -> bool:
    """True if the whole (stripped) text is a single recognized date."""
    stripped = (text or "").strip()
    if not stripped:
        return False
    for regex, convert in ((_NUMERIC_RE, _numeric), (_TEXTUAL_RE, _textual)):
        match = regex.fullmatch(stripped)
        if match and convert(match) is not None:
            return True
    return False
