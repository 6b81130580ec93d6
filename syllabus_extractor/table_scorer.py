"""
Table scoring and selection.

A table's score estimates how likely it is to be the assignment schedule:
the number of schedule vocabulary words that appear in its header row.
"""

import logging
from typing import List, Optional

from .models import ExtractedTable

logger = logging.getLogger(__name__)

DEFAULT_MIN_SCORE = 2


class TableScorer:
    """Scores extracted tables by header keyword overlap and picks the best one."""

    KEYWORDS = (
        'date', 'due', 'name', 'event', 'points', 'assignment', 'discussion',
        'module', 'title', 'deadline', 'task', 'homework', 'project',
    )

    def __init__(self, min_score: int = DEFAULT_MIN_SCORE):
        self.min_score = min_score

    def score(self, table: ExtractedTable) -> int:
        """Count vocabulary words found in the concatenated header text.

        Matching is a case-insensitive substring test and each word counts
        once, however often it appears. The score is stored on the table.
        """
        header_text = " ".join(table.headers).lower()
        score = sum(1 for keyword in self.KEYWORDS if keyword in header_text)
        table.score = score
        return score

    def select(self, tables: List[ExtractedTable]) -> Optional[ExtractedTable]:
        """Return the highest-scoring table, or None if none qualifies.

        Ties go to the table extracted first.
        """
        best = None
        for table in tables:
            self.score(table)
            if best is None or table.score > best.score:
                best = table

        if best is None:
            logger.debug("No tables to score")
            return None

        if best.score < self.min_score:
            logger.debug("Best table scored %d (< %d); no suitable table", best.score, self.min_score)
            return None

        logger.debug("Selected table with headers %r (score %d)", best.headers, best.score)
        return best


def select_table(tables: List[ExtractedTable], min_score: int = DEFAULT_MIN_SCORE) -> Optional[ExtractedTable]:
    """Convenience function wrapping TableScorer.select."""
    return TableScorer(min_score).select(tables)
