"""
Syllabus extraction pipeline.

Control flow for one syllabus:

    text -> line classifier -> table extractor -> scorer/selector -> table parser

If no table qualifies (or the chosen table yields no rows), extraction
falls through according to the configured mode:

    deterministic  line-pattern parser
    ai             AI fallback
    hybrid         line-pattern parser, then the AI fallback if nothing survived

Every path ends in the post-filter. process_syllabus() is the outer
boundary: it is the only place that raises, and it hands the result to the
assignment store.
"""

import logging
from typing import Any, Iterable, List, Optional

from .ai_fallback import AIAssignmentExtractor, coerce_assignment
from .config import MODE_AI, MODE_DETERMINISTIC, ExtractorConfig
from .course_info import extract_course_info
from .exceptions import EmptySyllabusError, PersistenceError
from .line_classifier import classify_lines
from .line_parser import LinePatternParser
from .models import Assignment, CandidateLine, ExtractionResult
from .table_extractor import extract_tables
from .table_parser import TableAssignmentParser
from .table_scorer import select_table
from .validator import post_filter

logger = logging.getLogger(__name__)

STRATEGY_TABLE = "table"
STRATEGY_LINE = "line"
STRATEGY_AI = "ai"
STRATEGY_CLIENT = "client"
STRATEGY_NONE = "none"


class SyllabusExtractor:
    """Runs the extraction strategies for one configuration.

    The extractor holds no per-request state, so one instance can serve
    many syllabi.
    """

    def __init__(self, config: Optional[ExtractorConfig] = None,
                 ai_extractor: Optional[AIAssignmentExtractor] = None):
        self.config = config or ExtractorConfig()
        self.ai_extractor = ai_extractor or AIAssignmentExtractor(self.config.ai)
        self.line_parser = LinePatternParser()

    def extract(self, text: str) -> ExtractionResult:
        """Extract and post-filter the assignments of one syllabus."""
        lines = classify_lines(text)
        course = extract_course_info(text)

        tables = extract_tables(lines)
        table = select_table(tables, self.config.min_table_score)
        best_score = max((t.score for t in tables), default=None)

        if table is not None:
            assignments = self._filter(TableAssignmentParser(table).parse())
            if assignments:
                return self._result(assignments, STRATEGY_TABLE, best_score, course)
            logger.info("Selected table produced no assignments; falling through")

        assignments, strategy = self._fallback(lines)
        return self._result(assignments, strategy, best_score, course)

    def _fallback(self, lines: List[CandidateLine]):
        mode = self.config.mode
        logger.info("No usable table; falling through in %s mode", mode)

        if mode != MODE_AI:
            assignments = self._filter(self.line_parser.parse_lines([l.text for l in lines]))
            if assignments or mode == MODE_DETERMINISTIC:
                return assignments, STRATEGY_LINE if assignments else STRATEGY_NONE

        assignments = self._filter(self.ai_extractor.extract(lines))
        return assignments, STRATEGY_AI if assignments else STRATEGY_NONE

    def _filter(self, assignments: List[Assignment]) -> List[Assignment]:
        return post_filter(
            assignments,
            window_days=self.config.window_days,
            keep_undated=self.config.keep_undated,
        )

    def _result(self, assignments, strategy, table_score, course) -> ExtractionResult:
        logger.info("Extracted %d assignment(s) via %s", len(assignments), strategy)
        return ExtractionResult(
            assignments=assignments,
            strategy=strategy,
            table_score=table_score,
            course=course,
        )


def accept_client_assignments(payload: Iterable[Any], config: Optional[ExtractorConfig] = None) -> List[Assignment]:
    """Validate assignments a client already parsed, then post-filter them.

    Each item goes through the same field-by-field validation as AI output;
    malformed items are dropped.
    """
    config = config or ExtractorConfig()
    assignments = []
    for item in payload or []:
        assignment = coerce_assignment(item, source=STRATEGY_CLIENT)
        if assignment is not None:
            assignments.append(assignment)
    return post_filter(assignments, window_days=config.window_days, keep_undated=config.keep_undated)


def process_syllabus(text: Optional[str], course_id: str, store=None,
                     config: Optional[ExtractorConfig] = None,
                     extractor: Optional[SyllabusExtractor] = None,
                     client_assignments: Optional[list] = None) -> ExtractionResult:
    """Extract the assignments of a syllabus and hand them to the store.

    Args:
        text: Plain syllabus text
        course_id: Opaque course identifier passed through to the store
        store: Object with save_assignments(course_id, assignments); None skips persistence
        config: Extraction settings (ignored when extractor is given)
        extractor: Pre-built SyllabusExtractor
        client_assignments: Pre-parsed assignments from the client; when
            non-empty they replace extraction

    Returns:
        ExtractionResult (an empty assignment list means "understood, found nothing")

    Raises:
        EmptySyllabusError: If no text was supplied
        PersistenceError: If the store failed
    """
    if text is None or not text.strip():
        raise EmptySyllabusError()

    extractor = extractor or SyllabusExtractor(config)

    if client_assignments:
        assignments = accept_client_assignments(client_assignments, extractor.config)
        result = ExtractionResult(
            assignments=assignments,
            strategy=STRATEGY_CLIENT if assignments else STRATEGY_NONE,
            course=extract_course_info(text),
        )
    else:
        result = extractor.extract(text)

    if store is not None and result.assignments:
        try:
            store.save_assignments(course_id, result.assignments)
        except Exception as e:
            logger.error("Failed to store assignments for course %s: %s", course_id, e)
            raise PersistenceError(f"Failed to store assignments: {e}") from e

    return result
