"""
Custom exceptions for syllabus processing.

Only the outer boundary (accepting a syllabus, reading a document, handing
results to the store) raises these. Internal extraction stages return empty
results instead so the pipeline can fall through to the next strategy.
Error codes are designed for API clients to branch on.
"""

from typing import Optional

# Error codes for client branching
SYLLABUS_ERROR = "SYLLABUS_ERROR"
SYLLABUS_EMPTY = "SYLLABUS_EMPTY"
SYLLABUS_READ_FAILED = "SYLLABUS_READ_FAILED"
SYLLABUS_PERSIST_FAILED = "SYLLABUS_PERSIST_FAILED"


class SyllabusError(Exception):
    """Base exception for syllabus processing failures."""

    def __init__(self, message: str, code: str = SYLLABUS_ERROR, http_status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status


class EmptySyllabusError(SyllabusError):
    """Caller supplied no syllabus text at all."""

    def __init__(self, message: str = "No syllabus text was supplied"):
        super().__init__(message, code=SYLLABUS_EMPTY, http_status=400)


class DocumentReadError(SyllabusError):
    """The uploaded document could not be turned into text."""

    def __init__(self, message: str):
        super().__init__(message, code=SYLLABUS_READ_FAILED, http_status=422)


class PersistenceError(SyllabusError):
    """Handing the assignments to the store failed."""

    def __init__(self, message: str):
        super().__init__(message, code=SYLLABUS_PERSIST_FAILED, http_status=500)
