"""
Text extraction for syllabus documents.

Turns an uploaded PDF (or a plain text file) into the plain text the
extraction pipeline consumes. PDF pages are read with pdfplumber in layout
mode so that column gaps survive as runs of spaces.
"""

import logging
from pathlib import Path
from typing import BinaryIO, List, Tuple, Union

import pdfplumber

from .exceptions import DocumentReadError

logger = logging.getLogger(__name__)

PathOrStream = Union[str, Path, BinaryIO]

TEXT_SUFFIXES = {'.txt', '.text', '.md'}


class PDFTextExtractor:
    """Extracts page text from a PDF syllabus."""

    def __init__(self, source: PathOrStream):
        """Initialize extractor with a PDF path or binary stream.

        Args:
            source: Path to a PDF file, or an open binary file object
        """
        self.source = source
        self.pages_text: List[Tuple[int, str]] = []
        self._load_pdf()

    def _load_pdf(self):
        """Load PDF and extract text page by page."""
        try:
            with pdfplumber.open(self.source) as pdf:
                for page_num, page in enumerate(pdf.pages, start=1):
                    text = page.extract_text(layout=True)
                    if text:
                        self.pages_text.append((page_num, text))
        except Exception as e:
            raise DocumentReadError(f"Could not read PDF: {e}") from e

        logger.debug("Read %d page(s) of text", len(self.pages_text))

    @property
    def text(self) -> str:
        return "\n".join(text for _, text in self.pages_text)


def extract_text(source: PathOrStream) -> str:
    """Return the plain text of a syllabus document.

    PDFs are read with pdfplumber; files with a text suffix are read as
    UTF-8 directly.

    Raises:
        DocumentReadError: If the document cannot be read
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise DocumentReadError(f"File not found: {path}")
        if path.suffix.lower() in TEXT_SUFFIXES:
            try:
                return path.read_text(encoding='utf-8')
            except (OSError, UnicodeDecodeError) as e:
                raise DocumentReadError(f"Could not read {path.name}: {e}") from e

    text = PDFTextExtractor(source).text
    if not text.strip():
        logger.warning("No text layer found; scanned PDFs are not supported")
    return text
