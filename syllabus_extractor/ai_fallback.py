"""
Fuzzy/AI extraction fallback.

When no table qualifies, the date-bearing lines of the syllabus are sent to
a generative-text service (any OpenAI-compatible chat-completions endpoint,
OpenRouter by default) with a strict JSON contract. The reply is treated as
untrusted: it is unwrapped from optional Markdown fencing, decoded, and
validated field by field.

Nothing raised inside this module escapes extract(). Service failures,
timeouts and malformed replies all come back as an empty list.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, List, Optional

import dateparser
import openai

from .config import AIConfig
from .date_normalizer import normalize_date
from .models import Assignment, CandidateLine
from .table_parser import infer_category

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You extract assignments from course syllabus lines.

Return ONLY valid JSON in this format, with no prose before or after it:
{
  "assignments": [
    {"title": "exact assignment title", "dueDate": "YYYY-MM-DD", "category": "Assignment"}
  ]
}

Rules:
- Only extract assignments that clearly appear in the lines
- Do not invent assignments or dates
- Convert every date to YYYY-MM-DD
- category is one of: Discussion, Quiz, Exam, Project, Lab, Assignment
- If an item has no due date, use null"""

CODE_FENCE_PATTERN = re.compile(r'```(?:json)?\s*([\s\S]*?)\s*```', re.IGNORECASE)


@dataclass
class AIResponse:
    """Validated reply from the service: ok=False means nothing usable came back."""
    ok: bool
    assignments: List[Assignment] = field(default_factory=list)


def strip_code_fence(text: str) -> str:
    """Return the body of a ``` / ```json fenced block, or the text unchanged."""
    match = CODE_FENCE_PATTERN.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def coerce_due_date(value: Any) -> Optional[date]:
    """Turn an untrusted dueDate value into a date, or None."""
    if not isinstance(value, str) or not value.strip():
        return None
    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass

    parsed = normalize_date(value)
    if parsed is not None:
        return parsed

    fuzzy = dateparser.parse(value, settings={'STRICT_PARSING': True})
    return fuzzy.date() if fuzzy else None


def coerce_assignment(item: Any, source: str = "ai") -> Optional[Assignment]:
    """Validate one untrusted {title, dueDate, category} object.

    Returns None for anything that is not an object with a non-empty
    string title.
    """
    if not isinstance(item, dict):
        return None

    title = item.get("title")
    if not isinstance(title, str) or not title.strip():
        return None
    title = " ".join(title.split())

    category = item.get("category")
    if not isinstance(category, str) or not category.strip():
        category = infer_category(title)

    return Assignment(
        title=title,
        due_date=coerce_due_date(item.get("dueDate")),
        category=category.strip(),
        source=source,
    )


def parse_ai_response(text: Optional[str]) -> AIResponse:
    """Parse and validate the raw text the service returned."""
    if not text or not text.strip():
        return AIResponse(ok=False)

    try:
        data = json.loads(strip_code_fence(text))
    except json.JSONDecodeError as e:
        logger.warning("AI response is not valid JSON: %s", e)
        return AIResponse(ok=False)

    if not isinstance(data, dict) or not isinstance(data.get("assignments"), list):
        logger.warning("AI response is missing the assignments list")
        return AIResponse(ok=False)

    assignments = []
    for item in data["assignments"]:
        assignment = coerce_assignment(item)
        if assignment is None:
            logger.debug("Dropping malformed AI item: %r", item)
            continue
        assignments.append(assignment)

    return AIResponse(ok=True, assignments=assignments)


def candidate_lines(lines: List[CandidateLine], limit: int) -> List[str]:
    """The first `limit` date-bearing lines, as plain text."""
    return [line.text for line in lines if line.has_date][:limit]


class AIAssignmentExtractor:
    """Extracts assignments through an OpenAI-compatible chat-completions API.

    Args:
        config: AIConfig with the key, model, endpoint and timeout to use.
        client: Optional pre-built client (anything exposing
            chat.completions.create). Built lazily from config when omitted.
    """

    def __init__(self, config: AIConfig, client=None):
        self.config = config
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = openai.OpenAI(
                api_key=self.config.api_key,
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                max_retries=0,
            )
        return self._client

    def extract(self, lines: List[CandidateLine]) -> List[Assignment]:
        """Send the dated lines to the service; [] on any failure."""
        candidates = candidate_lines(lines, self.config.max_candidate_lines)
        if not candidates:
            logger.info("No dated lines to send to the AI fallback")
            return []

        if self._client is None and not self.config.enabled:
            logger.warning("AI fallback skipped: no API key configured")
            return []

        try:
            content = self._request(candidates)
        except openai.OpenAIError as e:
            logger.warning("AI fallback request failed: %s", e)
            return []
        except Exception as e:
            logger.warning("AI fallback request failed unexpectedly: %s", e, exc_info=True)
            return []

        response = parse_ai_response(content)
        if not response.ok:
            return []

        logger.info("AI fallback returned %d assignment(s)", len(response.assignments))
        return response.assignments

    def _request(self, candidates: List[str]) -> Optional[str]:
        logger.info("Calling %s with %d candidate lines", self.config.model, len(candidates))
        response = self.client.chat.completions.create(
            model=self.config.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": "Syllabus lines:\n" + "\n".join(candidates)},
            ],
            temperature=self.config.temperature,
            max_tokens=self.config.max_tokens,
            response_format={"type": "json_object"},
            timeout=self.config.timeout,
        )
        if not response.choices:
            return None
        return response.choices[0].message.content
