"""
Configuration for the syllabus extractor.

Core components receive these objects at construction time. The process
environment is only consulted by load_config(), which the CLI and the web
app call at start-up.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

# Extraction modes: what to do when no table qualifies
MODE_DETERMINISTIC = "deterministic"  # line patterns only
MODE_AI = "ai"                        # straight to the AI fallback
MODE_HYBRID = "hybrid"                # line patterns, then AI if they found nothing
EXTRACTION_MODES = (MODE_HYBRID, MODE_DETERMINISTIC, MODE_AI)

# AI service defaults (OpenRouter speaks the OpenAI chat-completions API)
DEFAULT_AI_MODEL = "mistralai/mistral-small-3.1-24b-instruct:free"
DEFAULT_AI_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_AI_TIMEOUT = 30.0


@dataclass
class AIConfig:
    """Settings for the generative-text fallback."""
    api_key: Optional[str] = None
    model: str = DEFAULT_AI_MODEL
    base_url: str = DEFAULT_AI_BASE_URL
    timeout: float = DEFAULT_AI_TIMEOUT     # seconds, per request
    max_candidate_lines: int = 50           # payload cap on dated lines sent
    temperature: float = 0.0
    max_tokens: int = 2000

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)


@dataclass
class ExtractorConfig:
    """Settings for one extraction pipeline."""
    mode: str = MODE_HYBRID
    min_table_score: int = 2      # header keyword hits a table needs to be used
    window_days: int = 30         # course-start floor window
    keep_undated: bool = False    # keep titled records that have no due date
    ai: AIConfig = field(default_factory=AIConfig)

    def __post_init__(self):
        if self.mode not in EXTRACTION_MODES:
            raise ValueError(
                f"Unknown extraction mode {self.mode!r}; expected one of {', '.join(EXTRACTION_MODES)}"
            )


def _env_bool(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


def load_config(env: Optional[Mapping[str, str]] = None) -> ExtractorConfig:
    """Build an ExtractorConfig from environment variables.

    Args:
        env: Mapping to read from. Defaults to os.environ.

    Returns:
        ExtractorConfig with an embedded AIConfig
    """
    if env is None:
        env = os.environ

    ai = AIConfig(
        api_key=env.get("OPENROUTER_API_KEY") or None,
        model=env.get("SYLLABUS_AI_MODEL", DEFAULT_AI_MODEL),
        base_url=env.get("SYLLABUS_AI_BASE_URL", DEFAULT_AI_BASE_URL),
        timeout=float(env.get("SYLLABUS_AI_TIMEOUT", DEFAULT_AI_TIMEOUT)),
        max_candidate_lines=int(env.get("SYLLABUS_AI_MAX_LINES", 50)),
    )

    return ExtractorConfig(
        mode=env.get("SYLLABUS_EXTRACTION_MODE", MODE_HYBRID),
        min_table_score=int(env.get("SYLLABUS_MIN_TABLE_SCORE", 2)),
        window_days=int(env.get("SYLLABUS_WINDOW_DAYS", 30)),
        keep_undated=_env_bool(env.get("SYLLABUS_KEEP_UNDATED")),
        ai=ai,
    )
