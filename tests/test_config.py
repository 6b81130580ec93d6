"""Unit tests for configuration loading."""

import pytest
from syllabus_extractor.config import (
    AIConfig, ExtractorConfig, load_config,
    DEFAULT_AI_BASE_URL, DEFAULT_AI_MODEL, MODE_HYBRID,
)


def test_defaults():
    """Defaults match the documented constants."""
    config = ExtractorConfig()
    assert config.mode == MODE_HYBRID
    assert config.min_table_score == 2
    assert config.window_days == 30
    assert config.keep_undated is False
    assert config.ai.max_candidate_lines == 50
    assert config.ai.base_url == DEFAULT_AI_BASE_URL
    assert not config.ai.enabled


def test_unknown_mode_rejected():
    """Mode must be one of the known strategies."""
    with pytest.raises(ValueError):
        ExtractorConfig(mode="magic")


def test_load_config_from_mapping():
    """load_config reads only the mapping it is given."""
    config = load_config({
        "OPENROUTER_API_KEY": "sk-test",
        "SYLLABUS_AI_MODEL": "some/model",
        "SYLLABUS_AI_TIMEOUT": "12.5",
        "SYLLABUS_AI_MAX_LINES": "20",
        "SYLLABUS_EXTRACTION_MODE": "deterministic",
        "SYLLABUS_MIN_TABLE_SCORE": "3",
        "SYLLABUS_WINDOW_DAYS": "45",
        "SYLLABUS_KEEP_UNDATED": "yes",
    })
    assert config.mode == "deterministic"
    assert config.min_table_score == 3
    assert config.window_days == 45
    assert config.keep_undated is True
    assert config.ai == AIConfig(
        api_key="sk-test", model="some/model", timeout=12.5, max_candidate_lines=20,
    )
    assert config.ai.enabled


def test_load_config_empty_mapping():
    """An empty environment gives the defaults."""
    config = load_config({})
    assert config == ExtractorConfig()
    assert config.ai.model == DEFAULT_AI_MODEL


def test_load_config_reads_environment(monkeypatch):
    """Without a mapping the process environment is used."""
    monkeypatch.setenv("SYLLABUS_EXTRACTION_MODE", "ai")
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    config = load_config()
    assert config.mode == "ai"
    assert config.ai.api_key is None
