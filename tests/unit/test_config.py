"""Unit tests for configuration loading."""

import pytest
from pydantic import ValidationError

from safe_pattern.config import load_app_config
from safe_pattern.models import AnalyzerLimits


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Run without a stray .env file or inherited settings."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "LOG_FILE",
        "VERBOSE",
        "SAFE_PATTERN_MAX_LENGTH",
        "SAFE_PATTERN_REPETITION_LIMIT",
        "SAFE_PATTERN_BOUNDED_REPEAT_LIMIT",
        "SAFE_PATTERN_COMMAND_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    """Test default configuration values."""
    config = load_app_config()
    assert config.log_file is None
    assert config.verbose is False
    assert config.command_timeout == 5.0
    assert config.analyzer_limits() == AnalyzerLimits()


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test reading limits from the environment."""
    monkeypatch.setenv("SAFE_PATTERN_MAX_LENGTH", "200")
    monkeypatch.setenv("SAFE_PATTERN_REPETITION_LIMIT", "5")
    monkeypatch.setenv("SAFE_PATTERN_BOUNDED_REPEAT_LIMIT", "3")
    monkeypatch.setenv("VERBOSE", "true")

    config = load_app_config()
    assert config.verbose is True
    assert config.analyzer_limits() == AnalyzerLimits(
        max_pattern_length=200, repetition_limit=5, bounded_repeat_limit=3
    )


def test_dotenv_file(tmp_path) -> None:
    """Test reading settings from a .env file."""
    (tmp_path / ".env").write_text("SAFE_PATTERN_REPETITION_LIMIT=7\n", encoding="utf-8")
    assert load_app_config().repetition_limit == 7


def test_invalid_value(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that invalid limits are rejected."""
    monkeypatch.setenv("SAFE_PATTERN_MAX_LENGTH", "0")
    with pytest.raises(ValidationError):
        load_app_config()
