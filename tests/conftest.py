"""Pytest configuration and fixtures."""

from typing import Iterator

import pytest
import structlog

from safe_pattern.models import AnalyzerLimits
from safe_pattern.utils.logging import close_log_files


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Drop logging configuration made by CLI invocations."""
    yield
    structlog.reset_defaults()
    close_log_files()


@pytest.fixture
def default_limits() -> AnalyzerLimits:
    """Create default analyzer limits."""
    return AnalyzerLimits()


@pytest.fixture
def unsafe_patterns() -> list[str]:
    """Patterns with classic catastrophic-backtracking shapes."""
    return [
        r"(a+)+b",
        r"([a-zA-Z]+)*",
        r"^(a+)+$",
        r"([a-z]+)+$",
        r"(a|aa)+",
        r"(a*)*",
        r"(\d+\.?)+x",
        r"((ab)*c)*d",
    ]


@pytest.fixture
def safe_patterns() -> list[str]:
    """Patterns without nested or ambiguous repetition."""
    return [
        r"^test$",
        r"[a-z]+",
        r"\d{3}-\d{4}",
        r"\bfoo\b",
        r"^[a-zA-Z0-9_]+$",
        r"^(cat|dog)$",
        r"^(cat|dog)+$",
        r"^a+$",
        r"(\d{1,3}\.){3}\d{1,3}",
    ]
