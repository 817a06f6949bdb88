"""Unit tests for flag parsing."""

import re

import pytest

from safe_pattern.utils.flags import format_flags, parse_flags


def test_parse_flags_none() -> None:
    """Test that missing flags mean no flags."""
    assert parse_flags(None) == (0, False)


def test_parse_flags_letters() -> None:
    """Test parsing flag letters."""
    value, global_search = parse_flags("gi")
    assert value == re.IGNORECASE
    assert global_search is True


def test_parse_flags_multiple_letters() -> None:
    """Test combining several re flags."""
    value, global_search = parse_flags("ims")
    assert value == re.IGNORECASE | re.MULTILINE | re.DOTALL
    assert global_search is False


def test_parse_flags_int() -> None:
    """Test passing re flags directly."""
    assert parse_flags(re.IGNORECASE | re.VERBOSE) == (int(re.IGNORECASE | re.VERBOSE), False)


def test_parse_flags_unknown_letter() -> None:
    """Test rejecting unknown flag letters."""
    with pytest.raises(ValueError, match="Invalid flag"):
        parse_flags("iz")


def test_parse_flags_duplicate_letter() -> None:
    """Test rejecting repeated flag letters."""
    with pytest.raises(ValueError, match="Duplicate flag"):
        parse_flags("ii")


def test_parse_flags_rejects_debug() -> None:
    """Test that re.DEBUG is not accepted."""
    with pytest.raises(ValueError, match="Unsupported"):
        parse_flags(re.DEBUG)


def test_format_flags_round_trip() -> None:
    """Test canonical flag rendering."""
    value, global_search = parse_flags("ig")
    assert format_flags(value, global_search) == "gi"
    assert format_flags(0) == ""
