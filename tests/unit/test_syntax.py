"""Unit tests for the syntax tree conversion."""

import re

import pytest

from safe_pattern.syntax import (
    Alternation,
    Anchor,
    Backreference,
    CharClass,
    CharSet,
    Concatenation,
    Conditional,
    Group,
    Literal,
    Lookaround,
    Quantified,
    parse_pattern,
)


def test_parse_single_literal() -> None:
    """Test that a single character becomes a Literal node."""
    node = parse_pattern("a")
    assert node == Literal(CharSet(frozenset([ord("a")])))


def test_parse_concatenation_with_anchors() -> None:
    """Test anchors and literals in sequence."""
    node = parse_pattern("^ab$")
    assert isinstance(node, Concatenation)
    assert isinstance(node.items[0], Anchor)
    assert isinstance(node.items[1], Literal)
    assert isinstance(node.items[-1], Anchor)


def test_parse_quantifiers() -> None:
    """Test quantifier bounds."""
    plus = parse_pattern("a+")
    assert isinstance(plus, Quantified)
    assert (plus.min, plus.max) == (1, None)

    bounded = parse_pattern("a{2,5}?")
    assert isinstance(bounded, Quantified)
    assert (bounded.min, bounded.max) == (2, 5)
    assert bounded.lazy is True


def test_parse_nested_group() -> None:
    """Test a quantified group containing a quantifier."""
    node = parse_pattern("(a+)+")
    assert isinstance(node, Quantified)
    assert isinstance(node.body, Group)
    assert node.body.index == 1
    assert isinstance(node.body.body, Quantified)


def test_parse_alternation() -> None:
    """Test alternation branches."""
    node = parse_pattern("cat|dog")
    assert isinstance(node, Alternation)
    assert len(node.branches) == 2


def test_parse_character_class() -> None:
    """Test that classes expand to their characters."""
    node = parse_pattern("[a-c]")
    assert isinstance(node, CharClass)
    assert node.chars.chars == frozenset(map(ord, "abc"))
    assert node.chars.wide is False


def test_parse_negated_class_is_wide() -> None:
    """Test that negated classes may match non-ASCII characters."""
    node = parse_pattern("[^/]")
    assert isinstance(node, CharClass)
    assert ord("/") not in node.chars.chars
    assert node.chars.wide is True


def test_parse_ignore_case_folds_literals() -> None:
    """Test IGNORECASE folding of literals."""
    node = parse_pattern("a", re.IGNORECASE)
    assert isinstance(node, Literal)
    assert node.chars.chars == frozenset(map(ord, "aA"))


def test_parse_inline_ignore_case() -> None:
    """Test that inline (?i) flags are honoured."""
    node = parse_pattern("(?i)a")
    assert isinstance(node, Literal)
    assert ord("A") in node.chars.chars


def test_parse_lookaround_and_backreference() -> None:
    """Test lookarounds and backreferences."""
    node = parse_pattern(r"(?=x)(a)\1")
    assert isinstance(node, Concatenation)
    assert isinstance(node.items[0], Lookaround)
    assert node.items[0].ahead is True
    assert isinstance(node.items[-1], Backreference)
    assert node.items[-1].group == 1


def test_parse_conditional() -> None:
    """Test conditional groups."""
    node = parse_pattern(r"(a)?(?(1)b|c)")
    assert isinstance(node, Concatenation)
    assert isinstance(node.items[-1], Conditional)
    assert node.items[-1].no is not None


def test_parse_invalid_pattern() -> None:
    """Test that invalid syntax raises re.error."""
    with pytest.raises(re.error):
        parse_pattern("[")


def test_charset_overlaps() -> None:
    """Test first-character overlap rules."""
    letters = CharSet(frozenset(map(ord, "ab")))
    digits = CharSet(frozenset(map(ord, "01")))
    assert letters.overlaps(CharSet(frozenset([ord("a")])))
    assert not letters.overlaps(digits)
    assert CharSet.universal().overlaps(digits)
    assert CharSet(frozenset(), True).overlaps(CharSet(frozenset([ord("é")])))
    assert not CharSet(frozenset(), True).overlaps(letters)
