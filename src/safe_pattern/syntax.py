"""Explicit syntax tree for patterns in the ``re`` dialect.

The standard library parser produces nested ``(opcode, argument)`` lists.
This module converts that output into small frozen node classes so the
risk analyzer can walk a typed tree in a single recursive pass.
"""

import re
import string
from dataclasses import dataclass
from typing import Any, Optional, Union

# sre_parse was deprecated in 3.11 in favor of re._parser
_sre: Any = getattr(re, "_parser", None)
if _sre is None:
    import sre_parse as _sre

_ASCII = frozenset(range(128))
_DIGITS = frozenset(ord(c) for c in string.digits)
_SPACES = frozenset(ord(c) for c in " \t\n\r\f\v")
_WORD = frozenset(ord(c) for c in string.ascii_letters + string.digits + "_")

_REPEAT_OPS = {_sre.MAX_REPEAT, _sre.MIN_REPEAT}
_POSSESSIVE_REPEAT = getattr(_sre, "POSSESSIVE_REPEAT", None)
_ATOMIC_GROUP = getattr(_sre, "ATOMIC_GROUP", None)
if _POSSESSIVE_REPEAT is not None:
    _REPEAT_OPS.add(_POSSESSIVE_REPEAT)


@dataclass(frozen=True)
class CharSet:
    """Approximate set of characters a single position can match.

    ``chars`` lists known code points. ``wide`` means the set may also
    contain non-ASCII characters that are not listed.
    """

    chars: frozenset[int] = frozenset()
    wide: bool = False

    @classmethod
    def universal(cls) -> "CharSet":
        return cls(_ASCII, True)

    @property
    def is_empty(self) -> bool:
        return not self.chars and not self.wide

    def union(self, other: "CharSet") -> "CharSet":
        return CharSet(self.chars | other.chars, self.wide or other.wide)

    def complement(self) -> "CharSet":
        return CharSet(_ASCII - self.chars, True)

    def overlaps(self, other: "CharSet") -> bool:
        """Check whether both sets may share a character."""
        if self.chars & other.chars:
            return True
        if self.wide and (other.wide or _has_non_ascii(other.chars)):
            return True
        return other.wide and _has_non_ascii(self.chars)


def _has_non_ascii(chars: frozenset[int]) -> bool:
    return any(c > 127 for c in chars)


@dataclass(frozen=True)
class Literal:
    """A single literal character."""

    chars: CharSet


@dataclass(frozen=True)
class CharClass:
    """A character class, ``.``, or a category escape such as ``\\d``."""

    chars: CharSet


@dataclass(frozen=True)
class Anchor:
    """A zero-width position assertion such as ``^``, ``$`` or ``\\b``."""

    kind: str


@dataclass(frozen=True)
class Group:
    body: "Node"
    index: Optional[int] = None
    atomic: bool = False


@dataclass(frozen=True)
class Lookaround:
    body: "Node"
    ahead: bool = True
    negative: bool = False


@dataclass(frozen=True)
class Quantified:
    """A repeated sub-expression; ``max`` is None when unbounded."""

    body: "Node"
    min: int
    max: Optional[int]
    lazy: bool = False
    possessive: bool = False


@dataclass(frozen=True)
class Alternation:
    branches: tuple["Node", ...]


@dataclass(frozen=True)
class Concatenation:
    items: tuple["Node", ...]


@dataclass(frozen=True)
class Backreference:
    group: int


@dataclass(frozen=True)
class Conditional:
    """``(?(group)yes|no)``; ``no`` is None when the branch is absent."""

    group: int
    yes: "Node"
    no: Optional["Node"] = None


Node = Union[
    Literal,
    CharClass,
    Anchor,
    Group,
    Lookaround,
    Quantified,
    Alternation,
    Concatenation,
    Backreference,
    Conditional,
]


def parse_pattern(pattern: str, flags: int = 0) -> Node:
    """Parse a pattern into an explicit syntax tree.

    Args:
        pattern: Pattern in the ``re`` dialect.
        flags: ``re`` flags; VERBOSE and IGNORECASE change the tree.

    Returns:
        Root node of the tree.

    Raises:
        re.error: If the pattern is syntactically invalid.
    """
    parsed = _sre.parse(pattern, flags)
    ignore_case = bool(parsed.state.flags & re.IGNORECASE)
    return _convert_sequence(parsed, ignore_case)


def _convert_sequence(items: Any, ignore_case: bool) -> Node:
    nodes = tuple(_convert(op, av, ignore_case) for op, av in items)
    if len(nodes) == 1:
        return nodes[0]
    return Concatenation(nodes)


def _convert(op: Any, av: Any, ignore_case: bool) -> Node:
    if op == _sre.LITERAL:
        return Literal(_fold(CharSet(frozenset([av])), ignore_case))

    if op == _sre.NOT_LITERAL:
        return CharClass(_fold(CharSet(frozenset([av])), ignore_case).complement())

    if op == _sre.ANY:
        return CharClass(CharSet.universal())

    if op == _sre.IN:
        return CharClass(_fold(_class_chars(av), ignore_case))

    if op == _sre.CATEGORY:
        return CharClass(_category_chars(av))

    if op == _sre.AT:
        return Anchor(str(av))

    if op == _sre.SUBPATTERN:
        group, add_flags, del_flags, body = av
        local_case = ignore_case
        if add_flags & re.IGNORECASE:
            local_case = True
        if del_flags & re.IGNORECASE:
            local_case = False
        return Group(_convert_sequence(body, local_case), index=group)

    if _ATOMIC_GROUP is not None and op == _ATOMIC_GROUP:
        return Group(_convert_sequence(av, ignore_case), atomic=True)

    if op in _REPEAT_OPS:
        low, high, body = av
        return Quantified(
            body=_convert_sequence(body, ignore_case),
            min=low,
            max=None if high == _sre.MAXREPEAT else high,
            lazy=op == _sre.MIN_REPEAT,
            possessive=op == _POSSESSIVE_REPEAT,
        )

    if op == _sre.BRANCH:
        _, branches = av
        return Alternation(tuple(_convert_sequence(b, ignore_case) for b in branches))

    if op in (_sre.ASSERT, _sre.ASSERT_NOT):
        direction, body = av
        return Lookaround(
            _convert_sequence(body, ignore_case),
            ahead=direction == 1,
            negative=op == _sre.ASSERT_NOT,
        )

    if op == _sre.GROUPREF:
        return Backreference(av)

    if op == _sre.GROUPREF_EXISTS:
        group, yes, no = av
        return Conditional(
            group=group,
            yes=_convert_sequence(yes, ignore_case),
            no=_convert_sequence(no, ignore_case) if no is not None else None,
        )

    # Anything unrecognised may match anything
    return CharClass(CharSet.universal())


def _class_chars(items: Any) -> CharSet:
    result = CharSet()
    negate = False
    for op, av in items:
        if op == _sre.NEGATE:
            negate = True
        elif op == _sre.LITERAL:
            result = result.union(CharSet(frozenset([av])))
        elif op == _sre.RANGE:
            low, high = av
            ascii_part = frozenset(range(low, min(high, 127) + 1))
            result = result.union(CharSet(ascii_part, high > 127))
        elif op == _sre.CATEGORY:
            result = result.union(_category_chars(av))
        else:
            result = result.union(CharSet.universal())
    return result.complement() if negate else result


def _category_chars(category: Any) -> CharSet:
    if category == _sre.CATEGORY_DIGIT:
        return CharSet(_DIGITS, True)
    if category == _sre.CATEGORY_NOT_DIGIT:
        return CharSet(_ASCII - _DIGITS, True)
    if category == _sre.CATEGORY_SPACE:
        return CharSet(_SPACES, True)
    if category == _sre.CATEGORY_NOT_SPACE:
        return CharSet(_ASCII - _SPACES, True)
    if category == _sre.CATEGORY_WORD:
        return CharSet(_WORD, True)
    if category == _sre.CATEGORY_NOT_WORD:
        return CharSet(_ASCII - _WORD, True)
    return CharSet.universal()


def _fold(chars: CharSet, ignore_case: bool) -> CharSet:
    if not ignore_case:
        return chars
    folded = set(chars.chars)
    for code in chars.chars:
        char = chr(code)
        for variant in (char.lower(), char.upper()):
            if len(variant) == 1:
                folded.add(ord(variant))
    return CharSet(frozenset(folded), chars.wide)
