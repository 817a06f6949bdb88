"""Immutable data models for safe pattern compilation."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from safe_pattern.errors import InvalidPatternError, PatternError, UnsafePatternError


class RiskVerdict(str, Enum):
    """Outcome of a static backtracking-risk assessment."""

    SAFE = "safe"
    UNSAFE = "unsafe"


class FindingKind(str, Enum):
    """Construct that made the analyzer reject a pattern."""

    INVALID_SYNTAX = "invalid_syntax"
    PATTERN_TOO_LONG = "pattern_too_long"
    NESTING_TOO_DEEP = "nesting_too_deep"
    NESTED_QUANTIFIER = "nested_quantifier"
    AMBIGUOUS_ALTERNATION = "ambiguous_alternation"
    EMPTY_REPETITION = "empty_repetition"
    BACKREFERENCE_REPETITION = "backreference_repetition"
    REPETITION_LIMIT = "repetition_limit"


class RejectionReason(str, Enum):
    """Why the compiler refused to produce a matcher."""

    INVALID_SYNTAX = "invalid_syntax"
    UNSAFE_PATTERN = "unsafe_pattern"


class GlobTokenKind(str, Enum):
    """Kinds of tokens produced by the glob tokenizer."""

    LITERAL = "literal"
    SINGLE_WILDCARD = "single_wildcard"
    MULTI_WILDCARD = "multi_wildcard"
    RECURSIVE_WILDCARD = "recursive_wildcard"


@dataclass(frozen=True)
class AnalyzerLimits:
    """Tunables for the risk analyzer."""

    max_pattern_length: int = 10_000
    repetition_limit: int = 25
    bounded_repeat_limit: int = 10


@dataclass(frozen=True)
class RiskFinding:
    """A single reason for an unsafe verdict."""

    kind: FindingKind
    detail: str


@dataclass(frozen=True)
class RiskReport:
    """Full result of analyzing one pattern."""

    pattern: str
    findings: tuple[RiskFinding, ...] = ()

    @property
    def verdict(self) -> RiskVerdict:
        return RiskVerdict.UNSAFE if self.findings else RiskVerdict.SAFE

    @property
    def is_safe(self) -> bool:
        return not self.findings

    def describe(self) -> str:
        """Join finding details into a single human-readable message."""
        return "; ".join(finding.detail for finding in self.findings)


@dataclass(frozen=True)
class Rejected:
    """A pattern the compiler refused, with the reason."""

    pattern: str
    reason: RejectionReason
    detail: str = ""

    def to_exception(self) -> PatternError:
        """Convert the rejection into the matching exception type."""
        if self.reason is RejectionReason.INVALID_SYNTAX:
            return InvalidPatternError(self.pattern, self.detail)
        return UnsafePatternError(self.pattern, self.detail)


@dataclass(frozen=True)
class CompiledMatcher:
    """A compiled pattern that cleared the risk analyzer.

    Matching is a pure read of the wrapped ``re.Pattern``, so one matcher
    can be shared freely between threads.
    """

    pattern: str
    regex: re.Pattern[str] = field(repr=False, compare=False)
    flags: str = ""
    global_search: bool = False

    def test(self, text: str) -> bool:
        """Check if the pattern occurs anywhere in text."""
        return self.regex.search(text) is not None

    def search(self, text: str) -> Optional[re.Match[str]]:
        return self.regex.search(text)

    def match(self, text: str) -> Optional[re.Match[str]]:
        return self.regex.match(text)

    def fullmatch(self, text: str) -> Optional[re.Match[str]]:
        return self.regex.fullmatch(text)

    def finditer(self, text: str) -> Iterator[re.Match[str]]:
        return self.regex.finditer(text)

    def findall(self, text: str) -> list[str]:
        """Return matched substrings.

        Without the global flag only the first match is returned.
        """
        matches = [m.group(0) for m in self.regex.finditer(text)]
        return matches if self.global_search else matches[:1]

    def sub(self, replacement: str, text: str) -> str:
        """Replace matches; only the first one unless the global flag is set."""
        return self.regex.sub(replacement, text, count=0 if self.global_search else 1)


@dataclass(frozen=True)
class GlobToken:
    """One token of a tokenized glob expression."""

    kind: GlobTokenKind
    text: str = ""
