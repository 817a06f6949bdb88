"""Static backtracking-risk analysis of regex patterns.

The analyzer never runs the pattern. It parses it into a syntax tree and
makes one post-order pass that summarises every node:

- whether it can match the empty string,
- which characters it can start with,
- whether it contains a variable-count quantifier,
- whether it contains an alternation whose branches share a first character,
- whether it contains a backreference or conditional,
- the product of the upper bounds of its nested variable-count quantifiers.

An unbounded quantifier whose body carries any of these properties is the
shape behind catastrophic backtracking (``(a+)+``, ``(a|aa)*``), so the
pattern is reported unsafe. Small bounded quantifiers are exempt only while
the product of nested bounds stays within ``bounded_repeat_limit``; an
unbounded quantifier inside any repetition above one breaks that. Anything
the pass cannot prove harmless is also reported unsafe.
"""

import re
from dataclasses import dataclass
from typing import Optional

from safe_pattern.models import (
    AnalyzerLimits,
    FindingKind,
    RiskFinding,
    RiskReport,
    RiskVerdict,
)
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
    Node,
    Quantified,
    parse_pattern,
)
from safe_pattern.utils.flags import Flags, parse_flags

DEFAULT_LIMITS = AnalyzerLimits()


@dataclass(frozen=True)
class _Summary:
    nullable: bool
    first: CharSet
    variable_repeat: bool = False
    ambiguous: bool = False
    backreference: bool = False
    # Product of the upper bounds along the deepest chain of nested
    # variable-count quantifiers; 1 when there are none.
    weight: int = 1


_EMPTY = _Summary(nullable=True, first=CharSet())


class _Walker:
    """Single-use tree walker collecting findings."""

    def __init__(self, limits: AnalyzerLimits) -> None:
        self.limits = limits
        self.findings: list[RiskFinding] = []
        self.repetitions = 0

    def report(self, kind: FindingKind, detail: str) -> None:
        finding = RiskFinding(kind, detail)
        if finding not in self.findings:
            self.findings.append(finding)

    def visit(self, node: Node) -> _Summary:
        if isinstance(node, (Literal, CharClass)):
            return _Summary(nullable=False, first=node.chars)

        if isinstance(node, Anchor):
            return _EMPTY

        if isinstance(node, Group):
            return self.visit(node.body)

        if isinstance(node, Lookaround):
            inner = self.visit(node.body)
            return _Summary(
                nullable=True,
                first=CharSet(),
                variable_repeat=inner.variable_repeat,
                ambiguous=inner.ambiguous,
                backreference=inner.backreference,
                weight=inner.weight,
            )

        if isinstance(node, Concatenation):
            return self._visit_concatenation(node)

        if isinstance(node, Alternation):
            return self._visit_alternation(list(node.branches))

        if isinstance(node, Quantified):
            return self._visit_quantified(node)

        if isinstance(node, Backreference):
            return _Summary(nullable=True, first=CharSet.universal(), backreference=True)

        if isinstance(node, Conditional):
            branches = [node.yes, node.no if node.no is not None else Concatenation(())]
            summary = self._visit_alternation(branches)
            return _Summary(
                nullable=summary.nullable,
                first=summary.first,
                variable_repeat=summary.variable_repeat,
                ambiguous=summary.ambiguous,
                backreference=True,
                weight=summary.weight,
            )

        raise TypeError(f"Unknown syntax node: {node!r}")

    def _visit_concatenation(self, node: Concatenation) -> _Summary:
        nullable = True
        first = CharSet()
        variable_repeat = ambiguous = backreference = False
        weight = 1

        for item in node.items:
            summary = self.visit(item)
            if nullable:
                first = first.union(summary.first)
            nullable = nullable and summary.nullable
            variable_repeat = variable_repeat or summary.variable_repeat
            ambiguous = ambiguous or summary.ambiguous
            backreference = backreference or summary.backreference
            weight = max(weight, summary.weight)

        return _Summary(nullable, first, variable_repeat, ambiguous, backreference, weight)

    def _visit_alternation(self, branches: list[Node]) -> _Summary:
        seen = CharSet()
        nullable = False
        variable_repeat = backreference = False
        ambiguous = False
        weight = 1

        for branch in branches:
            summary = self.visit(branch)
            # An empty branch competes with every other branch
            if summary.first.overlaps(seen) or (summary.nullable and len(branches) > 1):
                ambiguous = True
            seen = seen.union(summary.first)
            nullable = nullable or summary.nullable
            variable_repeat = variable_repeat or summary.variable_repeat
            ambiguous = ambiguous or summary.ambiguous
            backreference = backreference or summary.backreference
            weight = max(weight, summary.weight)

        return _Summary(nullable, seen, variable_repeat, ambiguous, backreference, weight)

    def _visit_quantified(self, node: Quantified) -> _Summary:
        self.repetitions += 1
        body = self.visit(node.body)
        limit = self.limits.bounded_repeat_limit
        # Unbounded and large bounds all weigh one more than the limit
        upper = limit + 1 if node.max is None or node.max > limit else node.max
        weight = max(upper, 1) * body.weight

        # Small bounds still multiply: (a+){2} or ((a{1,10}){1,10}){1,10}
        bounded = node.max is not None and 1 < node.max <= limit
        if bounded and body.weight > 1 and weight > limit:
            self.report(
                FindingKind.NESTED_QUANTIFIER,
                f"repetition bounded at {node.max} multiplies a nested variable-length "
                f"repetition beyond {limit}",
            )

        if node.max is None or node.max > limit:
            bound = "unbounded" if node.max is None else f"large ({node.max})"
            if body.variable_repeat:
                self.report(
                    FindingKind.NESTED_QUANTIFIER,
                    f"{bound} repetition contains a nested variable-length repetition",
                )
            if body.ambiguous:
                self.report(
                    FindingKind.AMBIGUOUS_ALTERNATION,
                    f"{bound} repetition contains alternatives that can match the same prefix",
                )
            if body.nullable:
                self.report(
                    FindingKind.EMPTY_REPETITION,
                    f"{bound} repetition of a sub-expression that can match the empty string",
                )
            if body.backreference:
                self.report(
                    FindingKind.BACKREFERENCE_REPETITION,
                    f"{bound} repetition contains a backreference or conditional group",
                )

        return _Summary(
            nullable=node.min == 0 or body.nullable,
            first=body.first,
            variable_repeat=body.variable_repeat or node.min != node.max,
            ambiguous=body.ambiguous,
            backreference=body.backreference,
            weight=min(weight, limit + 1) if body.weight > 1 or node.min != node.max else 1,
        )


def analyze(
    pattern: str, flags: Flags = None, limits: Optional[AnalyzerLimits] = None
) -> RiskReport:
    """Analyze a pattern for catastrophic backtracking.

    Args:
        pattern: Regex pattern string in the ``re`` dialect.
        flags: Optional flag letters or ``re`` flags used while parsing.
        limits: Analyzer tunables. Defaults to ``AnalyzerLimits()``.

    Returns:
        RiskReport listing every finding; no findings means safe.
    """
    limits = limits or DEFAULT_LIMITS

    if len(pattern) > limits.max_pattern_length:
        return RiskReport(
            pattern,
            (
                RiskFinding(
                    FindingKind.PATTERN_TOO_LONG,
                    f"pattern length {len(pattern)} exceeds {limits.max_pattern_length}",
                ),
            ),
        )

    try:
        re_flags, _ = parse_flags(flags)
        tree = parse_pattern(pattern, re_flags)
    except (re.error, OverflowError, ValueError) as e:
        return RiskReport(
            pattern, (RiskFinding(FindingKind.INVALID_SYNTAX, f"invalid syntax: {e}"),)
        )
    except RecursionError:
        return RiskReport(
            pattern, (RiskFinding(FindingKind.NESTING_TOO_DEEP, "pattern is nested too deeply"),)
        )

    walker = _Walker(limits)
    try:
        walker.visit(tree)
    except RecursionError:
        walker.report(FindingKind.NESTING_TOO_DEEP, "pattern is nested too deeply")

    if walker.repetitions > limits.repetition_limit:
        walker.report(
            FindingKind.REPETITION_LIMIT,
            f"{walker.repetitions} repetitions exceed the limit of {limits.repetition_limit}",
        )

    return RiskReport(pattern, tuple(walker.findings))


def assess(
    pattern: str, flags: Flags = None, limits: Optional[AnalyzerLimits] = None
) -> RiskVerdict:
    """Return the safe/unsafe verdict for a pattern.

    The verdict depends only on the pattern, flags and limits, never on
    any input the pattern would later be matched against.
    """
    return analyze(pattern, flags, limits).verdict
