"""Regex compilation gated by the risk analyzer."""

import re
from typing import Iterable, Optional, Union

from safe_pattern.analyzer import analyze
from safe_pattern.models import AnalyzerLimits, CompiledMatcher, Rejected, RejectionReason
from safe_pattern.utils.flags import Flags, format_flags, parse_flags

CompileResult = Union[CompiledMatcher, Rejected]


def compile_safe(
    pattern: str, flags: Flags = None, limits: Optional[AnalyzerLimits] = None
) -> CompileResult:
    """Compile a regex pattern only if it cannot backtrack catastrophically.

    Args:
        pattern: Regex pattern string.
        flags: Optional flag letters (e.g. ``"gi"``) or ``re`` flags.
        limits: Analyzer tunables.

    Returns:
        CompiledMatcher if the pattern is valid and safe, otherwise Rejected
        with reason INVALID_SYNTAX or UNSAFE_PATTERN.
    """
    try:
        re_flags, global_search = parse_flags(flags)
    except ValueError as e:
        return Rejected(pattern, RejectionReason.INVALID_SYNTAX, str(e))

    try:
        regex = re.compile(pattern, re_flags)
    except (re.error, OverflowError, ValueError, RecursionError) as e:
        return Rejected(
            pattern,
            RejectionReason.INVALID_SYNTAX,
            f"Invalid regex pattern '{pattern}': {str(e)}",
        )

    report = analyze(pattern, re_flags, limits)
    if not report.is_safe:
        return Rejected(pattern, RejectionReason.UNSAFE_PATTERN, report.describe())

    return CompiledMatcher(
        pattern=pattern,
        regex=regex,
        flags=format_flags(re_flags, global_search),
        global_search=global_search,
    )


def compile_many(
    patterns: Iterable[str], flags: Flags = None, limits: Optional[AnalyzerLimits] = None
) -> list[CompileResult]:
    """Compile a batch of patterns, keeping input order."""
    return [compile_safe(pattern, flags, limits) for pattern in patterns]


def compile_or_raise(
    pattern: str, flags: Flags = None, limits: Optional[AnalyzerLimits] = None
) -> CompiledMatcher:
    """Compile a pattern, raising instead of returning a rejection.

    Raises:
        InvalidPatternError: If the pattern or flags cannot be parsed.
        UnsafePatternError: If the pattern admits catastrophic backtracking.
    """
    result = compile_safe(pattern, flags, limits)
    if isinstance(result, Rejected):
        raise result.to_exception()
    return result
