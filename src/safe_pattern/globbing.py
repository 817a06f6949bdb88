"""Glob to safe regex translation."""

import re
from typing import Optional

from safe_pattern.compiler import CompileResult, compile_safe
from safe_pattern.models import AnalyzerLimits, GlobToken, GlobTokenKind, Rejected, RejectionReason
from safe_pattern.utils.escape import escape
from safe_pattern.utils.flags import Flags, parse_flags

_WILDCARD_REGEX = {
    GlobTokenKind.RECURSIVE_WILDCARD: ".*",
    GlobTokenKind.MULTI_WILDCARD: "[^/]*",
    GlobTokenKind.SINGLE_WILDCARD: ".",
}


def tokenize_glob(glob: str) -> list[GlobToken]:
    """Split a glob into literal runs and wildcards, left to right.

    Two or more consecutive ``*`` form one recursive wildcard, a lone ``*``
    is a multi-character wildcard and ``?`` a single-character wildcard.
    """
    tokens: list[GlobToken] = []
    literal: list[str] = []
    index = 0

    while index < len(glob):
        char = glob[index]

        if char not in "*?":
            literal.append(char)
            index += 1
            continue

        if literal:
            tokens.append(GlobToken(GlobTokenKind.LITERAL, "".join(literal)))
            literal = []

        if char == "?":
            tokens.append(GlobToken(GlobTokenKind.SINGLE_WILDCARD, char))
            index += 1
            continue

        end = index
        while end < len(glob) and glob[end] == "*":
            end += 1
        run = glob[index:end]
        kind = GlobTokenKind.RECURSIVE_WILDCARD if len(run) > 1 else GlobTokenKind.MULTI_WILDCARD
        tokens.append(GlobToken(kind, run))
        index = end

    if literal:
        tokens.append(GlobToken(GlobTokenKind.LITERAL, "".join(literal)))

    return tokens


def glob_to_regex(glob: str) -> str:
    """Translate a glob into an anchored regex pattern string.

    Args:
        glob: Glob expression using ``*``, ``**`` and ``?``.

    Returns:
        Regex matching whole candidate strings only.
    """
    parts = [
        escape(token.text) if token.kind is GlobTokenKind.LITERAL else _WILDCARD_REGEX[token.kind]
        for token in tokenize_glob(glob)
    ]
    return r"\A" + "".join(parts) + r"\Z"


def translate_glob(
    glob: str, flags: Flags = None, limits: Optional[AnalyzerLimits] = None
) -> CompileResult:
    """Translate a glob and compile it through the safe compiler.

    Args:
        glob: Glob expression.
        flags: Optional flag letters or ``re`` flags.
        limits: Analyzer tunables.

    Returns:
        CompiledMatcher, or Rejected if the compiler refuses the translation.
        The verbose flag is always rejected as INVALID_SYNTAX.
    """
    regex = glob_to_regex(glob)
    try:
        re_flags, _ = parse_flags(flags)
    except ValueError as e:
        return Rejected(regex, RejectionReason.INVALID_SYNTAX, str(e))

    if re_flags & re.VERBOSE:
        return Rejected(
            regex,
            RejectionReason.INVALID_SYNTAX,
            f"Verbose flag is not supported for glob '{glob}'",
        )

    return compile_safe(regex, flags, limits)
