"""Exceptions for callers that prefer raising over rejection values."""


class PatternError(ValueError):
    """Base exception for rejected patterns."""

    def __init__(self, pattern: str, detail: str = "") -> None:
        self.pattern = pattern
        self.detail = detail
        message = f"Pattern '{pattern}' rejected"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class InvalidPatternError(PatternError):
    """Pattern cannot be parsed."""

    pass


class UnsafePatternError(PatternError):
    """Pattern admits catastrophic backtracking."""

    pass
