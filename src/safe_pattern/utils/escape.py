"""Literal escaping of regex metacharacters."""

_SPECIAL_CHARS = frozenset(".*+?^${}()|[]\\")


def escape(text: str) -> str:
    """Escape regex metacharacters so text is matched literally.

    Args:
        text: Arbitrary string, possibly empty.

    Returns:
        Regex fragment matching exactly ``text``.
    """
    return "".join("\\" + char if char in _SPECIAL_CHARS else char for char in text)
