"""Matching-mode flag parsing."""

import re
from typing import Union

Flags = Union[str, int, None]

GLOBAL_LETTER = "g"

_FLAG_LETTERS: dict[str, re.RegexFlag] = {
    "a": re.ASCII,
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "u": re.UNICODE,
    "x": re.VERBOSE,
}

# re.DEBUG writes to stdout and re.LOCALE is bytes-only
_ALLOWED_MASK = 0
for _flag in _FLAG_LETTERS.values():
    _ALLOWED_MASK |= int(_flag)


def parse_flags(flags: Flags) -> tuple[int, bool]:
    """Convert caller flags into ``re`` flags and the global bit.

    Args:
        flags: Flag letters such as ``"gi"``, an ``re`` flag combination, or None.

    Returns:
        Tuple of (re flags, global search enabled).

    Raises:
        ValueError: If a letter is unknown or repeated, or an int has
            unsupported bits set.
    """
    if flags is None:
        return 0, False

    if isinstance(flags, int):
        if flags & ~_ALLOWED_MASK:
            raise ValueError(f"Unsupported regex flags: {flags!r}")
        return int(flags), False

    value = 0
    global_search = False
    seen: set[str] = set()
    for letter in flags:
        if letter in seen:
            raise ValueError(f"Duplicate flag '{letter}' in '{flags}'")
        seen.add(letter)

        if letter == GLOBAL_LETTER:
            global_search = True
        elif letter in _FLAG_LETTERS:
            value |= int(_FLAG_LETTERS[letter])
        else:
            raise ValueError(f"Invalid flag '{letter}' in '{flags}'")

    return value, global_search


def format_flags(value: int, global_search: bool = False) -> str:
    """Render ``re`` flags back into canonical sorted letters."""
    letters = [letter for letter, flag in _FLAG_LETTERS.items() if value & flag]
    if global_search:
        letters.append(GLOBAL_LETTER)
    return "".join(sorted(letters))
