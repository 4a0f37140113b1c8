"""ANSI text utilities - measuring and slicing strings with escape codes."""

from __future__ import annotations

import re
from typing import Iterator

from aahook.core.constants import CSI, RESET

# Pattern to match ANSI escape sequences (including ~ terminator for F-keys, etc.)
_ANSI_ESCAPE = re.compile(r'\x1b\[[0-9;?]*[A-Za-z~]')

# One escape sequence or one character
_UNIT = re.compile(r'\x1b\[[0-9;?]*[A-Za-z~]|.', re.DOTALL)


def strip_ansi(s: str) -> str:
    """Remove every CSI escape sequence from a string."""
    return _ANSI_ESCAPE.sub('', s)


def visible_len(s: str) -> int:
    """Get visible length of string (excluding ANSI escape codes)."""
    return len(strip_ansi(s))


def pad_to_width(s: str, width: int, char: str = ' ', right: bool = False) -> str:
    """
    Pad string with char to reach width visible characters.

    With ``right`` set the padding goes in front, right-aligning the text.
    """
    current = visible_len(s)
    if current >= width:
        return s
    padding = char * (width - current)
    return padding + s if right else s + padding


def is_escape(unit: str) -> bool:
    """True if a unit from iter_units() is an escape sequence."""
    return len(unit) > 1 and unit.startswith(CSI)


def iter_units(s: str) -> Iterator[str]:
    """Yield visible characters one by one and escape sequences whole."""
    for match in _UNIT.finditer(s):
        yield match.group(0)


def truncate(s: str, max_width: int, reset: bool = True) -> str:
    """
    Truncate an ANSI-escaped string to max visible width.

    Preserves ANSI codes but counts only visible characters.

    Args:
        s: String to truncate
        max_width: Maximum visible width
        reset: If True, append reset sequence to prevent color bleed
    """
    if max_width <= 0:
        return ""

    result: list[str] = []
    vis_len = 0
    i = 0

    while i < len(s) and vis_len < max_width:
        if s[i] == '\x1b' and i + 1 < len(s) and s[i + 1] == '[':
            # ANSI escape sequence - include whole thing
            j = i + 2
            while j < len(s) and s[j] not in 'ABCDEFGHJKSTfmsu~':
                j += 1
            if j < len(s):
                j += 1  # Include terminator
            result.append(s[i:j])
            i = j
        else:
            result.append(s[i])
            vis_len += 1
            i += 1

    was_truncated = i < len(s)
    output = ''.join(result)

    # Append reset if truncated to prevent color bleed
    if reset and was_truncated:
        output += RESET

    return output


def visible_slice(s: str, start: int, end: int | None = None) -> str:
    """
    Slice a string by visible column, keeping its coloring intact.

    Escape sequences that precede ``start`` are replayed so the first
    visible character keeps the attributes it had in ``s``. A reset is
    appended whenever any escape sequence was emitted.
    """
    result: list[str] = []
    col = 0
    styled = False

    for unit in iter_units(s):
        if is_escape(unit):
            if end is None or col < end:
                result.append(unit)
                styled = True
            continue
        if col >= start and (end is None or col < end):
            result.append(unit)
        col += 1

    output = ''.join(result)
    if styled:
        output += RESET
    return output
