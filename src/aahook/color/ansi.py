"""SGR helpers: wrapping text in colors, stripping them, and color detection."""

from __future__ import annotations

import os
import re
import sys
from typing import Mapping, TextIO

from aahook.color.theme import ColorSpec
from aahook.core.color import Color
from aahook.core.constants import CSI, RESET

# SGR sequences only: ESC [ digits/semicolons m
_SGR = re.compile(r'\x1b\[[0-9;]*m')

_RAINBOW = ("red", "yellow", "green", "cyan", "blue", "magenta")
_COLOR_TERMS = re.compile(r'^xterm|^screen|^vt100|color|ansi|cygwin|linux', re.IGNORECASE)


def colorize(text: str, color: ColorSpec) -> str:
    """Wrap text in the SGR sequence for color, followed by a reset."""
    codes = color.sgr_codes()
    if not codes:
        return text
    return f"{CSI}{';'.join(codes)}m{text}{RESET}"


def strip_colors(text: str) -> str:
    """Remove every SGR sequence from text."""
    return _SGR.sub('', text)


def rainbow(text: str) -> str:
    """Color each visible character with the next color of a six-color cycle."""
    result: list[str] = []
    index = 0
    for char in strip_colors(text):
        if char in ('\n', ' '):
            result.append(char)
        else:
            result.append(colorize(char, ColorSpec(foreground=_RAINBOW[index % len(_RAINBOW)])))
            index += 1
    return ''.join(result)


def create_gradient(start: str, end: str, steps: int) -> list[str]:
    """
    Interpolate ``steps`` hex colors from start to end (both ``#RRGGBB``).

    Returns an empty list if either endpoint is not a hex color.
    """
    try:
        r1, g1, b1 = Color.from_hex(start).value  # type: ignore[misc]
        r2, g2, b2 = Color.from_hex(end).value  # type: ignore[misc]
    except ValueError:
        return []
    if steps <= 0:
        return []
    if steps == 1:
        return [Color.from_rgb(r1, g1, b1).to_hex()]

    gradient = []
    for i in range(steps):
        ratio = i / (steps - 1)
        gradient.append(Color.from_rgb(
            round(r1 + (r2 - r1) * ratio),
            round(g1 + (g2 - g1) * ratio),
            round(b1 + (b2 - b1) * ratio),
        ).to_hex())
    return gradient


def color_support(
    stream: TextIO | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    """
    Detect the color level of a stream.

    0 = no color, 1 = basic 16 colors, 2 = 256 colors, 3 = true color.
    NO_COLOR and FORCE_COLOR override detection.
    """
    env = os.environ if env is None else env
    stream = sys.stdout if stream is None else stream

    if env.get("NO_COLOR"):
        return 0
    force = env.get("FORCE_COLOR")
    if force in ("0", "1", "2", "3"):
        return int(force)

    try:
        if not stream.isatty():
            return 0
    except (AttributeError, ValueError):
        return 0

    if sys.platform == "win32":
        return 3
    if env.get("COLORTERM") in ("truecolor", "24bit"):
        return 3
    term = env.get("TERM", "")
    if term.endswith("256color"):
        return 2
    if term and _COLOR_TERMS.search(term):
        return 1
    return 0
