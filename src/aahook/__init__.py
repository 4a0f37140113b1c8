"""
aahook: animated and colorized ASCII art for the terminal

Quick Start:
    >>> import asyncio
    >>> import aahook
    >>> theme = aahook.ColorEngine().load_theme("fire")
    >>> print(aahook.apply_theme(open("dragon.txt").read(), theme))
    >>> asyncio.run(aahook.animate("Hello\\nWorld", "typing"))

Features:
    - Five animation styles: typing, fade, frames, blink, slide
    - Easing curves, fps and loop control
    - Declarative color themes by line, character, pattern or region
    - Safe in pipes and CI: no control bytes when stdout is not a terminal
    - Ctrl+C stops an animation cleanly and restores the cursor
"""

from __future__ import annotations

from typing import Any, Mapping

__version__ = "0.1.0"

# Animation
from aahook.animation.engine import AnimationEngine, CancellationToken
from aahook.animation.options import AnimationOptions, AnimationStyle, Direction
from aahook.animation.timing import INFINITE, Easing, TimingController, TimingOptions

# Color
from aahook.color.engine import ColorEngine
from aahook.color.theme import ColorSpec, ColorTheme, ThemeMode

# Terminal
from aahook.terminal.surface import Terminal

# Errors
from aahook.errors import AahookError, ThemeError, ThemeNotFoundError, ThemeValidationError


async def animate(
    content: str | list[str],
    style: AnimationStyle | str = AnimationStyle.TYPING,
    options: AnimationOptions | Mapping[str, Any] | None = None,
) -> None:
    """Animate content on stdout; options may be AnimationOptions or the flat CLI mapping."""
    if options is not None and not isinstance(options, AnimationOptions):
        options = AnimationOptions.from_flat(options)
    with AnimationEngine(options) as engine:
        await engine.animate(content, style)


def apply_theme(text: str, theme: ColorTheme) -> str:
    """Colorize text with a theme."""
    return ColorEngine().apply_theme(text, theme)


__all__ = [
    # Version
    "__version__",
    # Entry points
    "animate",
    "apply_theme",
    # Animation
    "AnimationEngine",
    "AnimationOptions",
    "AnimationStyle",
    "CancellationToken",
    "Direction",
    "Easing",
    "INFINITE",
    "TimingController",
    "TimingOptions",
    # Color
    "ColorEngine",
    "ColorSpec",
    "ColorTheme",
    "ThemeMode",
    # Terminal
    "Terminal",
    # Errors
    "AahookError",
    "ThemeError",
    "ThemeNotFoundError",
    "ThemeValidationError",
]
