"""Terminal output surface and ANSI-aware text helpers."""

from aahook.terminal.surface import Terminal, TerminalSize
from aahook.terminal.ansi_text import (
    iter_units,
    pad_to_width,
    strip_ansi,
    truncate,
    visible_len,
    visible_slice,
)

__all__ = [
    "Terminal",
    "TerminalSize",
    "iter_units",
    "pad_to_width",
    "strip_ansi",
    "truncate",
    "visible_len",
    "visible_slice",
]
