"""Low-level terminal operations - the only place raw control sequences are written."""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, TextIO

from aahook.core.constants import (
    CLEAR_LINE,
    CLEAR_TO_END,
    CSI,
    DEFAULT_TERMINAL_SIZE,
    HIDE_CURSOR,
    RESTORE_CURSOR,
    SAVE_CURSOR,
    SHOW_CURSOR,
)


@dataclass(frozen=True)
class TerminalSize:
    """Terminal dimensions."""
    rows: int
    cols: int


class Terminal:
    """
    Cursor-control surface over a text stream.

    Every cursor, clear and save/restore operation is a no-op when the
    stream is not an interactive terminal, so piped or redirected output
    never contains control bytes. ``write`` and ``write_line`` always write.

    The saved cursor position is a single slot: saving twice overwrites
    the first position and restoring without a save does nothing.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.is_interactive = _isatty(self.stream)
        self._has_saved_position = False

    def _control(self, sequence: str) -> None:
        if self.is_interactive:
            self.write(sequence)

    def hide_cursor(self) -> None:
        """Hide the cursor."""
        self._control(HIDE_CURSOR)

    def show_cursor(self) -> None:
        """Show the cursor."""
        self._control(SHOW_CURSOR)

    def clear_line(self) -> None:
        """Clear the current line and return to column 0."""
        self._control(CLEAR_LINE)

    def clear_screen(self) -> None:
        """Clear from the cursor to the end of the screen."""
        self._control(CLEAR_TO_END)

    def move_to(self, x: int, y: int) -> None:
        """Move cursor to column x, row y (1-indexed)."""
        self._control(f'{CSI}{y};{x}H')

    def move_up(self, lines: int) -> None:
        """Move cursor up by n lines."""
        if lines > 0:
            self._control(f'{CSI}{lines}A')

    def move_down(self, lines: int) -> None:
        """Move cursor down by n lines."""
        if lines > 0:
            self._control(f'{CSI}{lines}B')

    def save_position(self) -> None:
        """Save the cursor position, replacing any earlier save."""
        if self.is_interactive:
            self._has_saved_position = True
            self.write(SAVE_CURSOR)

    def restore_position(self) -> None:
        """Restore the saved cursor position."""
        if self.is_interactive and self._has_saved_position:
            self.write(RESTORE_CURSOR)

    def write(self, text: str) -> None:
        """Write text to the stream."""
        self.stream.write(text)
        self.stream.flush()

    def write_line(self, text: str = '') -> None:
        """Write text followed by a newline."""
        self.write(text + '\n')

    def size(self) -> TerminalSize:
        """Get current terminal dimensions, 24x80 when unknown."""
        default_rows, default_cols = DEFAULT_TERMINAL_SIZE
        if not self.is_interactive:
            return TerminalSize(default_rows, default_cols)
        try:
            size = os.get_terminal_size(self.stream.fileno())
        except (OSError, AttributeError, ValueError):
            return TerminalSize(default_rows, default_cols)
        return TerminalSize(size.lines or default_rows, size.columns or default_cols)

    def supports_animation(self) -> bool:
        """Check for an interactive, non-CI, non-dumb terminal."""
        return (
            self.is_interactive
            and not os.environ.get('CI')
            and os.environ.get('TERM') != 'dumb'
        )

    @contextmanager
    def hidden_cursor(self) -> Iterator[None]:
        """Hide the cursor for the duration of the block, always showing it again."""
        self.hide_cursor()
        try:
            yield
        finally:
            self.show_cursor()


def _isatty(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False
