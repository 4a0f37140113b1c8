"""Tests for the terminal surface and ANSI text utilities."""

import pytest

from aahook.core.constants import (
    CLEAR_LINE,
    CLEAR_TO_END,
    HIDE_CURSOR,
    RESET,
    RESTORE_CURSOR,
    SAVE_CURSOR,
    SHOW_CURSOR,
)
from aahook.terminal.ansi_text import (
    iter_units,
    pad_to_width,
    strip_ansi,
    truncate,
    visible_len,
    visible_slice,
)
from aahook.terminal.surface import Terminal, TerminalSize

from conftest import FakeStream


class TestTerminal:
    """Tests for Terminal control output."""

    def test_controls(self) -> None:
        stream = FakeStream()
        term = Terminal(stream)
        term.hide_cursor()
        term.clear_line()
        term.clear_screen()
        term.move_to(3, 5)
        term.move_up(2)
        term.move_down(1)
        term.show_cursor()
        assert stream.getvalue() == (
            HIDE_CURSOR + CLEAR_LINE + CLEAR_TO_END + "\x1b[5;3H" + "\x1b[2A" + "\x1b[1B" + SHOW_CURSOR
        )

    def test_zero_moves_write_nothing(self) -> None:
        stream = FakeStream()
        term = Terminal(stream)
        term.move_up(0)
        term.move_down(-3)
        assert stream.getvalue() == ""

    def test_piped_output_has_no_control_bytes(self) -> None:
        stream = FakeStream(tty=False)
        term = Terminal(stream)
        term.hide_cursor()
        term.save_position()
        term.clear_line()
        term.move_up(3)
        term.write("art")
        term.restore_position()
        term.write_line("!")
        term.show_cursor()
        assert stream.getvalue() == "art!\n"

    def test_restore_without_save_is_noop(self) -> None:
        stream = FakeStream()
        Terminal(stream).restore_position()
        assert stream.getvalue() == ""

    def test_save_is_single_slot(self) -> None:
        stream = FakeStream()
        term = Terminal(stream)
        term.save_position()
        term.save_position()
        term.restore_position()
        term.restore_position()
        assert stream.getvalue() == SAVE_CURSOR * 2 + RESTORE_CURSOR * 2

    def test_size_fallback(self) -> None:
        assert Terminal(FakeStream()).size() == TerminalSize(24, 80)
        assert Terminal(FakeStream(tty=False)).size() == TerminalSize(24, 80)

    def test_supports_animation(self, monkeypatch: pytest.MonkeyPatch) -> None:
        term = Terminal(FakeStream())
        assert term.supports_animation() is True
        monkeypatch.setenv("CI", "true")
        assert term.supports_animation() is False

    def test_dumb_terminal(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TERM", "dumb")
        assert Terminal(FakeStream()).supports_animation() is False

    def test_pipe_cannot_animate(self) -> None:
        assert Terminal(FakeStream(tty=False)).supports_animation() is False

    def test_hidden_cursor_restores_on_error(self) -> None:
        stream = FakeStream()
        term = Terminal(stream)
        with pytest.raises(RuntimeError):
            with term.hidden_cursor():
                raise RuntimeError("boom")
        assert stream.getvalue() == HIDE_CURSOR + SHOW_CURSOR


class TestAnsiText:
    """Tests for escape-aware string helpers."""

    def test_visible_len(self) -> None:
        assert visible_len("\x1b[31mabc\x1b[0m") == 3
        assert visible_len("") == 0

    def test_strip_ansi(self) -> None:
        assert strip_ansi("\x1b[2K\x1b[1;31mhi\x1b[0m") == "hi"

    def test_iter_units(self) -> None:
        assert list(iter_units("a\x1b[31mb\n")) == ["a", "\x1b[31m", "b", "\n"]

    def test_truncate(self) -> None:
        assert truncate("\x1b[31mabcdef", 3) == "\x1b[31mabc" + RESET
        assert truncate("abc", 5) == "abc"
        assert truncate("abcdef", 3, reset=False) == "abc"
        assert truncate("abc", 0) == ""

    def test_visible_slice(self) -> None:
        assert visible_slice("abcdef", 1, 3) == "bc"
        assert visible_slice("abc", 1) == "bc"
        assert visible_slice("\x1b[31mabc\x1b[0m", 1, 2) == "\x1b[31mb" + RESET

    def test_pad_to_width(self) -> None:
        assert pad_to_width("ab", 4) == "ab  "
        assert pad_to_width("ab", 4, right=True) == "  ab"
        assert pad_to_width("\x1b[31mab\x1b[0m", 3) == "\x1b[31mab\x1b[0m "
        assert pad_to_width("abc", 2) == "abc"
        assert pad_to_width("a", 3, char=".") == "a.."
