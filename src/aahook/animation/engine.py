"""Terminal animation engine."""

from __future__ import annotations

import logging
import re
import signal
import threading
from dataclasses import dataclass
from types import FrameType
from typing import Any, Awaitable, Callable, Sequence

from aahook.animation.options import AnimationOptions, AnimationStyle, Direction
from aahook.animation.timing import INFINITE, TimingController
from aahook.color.ansi import color_support
from aahook.color.engine import ColorEngine
from aahook.core.constants import BLINK_OFF, BLINK_ON, CSI, RESET
from aahook.terminal.ansi_text import (
    is_escape,
    iter_units,
    pad_to_width,
    truncate,
    visible_len,
    visible_slice,
)
from aahook.terminal.surface import Terminal

logger = logging.getLogger(__name__)

# Delay floors and fixed periods (ms)
TYPING_MIN_DELAY = 10.0
FADE_MIN_DELAY = 30.0
BLINK_HALF_PERIOD = 500.0
BLINK_DEFAULT_LOOPS = 3
SLIDE_STEP_DELAY = 20.0

# Extra columns a horizontal slide travels beyond the widest line
SLIDE_EXIT_PADDING = 10

# SGR sequences that clear every attribute
_RESETS = (RESET, f"{CSI}m")

Content = str | Sequence[str]


class CancellationToken:
    """Shared flag observed cooperatively at animation loop boundaries."""

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Request that the running animation stop at its next boundary."""
        self._cancelled = True

    def reset(self) -> None:
        self._cancelled = False


@dataclass
class RenderSession:
    """State of one animate() call."""
    token: CancellationToken
    frame_index: int = 0
    anchor_saved: bool = False

    @property
    def interrupted(self) -> bool:
        return self.token.cancelled


class AnimationEngine:
    """
    Drives one of the animation styles over a terminal surface.

    Every step is paced by the timing controller and the cancellation
    token is checked before each frame, so an interrupt stops the
    animation within one frame period. The cursor is hidden while an
    animation runs and is shown again however the animation ends.

    When the terminal cannot animate (not a TTY, CI, TERM=dumb) and
    preview is off, or when the style is unknown, the content is
    written once, unanimated.

    Only one animation may run against a given output stream at a
    time; the saved cursor slot is shared.

    Example:
        >>> with AnimationEngine(AnimationOptions()) as engine:
        ...     asyncio.run(engine.animate("Hello\\nWorld", AnimationStyle.TYPING))
    """

    def __init__(
        self,
        options: AnimationOptions | None = None,
        terminal: Terminal | None = None,
        timing: TimingController | None = None,
        color_engine: ColorEngine | None = None,
        token: CancellationToken | None = None,
        handle_interrupts: bool = True,
    ) -> None:
        self.options = options or AnimationOptions()
        self.terminal = terminal or Terminal()
        self.timing = timing or TimingController(self.options.timing)
        self.color_engine = color_engine
        self.token = token or CancellationToken()
        self.session: RenderSession | None = None

        self._styles: dict[AnimationStyle, Callable[[Any], Awaitable[None]]] = {
            AnimationStyle.TYPING: self._animate_typing,
            AnimationStyle.FADE: self._animate_fade,
            AnimationStyle.FRAMES: self._animate_frames,
            AnimationStyle.BLINK: self._animate_blink,
            AnimationStyle.SLIDE: self._animate_slide,
        }

        self._previous_handler: Any = None
        self._handler_installed = False
        if handle_interrupts:
            self._install_interrupt_handler()

    def __enter__(self) -> "AnimationEngine":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cleanup()

    @property
    def interrupted(self) -> bool:
        return self.token.cancelled

    def interrupt(self) -> None:
        """Stop the running animation at its next frame boundary."""
        self.token.cancel()

    async def animate(
        self,
        content: Content,
        style: AnimationStyle | str = AnimationStyle.TYPING,
    ) -> None:
        """
        Animate content in the given style.

        ``content`` is a string, or a list of whole frames for the
        ``frames`` style. Theme errors are raised before anything is
        written.
        """
        content = self._apply_theme(content)

        if not self.terminal.supports_animation() and not self.options.preview:
            logger.debug("Terminal cannot animate, writing static content")
            self._write_static(content)
            return

        kind = AnimationStyle.parse(style)
        if kind is None:
            logger.debug("Unknown animation style %r, writing static content", style)
            self._write_static(content)
            return

        if kind is AnimationStyle.FRAMES:
            payload: Any = [content] if isinstance(content, str) else list(content)
        else:
            payload = _as_text(content)

        self.token.reset()
        self.session = RenderSession(self.token)
        try:
            if self.timing.start_delay:
                await self.timing.wait(self.timing.start_delay)
            self.timing.start()
            with self.terminal.hidden_cursor():
                await self._styles[kind](payload)
            if self.session.interrupted:
                logger.debug("Animation interrupted after %d frames", self.session.frame_index)
        finally:
            self.session = None

    def cleanup(self) -> None:
        """Show the cursor and remove the interrupt handler. Safe to call twice."""
        self.terminal.show_cursor()
        if self._handler_installed:
            previous = self._previous_handler
            signal.signal(signal.SIGINT, previous if previous is not None else signal.SIG_DFL)
            self._handler_installed = False

    def _install_interrupt_handler(self) -> None:
        # signal.signal only works on the main thread
        if threading.current_thread() is not threading.main_thread():
            logger.debug("Not on the main thread, interrupt handler not installed")
            return
        self._previous_handler = signal.getsignal(signal.SIGINT)
        signal.signal(signal.SIGINT, self._handle_interrupt)
        self._handler_installed = True

    def _handle_interrupt(self, signum: int, frame: FrameType | None) -> None:
        logger.debug("Interrupt received")
        self.token.cancel()
        self.terminal.show_cursor()

    def _apply_theme(self, content: Content) -> Content:
        if not self.options.theme:
            return content
        if self.color_engine is None:
            self.color_engine = ColorEngine()
        theme = self.color_engine.load_theme(self.options.theme)

        if not self.options.preview and color_support(self.terminal.stream) == 0:
            return content
        if isinstance(content, str):
            return self.color_engine.apply_theme(content, theme)
        return [self.color_engine.apply_theme(frame, theme) for frame in content]

    def _write_static(self, content: Content) -> None:
        self.terminal.write(_as_text(content))

    def _next_frame(self) -> bool:
        """Advance to the next frame; False once the animation is interrupted."""
        assert self.session is not None
        if self.session.interrupted:
            return False
        self.session.frame_index += 1
        return True

    def _save_anchor(self) -> None:
        assert self.session is not None
        self.terminal.save_position()
        self.session.anchor_saved = True

    async def _animate_typing(self, content: str) -> None:
        """Write characters one by one; escape sequences go out whole."""
        delay = max(TYPING_MIN_DELAY, self.timing.char_delay())
        # An SGR attribute was written and not yet reset
        styled = False

        for unit in iter_units(content):
            if not self._next_frame():
                if styled:
                    self.terminal.write(RESET)
                break
            self.terminal.write(unit)
            if is_escape(unit):
                if unit.endswith('m'):
                    styled = unit not in _RESETS
            elif unit != '\n':
                await self.timing.wait(delay)

        if not content.endswith('\n'):
            self.terminal.write('\n')

    async def _animate_fade(self, content: str) -> None:
        """Reveal lines progressively, or columns for left/right."""
        lines = content.split('\n')
        delay = max(FADE_MIN_DELAY, self.timing.line_delay())
        direction = self.options.direction or Direction.TOP

        # Reserve the area, then anchor at its first line
        for _ in lines:
            self.terminal.write_line('')
        self.terminal.move_up(len(lines))
        self._save_anchor()

        if direction.is_horizontal:
            await self._fade_columns(lines, direction, delay / 2)
            return

        if direction.is_topward:
            order = range(len(lines))
        else:
            order = range(len(lines) - 1, -1, -1)

        shown: list[int] = []
        for index in order:
            if not self._next_frame():
                break
            if direction.is_topward:
                shown.append(index)
            else:
                shown.insert(0, index)
            self._render_fade_frame(lines, set(shown))
            await self.timing.wait(delay)

    def _render_fade_frame(self, lines: list[str], shown: set[int]) -> None:
        self.terminal.restore_position()
        for i, line in enumerate(lines):
            self.terminal.clear_line()
            self.terminal.write_line(line if i in shown else '')

    async def _fade_columns(self, lines: list[str], direction: Direction, delay: float) -> None:
        widths = [visible_len(line) for line in lines]
        max_len = max(widths, default=0)

        for count in range(1, max_len + 1):
            if not self._next_frame():
                break
            self.terminal.restore_position()
            for line, width in zip(lines, widths):
                self.terminal.clear_line()
                if direction is Direction.LEFT:
                    self.terminal.write_line(visible_slice(line, 0, count))
                else:
                    # Right-aligned: reveal the last `count` columns
                    start = max(0, width - count)
                    self.terminal.write_line(pad_to_width(visible_slice(line, start), width, right=True))
            await self.timing.wait(delay)

    async def _animate_frames(self, frames: list[str]) -> None:
        """Cycle whole frames at the configured fps."""
        if not frames:
            return

        frame_delay = self.timing.frame_delay()
        self._save_anchor()

        previous_height = 0
        current_loop = 0
        while self.timing.should_continue_loop(current_loop) and not self.interrupted:
            for frame in frames:
                if not self._next_frame():
                    break
                height = frame.count('\n') + 1
                self.terminal.restore_position()
                self._clear_frame(max(previous_height, height))
                self.terminal.restore_position()
                self.terminal.write(frame)
                previous_height = height
                await self.timing.wait(frame_delay)
            current_loop += 1

    def _clear_frame(self, height: int) -> None:
        for i in range(height):
            self.terminal.clear_line()
            if i < height - 1:
                self.terminal.move_down(1)

    async def _animate_blink(self, content: str) -> None:
        """Blink matched spans natively, or the whole content on a timer."""
        if self.options.pattern:
            regex = re.compile(self.options.pattern)
            self.terminal.write(_blink_matches(regex, content))
            return

        loops = self.timing.loop_count if self.timing.loop_configured else BLINK_DEFAULT_LOOPS
        self._save_anchor()

        current_loop = 0
        while (loops == INFINITE or current_loop < loops) and self._next_frame():
            self.terminal.restore_position()
            self.terminal.write(content)
            await self.timing.wait(BLINK_HALF_PERIOD)

            self.terminal.restore_position()
            self.terminal.clear_screen()
            await self.timing.wait(BLINK_HALF_PERIOD)
            current_loop += 1

        # Always finish visible
        self.terminal.restore_position()
        self.terminal.write(content)

    async def _animate_slide(self, content: str) -> None:
        """Slide content in horizontally, or reveal it line by line vertically."""
        direction = self.options.direction or Direction.LEFT
        lines = content.split('\n')

        if direction.is_horizontal:
            await self._slide_horizontal(lines, direction, self.terminal.size().cols)
        else:
            await self._slide_vertical(lines, direction)

    async def _slide_horizontal(self, lines: list[str], direction: Direction, max_width: int) -> None:
        widths = [visible_len(line) for line in lines]
        steps = min(max(widths, default=0) + SLIDE_EXIT_PADDING, max_width)
        last = len(lines) - 1

        # Clear the area, then return to its first line
        for j in range(len(lines)):
            self.terminal.clear_line()
            if j < last:
                self.terminal.write_line('')
        self.terminal.move_up(last)

        for i in range(steps + 1):
            if not self._next_frame():
                break
            self._save_anchor()
            padding = steps - i if direction is Direction.LEFT else i
            for j, line in enumerate(lines):
                self.terminal.clear_line()
                self.terminal.write(truncate(' ' * padding + line, max_width))
                if j < last:
                    self.terminal.write_line('')
            await self.timing.wait(SLIDE_STEP_DELAY)
            self.terminal.restore_position()

        # Rest position
        self._save_anchor()
        for line, width in zip(lines, widths):
            self.terminal.clear_line()
            if direction is Direction.LEFT:
                self.terminal.write_line(line)
            else:
                padding = max(0, min(steps, max_width - width))
                self.terminal.write_line(pad_to_width(line, width + padding, right=True))

    async def _slide_vertical(self, lines: list[str], direction: Direction) -> None:
        ordered = lines if direction.is_topward else list(reversed(lines))
        if (self.timing.options.line_delay or 0) > 0:
            delay = self.timing.line_delay()
        else:
            delay = SLIDE_STEP_DELAY

        for line in ordered:
            if not self._next_frame():
                break
            self.terminal.write_line(line)
            await self.timing.wait(delay)


def _as_text(content: Content) -> str:
    if isinstance(content, str):
        return content
    return '\n'.join(content)


def _blink_matches(regex: re.Pattern[str], content: str) -> str:
    """Wrap regex matches in native blink, matching visible text only."""
    def blink(match: re.Match[str]) -> str:
        return f"{BLINK_ON}{match.group(0)}{BLINK_OFF}"

    result: list[str] = []
    run: list[str] = []
    for unit in iter_units(content):
        if is_escape(unit):
            result.append(regex.sub(blink, ''.join(run)))
            run = []
            result.append(unit)
        else:
            run.append(unit)
    result.append(regex.sub(blink, ''.join(run)))
    return ''.join(result)
