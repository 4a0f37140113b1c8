"""Animation timing: frame rates, easing curves, loop control and waiting."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)

# Loop count meaning "repeat until interrupted"
INFINITE = -1

DEFAULT_DURATION = 1000.0
DEFAULT_FPS = 30.0
DEFAULT_LOOP = 1
DEFAULT_CHAR_DELAY = 50.0
DEFAULT_LINE_DELAY = 100.0


class Easing(Enum):
    """Easing curves mapping normalized progress (0..1) to eased progress."""
    LINEAR = "linear"
    EASE_IN = "ease-in"
    EASE_OUT = "ease-out"
    EASE_IN_OUT = "ease-in-out"
    CUBIC_BEZIER = "cubic-bezier"

    @classmethod
    def parse(cls, value: "Easing | str | None") -> "Easing":
        """Look up an easing by name, falling back to linear."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.LINEAR
        try:
            return cls(str(value).lower())
        except ValueError:
            logger.warning("Unknown easing %r, using linear", value)
            return cls.LINEAR

    def apply(self, t: float) -> float:
        """Apply this curve to progress t."""
        if self is Easing.EASE_IN:
            return t * t
        if self is Easing.EASE_OUT:
            return 1 - (1 - t) ** 2
        if self is Easing.EASE_IN_OUT:
            return 2 * t * t if t < 0.5 else 1 - (-2 * t + 2) ** 2 / 2
        if self is Easing.CUBIC_BEZIER:
            # Closed-form stand-in for cubic-bezier(0.4, 0, 0.2, 1)
            c1, c2 = 0.4, 0.2
            return t * (2 * (1 - t) * c1 + t * c2)
        return t


def parse_loop(value: int | str | None) -> int | None:
    """
    Normalize a loop setting.

    Accepts a positive integer, ``INFINITE`` (-1) or the string
    ``"infinite"``. Returns None when unset.
    """
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("infinite", "inf", "forever"):
            return INFINITE
        value = int(text)
    return int(value)


@dataclass(frozen=True)
class TimingOptions:
    """Timing parameters for one animation. All times are milliseconds."""
    duration: float = DEFAULT_DURATION
    delay: float = 0.0           # Wait before the first frame
    fps: float = DEFAULT_FPS
    loop: int | None = None      # None = style default, INFINITE = forever
    char_delay: float | None = None
    line_delay: float | None = None
    easing: Easing = Easing.LINEAR


def _positive(value: float | None, default: float) -> float:
    if value is None or value <= 0:
        return default
    return float(value)


class TimingController:
    """
    Converts timing options into concrete delays and loop decisions.

    Non-positive fps, duration or delays fall back to the defaults
    instead of producing division by zero or zero-length waits.
    """

    def __init__(
        self,
        options: TimingOptions | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.options = options or TimingOptions()
        self.duration = _positive(self.options.duration, DEFAULT_DURATION)
        self.start_delay = max(0.0, float(self.options.delay or 0))
        self.fps = _positive(self.options.fps, DEFAULT_FPS)
        self.easing = Easing.parse(self.options.easing)

        loop = self.options.loop
        if loop == INFINITE:
            self.loop_count = INFINITE
        elif loop is not None and loop > 0:
            self.loop_count = loop
        else:
            self.loop_count = DEFAULT_LOOP

        self._clock = clock
        self._start_time = 0.0
        self._paused_time = 0.0
        self._is_paused = False

    @property
    def loop_configured(self) -> bool:
        """True if the options carried an explicit, valid loop count."""
        loop = self.options.loop
        return loop is not None and (loop == INFINITE or loop > 0)

    def frame_delay(self) -> float:
        """Delay between frames based on fps."""
        return 1000 / self.fps

    def char_delay(self) -> float:
        """Delay between characters for typing animation."""
        return _positive(self.options.char_delay, DEFAULT_CHAR_DELAY)

    def line_delay(self) -> float:
        """Delay between lines for fade and vertical slide animation."""
        return _positive(self.options.line_delay, DEFAULT_LINE_DELAY)

    def calculate_delay(self, index: int, total: int) -> float:
        """Eased offset of step ``index`` out of ``total`` within the duration."""
        if total <= 1:
            return 0.0
        progress = index / (total - 1)
        return self.easing.apply(progress) * self.duration

    def should_continue_loop(self, current_loop: int) -> bool:
        """Check if another loop iteration should run."""
        return self.loop_count == INFINITE or current_loop < self.loop_count

    async def wait(self, ms: float) -> None:
        """
        Suspend the calling animation step for ms milliseconds.

        Waiting is not interrupted; callers check their cancellation
        token after each wait returns.
        """
        await asyncio.sleep(max(0.0, ms) / 1000)

    def start(self) -> None:
        """Record the timing baseline."""
        self._start_time = self._clock()
        self._is_paused = False

    def pause(self) -> None:
        """Pause timing; paused time is excluded from elapsed()."""
        if not self._is_paused:
            self._paused_time = self._clock()
            self._is_paused = True

    def resume(self) -> None:
        """Resume timing after pause()."""
        if self._is_paused:
            self._start_time += self._clock() - self._paused_time
            self._is_paused = False

    def elapsed(self) -> float:
        """Milliseconds since start(), net of pauses."""
        if self._is_paused:
            return (self._paused_time - self._start_time) * 1000
        return (self._clock() - self._start_time) * 1000

    def reset(self) -> None:
        """Clear all timing bookkeeping."""
        self._start_time = 0.0
        self._paused_time = 0.0
        self._is_paused = False
