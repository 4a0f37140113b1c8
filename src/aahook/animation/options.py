"""Animation styles, directions and per-render options."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from aahook.animation.timing import TimingOptions, parse_loop

# Delays used by the CLI when no speed is given (ms)
CLI_CHAR_DELAY = 20.0
CLI_LINE_DELAY = 50.0
CLI_FPS = 30.0


class AnimationStyle(Enum):
    """Supported animation styles."""
    TYPING = "typing"
    FADE = "fade"
    FRAMES = "frames"
    BLINK = "blink"
    SLIDE = "slide"

    @classmethod
    def parse(cls, value: "AnimationStyle | str | None") -> "AnimationStyle | None":
        """Look up a style by name; None if it is not a known style."""
        if isinstance(value, cls):
            return value
        if value is None:
            return None
        try:
            return cls(str(value).lower())
        except ValueError:
            return None


class Direction(Enum):
    """Direction for fade and slide animations."""
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"
    UP = "up"
    DOWN = "down"

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)

    @property
    def is_topward(self) -> bool:
        return self in (Direction.TOP, Direction.UP)


@dataclass(frozen=True)
class AnimationOptions:
    """
    Options for a single render call.

    ``direction`` left as None lets each style pick its own default
    (fade: top, slide: left). ``pattern`` restricts blink to regex
    matches. ``theme`` names a color theme applied before animating.
    ``save`` asks the caller to store the animation definition; the
    engine itself ignores it.

    Raises ValueError if ``pattern`` is not a valid regular expression.
    """
    timing: TimingOptions = field(default_factory=TimingOptions)
    direction: Direction | None = None
    pattern: str | None = None
    theme: str | None = None
    preview: bool = False
    save: bool = False

    def __post_init__(self) -> None:
        if self.pattern:
            try:
                re.compile(self.pattern)
            except re.error as e:
                raise ValueError(f"invalid pattern {self.pattern!r}: {e}") from e

    @classmethod
    def from_flat(cls, options: Mapping[str, Any]) -> "AnimationOptions":
        """
        Build options from the flat structure used by the command line.

        Recognized keys: ``speed`` (characters or lines per second),
        ``fps``, ``loop`` (integer or ``"infinite"``), ``direction``,
        ``theme``, ``pattern``, ``save`` and ``preview``. ``type`` is
        read by the caller, not here.
        """
        speed = options.get("speed")
        if speed:
            char_delay = line_delay = 1000 / float(speed)
        else:
            char_delay, line_delay = CLI_CHAR_DELAY, CLI_LINE_DELAY

        direction = options.get("direction")
        timing = TimingOptions(
            fps=float(options.get("fps") or CLI_FPS),
            loop=parse_loop(options.get("loop")),
            char_delay=char_delay,
            line_delay=line_delay,
        )
        return cls(
            timing=timing,
            direction=Direction(direction) if direction else None,
            pattern=options.get("pattern"),
            theme=options.get("theme"),
            preview=bool(options.get("preview", False)),
            save=bool(options.get("save", False)),
        )
