"""Color values used by themes."""

import re
from dataclasses import dataclass
from enum import Enum

from aahook.core.constants import COLOR_ALIASES, COLORS_16

_HEX_COLOR = re.compile(r"^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$", re.IGNORECASE)
_RGB_COLOR = re.compile(r"rgb\((\d+),\s*(\d+),\s*(\d+)\)")


class ColorMode(Enum):
    """Color mode for ANSI sequences."""
    STANDARD_16 = "16"      # Standard 16-color (SGR 30-37, 40-47, 90-97, 100-107)
    EXTENDED_256 = "256"    # Extended 256-color (SGR 38;5;n, 48;5;n)
    TRUE_COLOR = "rgb"      # 24-bit true color (SGR 38;2;r;g;b, 48;2;r;g;b)


@dataclass(frozen=True)
class Color:
    """
    A single foreground or background color.

    Theme files spell colors as named tokens, palette indexes, hex
    strings or ``rgb()`` calls; all of them end up here.
    """
    mode: ColorMode
    value: int | tuple[int, int, int]

    @classmethod
    def from_name(cls, name: str) -> "Color":
        """Create a Color from a named 16-color token (``red``, ``brightRed``, ``bright_red``)."""
        key = _normalize_name(name)
        key = COLOR_ALIASES.get(key, key)
        if key not in COLORS_16:
            raise ValueError(f"Unknown color name: {name}")
        return cls(ColorMode.STANDARD_16, COLORS_16[key])

    @classmethod
    def from_256(cls, index: int) -> "Color":
        """Create a Color from a 256-color index."""
        if not 0 <= index <= 255:
            raise ValueError(f"256-color index must be 0-255, got {index}")
        return cls(ColorMode.EXTENDED_256, index)

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "Color":
        """Create a Color from RGB values."""
        if not all(0 <= c <= 255 for c in (r, g, b)):
            raise ValueError(f"RGB values must be 0-255, got ({r}, {g}, {b})")
        return cls(ColorMode.TRUE_COLOR, (r, g, b))

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Create a Color from a ``#RRGGBB`` string."""
        match = _HEX_COLOR.match(value)
        if not match:
            raise ValueError(f"Invalid hex color: {value}")
        r, g, b = (int(part, 16) for part in match.groups())
        return cls(ColorMode.TRUE_COLOR, (r, g, b))

    @classmethod
    def parse(cls, value: str | int) -> "Color":
        """
        Parse any theme color value.

        Accepts, in order of precedence: a named 16-color token, a
        0-255 palette index (int or numeric string), ``#RRGGBB`` and
        ``rgb(r, g, b)``. Raises ValueError for anything else.
        """
        if isinstance(value, bool):
            raise ValueError(f"Invalid color value: {value!r}")
        if isinstance(value, int):
            return cls.from_256(value)

        text = str(value).strip()
        key = _normalize_name(text)
        if COLOR_ALIASES.get(key, key) in COLORS_16:
            return cls.from_name(text)
        if text.isdigit():
            return cls.from_256(int(text))
        if text.startswith("#"):
            return cls.from_hex(text)
        match = _RGB_COLOR.fullmatch(text)
        if match:
            r, g, b = (int(part) for part in match.groups())
            return cls.from_rgb(r, g, b)
        raise ValueError(f"Invalid color value: {value!r}")

    def to_sgr_fg(self) -> str:
        """Return SGR sequence for foreground color."""
        if self.mode == ColorMode.STANDARD_16:
            assert isinstance(self.value, int)
            if self.value < 8:
                return str(30 + self.value)
            else:
                return str(90 + self.value - 8)
        elif self.mode == ColorMode.EXTENDED_256:
            return f"38;5;{self.value}"
        else:  # TRUE_COLOR
            assert isinstance(self.value, tuple)
            r, g, b = self.value
            return f"38;2;{r};{g};{b}"

    def to_sgr_bg(self) -> str:
        """Return SGR sequence for background color."""
        if self.mode == ColorMode.STANDARD_16:
            assert isinstance(self.value, int)
            if self.value < 8:
                return str(40 + self.value)
            else:
                return str(100 + self.value - 8)
        elif self.mode == ColorMode.EXTENDED_256:
            return f"48;5;{self.value}"
        else:  # TRUE_COLOR
            assert isinstance(self.value, tuple)
            r, g, b = self.value
            return f"48;2;{r};{g};{b}"

    def to_hex(self) -> str:
        """Return ``#rrggbb`` for true colors."""
        if self.mode != ColorMode.TRUE_COLOR:
            raise ValueError("Only true colors have a hex form")
        assert isinstance(self.value, tuple)
        r, g, b = self.value
        return f"#{r:02x}{g:02x}{b:02x}"


def _normalize_name(name: str) -> str:
    """brightRed / bright-red / BRIGHT_RED -> bright_red."""
    snake = re.sub(r"(?<=[a-z])([A-Z])", r"_\1", name.strip())
    return snake.replace("-", "_").lower()
