"""Color theme model: rules, matches and color specifications."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from aahook.core.color import Color
from aahook.core.constants import STYLE_CODES
from aahook.errors import ThemeValidationError

logger = logging.getLogger(__name__)


class ThemeMode(Enum):
    """How a theme's rules are matched against text."""
    LINE = "line"
    PATTERN = "pattern"
    CHARACTER = "character"
    REGION = "region"


@dataclass(frozen=True)
class LineRange:
    """Inclusive range of 0-based line numbers."""
    start: int
    end: int

    def contains(self, index: int) -> bool:
        return self.start <= index <= self.end


@dataclass(frozen=True)
class RegionBox:
    """Rectangle of character cells: columns [x, x+width), rows [y, y+height)."""
    x: int
    y: int
    width: int
    height: int

    def rows(self, grid_height: int) -> range:
        """Row indexes of the box that exist in a grid of grid_height rows."""
        return range(max(0, self.y), min(self.y + self.height, grid_height))

    def columns(self, row_length: int) -> range:
        """Column indexes of the box that exist in a row of row_length cells."""
        return range(max(0, self.x), min(self.x + self.width, row_length))


@dataclass(frozen=True)
class ColorSpec:
    """Foreground, background and style attributes for a unit of text."""
    foreground: str | int | None = None
    background: str | int | None = None
    styles: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ColorSpec":
        """Build from theme JSON (``fg``/``bg``/``style`` or the long names)."""
        styles = data.get("style", data.get("styles")) or ()
        if isinstance(styles, str):
            styles = (styles,)
        return cls(
            foreground=data.get("fg", data.get("foreground")),
            background=data.get("bg", data.get("background")),
            styles=tuple(styles),
        )

    def sgr_codes(self) -> list[str]:
        """SGR parameters in order: styles, then foreground, then background."""
        codes = [str(STYLE_CODES[s]) for s in self.styles if s in STYLE_CODES]
        if self.foreground is not None:
            fg = _parse_color(self.foreground)
            if fg is not None:
                codes.append(fg.to_sgr_fg())
        if self.background is not None:
            bg = _parse_color(self.background)
            if bg is not None:
                codes.append(bg.to_sgr_bg())
        return codes


def _parse_color(value: str | int) -> Color | None:
    try:
        return Color.parse(value)
    except ValueError:
        logger.debug("Ignoring unrecognized color value %r", value)
        return None


RuleMatch = Union[LineRange, RegionBox, str, re.Pattern[str]]


@dataclass(frozen=True)
class ColorRule:
    """A match and the color applied to whatever it matches."""
    match: RuleMatch
    color: ColorSpec

    @classmethod
    def from_dict(cls, data: Any, mode: ThemeMode) -> "ColorRule":
        """Build a rule from theme JSON."""
        if not isinstance(data, dict) or "match" not in data:
            raise ThemeValidationError(f"Rule must be an object with a 'match': {data!r}")
        color = data.get("color") or {}
        if not isinstance(color, dict):
            raise ThemeValidationError(f"Rule color must be an object: {color!r}")
        return cls(match=_parse_match(data["match"], mode), color=ColorSpec.from_dict(color))


def _parse_match(match: Any, mode: ThemeMode) -> RuleMatch:
    try:
        if isinstance(match, dict):
            if "start" in match and "end" in match:
                return LineRange(int(match["start"]), int(match["end"]))
            if all(k in match for k in ("x", "y", "width", "height")):
                return RegionBox(
                    int(match["x"]), int(match["y"]),
                    int(match["width"]), int(match["height"]),
                )
            if "regex" in match:
                return re.compile(match["regex"])
        elif isinstance(match, str) and match:
            # Character classes in pattern mode are regexes, anything else is literal
            if mode is ThemeMode.PATTERN and match.startswith("[") and match.endswith("]"):
                return re.compile(match)
            return match
    except (TypeError, ValueError, re.error) as e:
        raise ThemeValidationError(f"Invalid rule match {match!r}: {e}") from e
    raise ThemeValidationError(f"Unsupported rule match: {match!r}")


@dataclass(frozen=True)
class ColorTheme:
    """A named, ordered set of color rules."""
    name: str
    version: str
    mode: ThemeMode
    rules: tuple[ColorRule, ...] = ()
    description: str = ""
    author: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data: Any, source: str = "<theme>") -> "ColorTheme":
        """Validate theme JSON and build a ColorTheme from it."""
        problem = theme_problem(data)
        if problem:
            raise ThemeValidationError(f"Invalid theme {source}: {problem}")
        mode = ThemeMode(data["colors"]["mode"])
        rules = tuple(ColorRule.from_dict(rule, mode) for rule in data["colors"]["rules"])
        known = {"name", "version", "description", "author", "colors"}
        return cls(
            name=str(data["name"]),
            version=str(data["version"]),
            mode=mode,
            rules=rules,
            description=str(data.get("description", "")),
            author=data.get("author"),
            metadata={k: v for k, v in data.items() if k not in known},
        )


def theme_problem(data: Any) -> str | None:
    """Describe the first schema violation in theme JSON, or None if valid."""
    if not isinstance(data, dict):
        return "theme must be a JSON object"
    for key in ("name", "version"):
        if not data.get(key):
            return f"missing '{key}'"
    colors = data.get("colors")
    if not isinstance(colors, dict):
        return "missing 'colors'"
    modes = [m.value for m in ThemeMode]
    if colors.get("mode") not in modes:
        return f"'colors.mode' must be one of {', '.join(modes)}"
    if not isinstance(colors.get("rules"), list):
        return "'colors.rules' must be a list"
    return None


def validate_theme(data: Any) -> bool:
    """Check theme JSON against the theme schema."""
    return theme_problem(data) is None
