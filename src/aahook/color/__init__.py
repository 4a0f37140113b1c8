"""Declarative color themes for ASCII art."""

from aahook.color.ansi import color_support, colorize, create_gradient, rainbow, strip_colors
from aahook.color.engine import THEME_CACHE, ColorEngine, clear_theme_cache, theme_from_dict
from aahook.color.theme import (
    ColorRule,
    ColorSpec,
    ColorTheme,
    LineRange,
    RegionBox,
    ThemeMode,
    validate_theme,
)

__all__ = [
    "ColorEngine",
    "ColorRule",
    "ColorSpec",
    "ColorTheme",
    "LineRange",
    "RegionBox",
    "THEME_CACHE",
    "ThemeMode",
    "clear_theme_cache",
    "color_support",
    "colorize",
    "create_gradient",
    "rainbow",
    "strip_colors",
    "theme_from_dict",
    "validate_theme",
]
