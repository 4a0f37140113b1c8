"""Apply color themes to ASCII art."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Sequence

from aahook import config
from aahook.color.ansi import colorize, strip_colors
from aahook.color.theme import (
    ColorRule,
    ColorSpec,
    ColorTheme,
    LineRange,
    RegionBox,
    ThemeMode,
    validate_theme,
)
from aahook.errors import ThemeError, ThemeNotFoundError

logger = logging.getLogger(__name__)

# Themes loaded by name, shared by every engine in the process
THEME_CACHE: dict[str, ColorTheme] = {}


def clear_theme_cache() -> None:
    """Forget every theme loaded so far."""
    THEME_CACHE.clear()


def theme_from_dict(data: Any, source: str = "<theme>") -> ColorTheme:
    """Build a theme from already-parsed JSON."""
    return ColorTheme.from_dict(data, source=source)


class ColorEngine:
    """
    Rewrites plain text into colored text according to a theme.

    Existing SGR sequences are always stripped before rules run, so
    applying a theme twice gives the same result as applying it once
    and switching themes leaves nothing behind from the previous one.

    Themes are looked up by name in the user theme directory first and
    then among the built-in themes; loaded themes are cached by name.
    """

    def __init__(
        self,
        themes_dir: Path | str | None = None,
        builtin_dirs: Sequence[Path | str] | None = None,
        cache: dict[str, ColorTheme] | None = None,
    ) -> None:
        self.themes_dir = Path(themes_dir) if themes_dir else config.get_themes_dir()
        if builtin_dirs is None:
            builtin_dirs = [config.get_builtin_themes_dir()]
        self.builtin_dirs = [Path(d) for d in builtin_dirs]
        self.cache = THEME_CACHE if cache is None else cache

    def apply_theme(self, art: str, theme: ColorTheme) -> str:
        """Apply a color theme to ASCII art."""
        clean = strip_colors(art)

        if theme.mode is ThemeMode.LINE:
            return self._apply_line_colors(clean, theme.rules)
        elif theme.mode is ThemeMode.PATTERN:
            return self._apply_pattern_colors(clean, theme.rules)
        elif theme.mode is ThemeMode.CHARACTER:
            return self._apply_character_colors(clean, theme.rules)
        elif theme.mode is ThemeMode.REGION:
            return self._apply_region_colors(clean, theme.rules)
        return clean

    def strip_colors(self, art: str) -> str:
        """Strip all color codes from ASCII art."""
        return strip_colors(art)

    def validate_theme(self, data: Any) -> bool:
        """Validate theme structure."""
        return validate_theme(data)

    def parse_theme(self, path: Path | str) -> ColorTheme:
        """
        Read, decode and validate a theme file.

        Raises ThemeError if the file cannot be read or is not JSON and
        ThemeValidationError if it does not follow the theme schema.
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ThemeError(f"Failed to read theme {path}: {e}") from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ThemeError(f"Failed to parse theme {path}: {e}") from e
        return theme_from_dict(data, source=str(path))

    def load_theme(self, name: str) -> ColorTheme:
        """Load a user or built-in theme by name, using the cache when possible."""
        if name in self.cache:
            logger.debug("Theme %s served from cache", name)
            return self.cache[name]

        for directory in self._search_dirs():
            path = directory / f"{name}.json"
            if path.is_file():
                theme = self.parse_theme(path)
                self.cache[name] = theme
                logger.debug("Loaded theme %s from %s", name, path)
                return theme

        raise ThemeNotFoundError(name)

    def list_themes(self) -> list[str]:
        """List user themes and built-in theme names."""
        themes: list[str] = []
        if self.themes_dir.is_dir():
            themes.extend(sorted(p.stem for p in self.themes_dir.glob("*.json")))
        for name in config.BUILTIN_THEMES:
            if name not in themes:
                themes.append(name)
        return themes

    def save_colored_art(self, art: str, name: str) -> Path:
        """Save colored art under the colored arts directory."""
        output_dir = config.get_colored_arts_dir()
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = output_dir / f"{name}.txt"
        output_path.write_text(art, encoding="utf-8")
        return output_path

    def _search_dirs(self) -> list[Path]:
        return [self.themes_dir, *self.builtin_dirs]

    def _apply_line_colors(self, art: str, rules: Sequence[ColorRule]) -> str:
        colored_lines = []
        for i, line in enumerate(art.split('\n')):
            for rule in rules:
                if isinstance(rule.match, LineRange) and rule.match.contains(i):
                    line = colorize(line, rule.color)
                    break
            colored_lines.append(line)
        return '\n'.join(colored_lines)

    def _apply_pattern_colors(self, art: str, rules: Sequence[ColorRule]) -> str:
        # Left-to-right scan; literal matches are consumed whole
        result: list[str] = []
        i = 0
        while i < len(art):
            char = art[i]
            step = 1
            piece = char
            for rule in rules:
                match = rule.match
                if isinstance(match, re.Pattern):
                    if match.search(char):
                        piece = colorize(char, rule.color)
                        break
                elif isinstance(match, str) and match:
                    if art.startswith(match, i):
                        piece = colorize(match, rule.color)
                        step = len(match)
                        break
            result.append(piece)
            i += step
        return ''.join(result)

    def _apply_character_colors(self, art: str, rules: Sequence[ColorRule]) -> str:
        result: list[str] = []
        for char in art:
            for rule in rules:
                if isinstance(rule.match, str) and rule.match == char:
                    char = colorize(char, rule.color)
                    break
            result.append(char)
        return ''.join(result)

    def _apply_region_colors(self, art: str, rules: Sequence[ColorRule]) -> str:
        grid = [list(line) for line in art.split('\n')]
        # Later regions replace earlier ones cell by cell
        colors: dict[tuple[int, int], ColorSpec] = {}

        for rule in rules:
            if not isinstance(rule.match, RegionBox):
                continue
            region = rule.match
            for y in region.rows(len(grid)):
                for x in region.columns(len(grid[y])):
                    colors[(x, y)] = rule.color

        for (x, y), color in colors.items():
            grid[y][x] = colorize(grid[y][x], color)

        return '\n'.join(''.join(row) for row in grid)
