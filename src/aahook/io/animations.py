"""Save and list animation definitions."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from aahook import config
from aahook.animation.options import AnimationOptions, AnimationStyle
from aahook.animation.timing import INFINITE
from aahook.errors import AahookError, AnimationNotFoundError

logger = logging.getLogger(__name__)

DEFINITION_VERSION = "1.0.0"


def animation_definition(
    name: str,
    style: AnimationStyle | str,
    options: AnimationOptions,
    speed: float | None = None,
) -> dict[str, Any]:
    """Describe an animation as the JSON written to the animations directory."""
    kind = AnimationStyle.parse(style)
    timing = options.timing
    loop = timing.loop if timing.loop is not None else 1
    return {
        "name": name,
        "version": DEFINITION_VERSION,
        "type": kind.value if kind else str(style),
        "fps": timing.fps,
        "loop": "infinite" if loop == INFINITE else loop,
        "effects": {
            "direction": options.direction.value if options.direction else None,
            "pattern": options.pattern,
        },
        "timing": {
            "speed": speed,
            "char_delay": timing.char_delay,
            "line_delay": timing.line_delay,
        },
        "theme": options.theme,
    }


def save_animation(
    name: str,
    style: AnimationStyle | str,
    options: AnimationOptions,
    speed: float | None = None,
) -> Path:
    """Write ``<animations dir>/<name>.json`` and return its path."""
    output_dir = config.get_animations_dir()
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{name}.json"
    definition = animation_definition(name, style, options, speed)
    path.write_text(json.dumps(definition, indent=2), encoding="utf-8")
    logger.debug("Saved animation %s to %s", name, path)
    return path


def load_animation(name: str) -> dict[str, Any]:
    """Read a saved animation definition."""
    path = config.get_animations_dir() / f"{name}.json"
    if not path.is_file():
        raise AnimationNotFoundError(name)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise AahookError(f"Failed to read animation {path}: {e}") from e
    if not isinstance(data, dict):
        raise AahookError(f"Invalid animation {path}: expected a JSON object")
    return data


def list_animations() -> list[tuple[str, str]]:
    """
    List saved animations as ``(name, type)`` pairs, sorted by name.

    Unreadable definitions are logged and left out.
    """
    animations_dir = config.get_animations_dir()
    if not animations_dir.is_dir():
        return []

    animations = []
    for path in sorted(animations_dir.glob("*.json")):
        try:
            definition = load_animation(path.stem)
        except AahookError as e:
            logger.warning("Skipping animation %s: %s", path.stem, e)
            continue
        animations.append((path.stem, str(definition.get("type", "typing"))))
    return animations
