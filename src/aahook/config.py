"""Filesystem locations for user themes and arts."""

import os
from importlib import resources
from pathlib import Path

# Environment variable overriding the configuration directory
HOME_ENV_VAR = "AAHOOK_HOME"

# Themes shipped inside the package (aahook/color/themes/<name>.json)
BUILTIN_THEMES: tuple[str, ...] = ("rainbow", "neon", "ocean", "fire", "retro")


def get_config_dir() -> Path:
    """
    Get the aahook configuration directory.

    Set AAHOOK_HOME to use a custom location; defaults to ~/.aahook.
    """
    if env_path := os.environ.get(HOME_ENV_VAR):
        return Path(env_path).expanduser()
    return Path.home() / ".aahook"


def get_themes_dir() -> Path:
    """Directory searched first for ``<name>.json`` theme files."""
    return get_config_dir() / "themes"


def get_arts_dir() -> Path:
    """Directory holding installed art files."""
    return get_config_dir() / "arts"


def get_colored_arts_dir() -> Path:
    """Directory where colorized arts are saved."""
    return get_arts_dir() / "colored"


def get_builtin_themes_dir() -> Path:
    """Directory of the theme files bundled with the package."""
    return Path(str(resources.files("aahook.color") / "themes"))


def get_animations_dir() -> Path:
    """Directory where saved animation definitions live."""
    return get_config_dir() / "animations"
