"""File I/O for art files and saved animations."""

from aahook.io.animations import animation_definition, list_animations, load_animation, save_animation
from aahook.io.reader import load_art, load_frames, resolve_art

__all__ = [
    "animation_definition",
    "list_animations",
    "load_animation",
    "load_art",
    "load_frames",
    "resolve_art",
    "save_animation",
]
