"""Load ASCII art files."""

from pathlib import Path

from aahook import config
from aahook.errors import ArtNotFoundError

# Frame files are numbered <name>-1.txt, <name>-2.txt, ...
MAX_FRAMES = 100


def resolve_art(name: str | Path) -> Path:
    """
    Find an art file.

    ``name`` may be a path to a file, or the name of an installed art
    in the arts directory, with or without its ``.txt`` extension.
    """
    path = Path(name).expanduser()
    if path.is_file():
        return path

    arts_dir = config.get_arts_dir()
    for candidate in (arts_dir / str(name), arts_dir / f"{name}.txt"):
        if candidate.is_file():
            return candidate

    raise ArtNotFoundError(str(name))


def load_art(name: str | Path) -> str:
    """Read an art file as UTF-8 text."""
    return resolve_art(name).read_text(encoding="utf-8")


def load_frames(name: str | Path) -> list[str]:
    """
    Load the numbered frame files of an animation.

    Looks beside ``name`` first, then in the arts directory. Stops at
    the first missing number. Returns an empty list if no frames exist.
    """
    for base in (Path(name).expanduser(), config.get_arts_dir() / str(name)):
        stem = base.name[:-len(".txt")] if base.name.endswith(".txt") else base.name
        frames: list[str] = []
        for number in range(1, MAX_FRAMES + 1):
            frame_path = base.parent / f"{stem}-{number}.txt"
            if not frame_path.is_file():
                break
            frames.append(frame_path.read_text(encoding="utf-8"))
        if frames:
            return frames
    return []
