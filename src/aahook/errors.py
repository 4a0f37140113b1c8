"""Exceptions raised by aahook."""


class AahookError(Exception):
    """Base exception for aahook errors."""


class ThemeError(AahookError):
    """A theme file could not be read or decoded."""


class ThemeValidationError(ThemeError, ValueError):
    """A theme definition does not follow the theme schema."""


class ThemeNotFoundError(ThemeError, LookupError):
    """No theme with the requested name exists in any search location."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Theme not found: {name}")
        self.name = name


class ArtNotFoundError(AahookError, FileNotFoundError):
    """The requested art file does not exist."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Art not found: {name}")
        self.name = name


class AnimationNotFoundError(AahookError, LookupError):
    """No saved animation definition has the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Animation not found: {name}")
        self.name = name
