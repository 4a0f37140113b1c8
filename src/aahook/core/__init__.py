"""Core value types shared by the terminal, color and animation layers."""

from aahook.core.color import Color, ColorMode

__all__ = ["Color", "ColorMode"]
