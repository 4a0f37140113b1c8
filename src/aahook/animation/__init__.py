"""Terminal animation: styles, timing and the animation engine."""

from aahook.animation.engine import AnimationEngine, CancellationToken, RenderSession
from aahook.animation.options import AnimationOptions, AnimationStyle, Direction
from aahook.animation.timing import INFINITE, Easing, TimingController, TimingOptions

__all__ = [
    "AnimationEngine",
    "AnimationOptions",
    "AnimationStyle",
    "CancellationToken",
    "Direction",
    "Easing",
    "INFINITE",
    "RenderSession",
    "TimingController",
    "TimingOptions",
]
