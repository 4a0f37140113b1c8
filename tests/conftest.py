"""Shared fixtures: fake terminal streams, recorded timing and an isolated home."""

import io
from pathlib import Path
from typing import Callable, Iterator, Optional

import pytest

from aahook.animation.engine import AnimationEngine, CancellationToken
from aahook.animation.options import AnimationOptions
from aahook.animation.timing import TimingController, TimingOptions
from aahook.color.engine import clear_theme_cache
from aahook.terminal.surface import Terminal


class FakeStream(io.StringIO):
    """In-memory output stream that can pretend to be a TTY."""

    def __init__(self, tty: bool = True) -> None:
        super().__init__()
        self.tty = tty

    def isatty(self) -> bool:
        return self.tty


class RecordingTiming(TimingController):
    """
    Timing controller that records waits instead of sleeping.

    With ``cancel_after`` set, the token is cancelled once that many
    waits have happened, simulating Ctrl+C mid-animation.
    """

    def __init__(
        self,
        options: Optional[TimingOptions] = None,
        token: Optional[CancellationToken] = None,
        cancel_after: Optional[int] = None,
    ) -> None:
        super().__init__(options)
        self.waits: list[float] = []
        self.token = token
        self.cancel_after = cancel_after

    async def wait(self, ms: float) -> None:
        self.waits.append(ms)
        if self.token is not None and self.cancel_after is not None:
            if len(self.waits) >= self.cancel_after:
                self.token.cancel()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point AAHOOK_HOME at a temp dir and give every test a color-capable, non-CI terminal env."""
    home = tmp_path / "aahook-home"
    monkeypatch.setenv("AAHOOK_HOME", str(home))
    monkeypatch.delenv("CI", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("COLORTERM", raising=False)
    monkeypatch.setenv("TERM", "xterm-256color")
    clear_theme_cache()
    yield home
    clear_theme_cache()


@pytest.fixture
def stream() -> FakeStream:
    return FakeStream(tty=True)


@pytest.fixture
def make_engine(stream: FakeStream) -> Callable[..., AnimationEngine]:
    """Factory for engines writing to the fake stream with recorded timing."""

    def factory(
        options: Optional[AnimationOptions] = None,
        cancel_after: Optional[int] = None,
        output: Optional[FakeStream] = None,
    ) -> AnimationEngine:
        options = options or AnimationOptions()
        token = CancellationToken()
        timing = RecordingTiming(options.timing, token=token, cancel_after=cancel_after)
        return AnimationEngine(
            options,
            terminal=Terminal(output if output is not None else stream),
            timing=timing,
            token=token,
            handle_interrupts=False,
        )

    return factory


@pytest.fixture
def arts_dir(isolated_env: Path) -> Path:
    path = isolated_env / "arts"
    path.mkdir(parents=True)
    return path
