"""Typer CLI application."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from aahook.animation.engine import AnimationEngine
from aahook.animation.options import AnimationOptions, AnimationStyle
from aahook.color.engine import ColorEngine
from aahook.config import BUILTIN_THEMES
from aahook.errors import ArtNotFoundError, ThemeError
from aahook.io.animations import list_animations, save_animation
from aahook.io.reader import load_art, load_frames


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="aahook",
        help="Animate and colorize ASCII art in the terminal.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console()
    err_console = Console(stderr=True)

    def fail(message: str) -> typer.Exit:
        err_console.print(f"[red]{escape(message)}[/]", soft_wrap=True)
        return typer.Exit(1)

    @app.callback()
    def main_options(
        verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output to stderr")] = False,
    ) -> None:
        """Animate and colorize ASCII art in the terminal."""
        if verbose:
            logging.basicConfig(
                level=logging.DEBUG,
                format="%(name)s: %(message)s",
                handlers=[RichHandler(console=err_console, show_path=False)],
            )

    @app.command()
    def animate(
        art: Annotated[str, typer.Argument(help="Art file or installed art name")],
        style: Annotated[str, typer.Option("--type", "-t", help="typing, fade, frames, blink or slide")] = "typing",
        speed: Annotated[Optional[float], typer.Option("--speed", "-s", help="Characters or lines per second")] = None,
        fps: Annotated[Optional[float], typer.Option("--fps", help="Frames per second for frame animation")] = None,
        loop: Annotated[Optional[str], typer.Option("--loop", "-l", help="Loop count or 'infinite'")] = None,
        direction: Annotated[Optional[str], typer.Option("--direction", "-d", help="left, right, top, bottom, up or down")] = None,
        theme: Annotated[Optional[str], typer.Option("--theme", help="Color theme applied before animating")] = None,
        pattern: Annotated[Optional[str], typer.Option("--pattern", "-p", help="Regex of spans to blink (blink only)")] = None,
        preview: Annotated[bool, typer.Option("--preview", help="Animate even when stdout is not a terminal")] = False,
        save: Annotated[bool, typer.Option("--save", help="Save the animation definition for this art")] = False,
    ) -> None:
        """Play an animation of ASCII art."""
        try:
            options = AnimationOptions.from_flat({
                "speed": speed,
                "fps": fps,
                "loop": loop,
                "direction": direction,
                "theme": theme,
                "pattern": pattern,
                "preview": preview,
                "save": save,
            })
        except ValueError as e:
            raise fail(f"Invalid option: {e}")

        try:
            if AnimationStyle.parse(style) is AnimationStyle.FRAMES:
                content: str | list[str] = load_frames(art)
                if not content:
                    raise fail(f"No frames found for {art} (expected {art}-1.txt, {art}-2.txt, ...)")
            else:
                content = load_art(art)

            with AnimationEngine(options) as engine:
                asyncio.run(engine.animate(content, style))
        except ArtNotFoundError as e:
            raise fail(str(e))
        except ThemeError as e:
            err_console.print(f"[red]{escape(str(e))}[/]", soft_wrap=True)
            err_console.print(f"Available themes: {', '.join(ColorEngine().list_themes())}")
            raise typer.Exit(1)

        if options.save:
            saved_path = save_animation(Path(art).stem, style, options, speed)
            console.print(f"[green]Animation saved to {escape(str(saved_path))}[/]", soft_wrap=True)

    @app.command()
    def colorize(
        art: Annotated[str, typer.Argument(help="Art file or installed art name")],
        theme: Annotated[Optional[str], typer.Option("--theme", help="Theme name (default: rainbow)")] = None,
        custom: Annotated[Optional[Path], typer.Option("--custom", "-c", help="Path to a theme JSON file")] = None,
        save: Annotated[bool, typer.Option("--save", help="Save the colored art")] = False,
        output: Annotated[Optional[str], typer.Option("--output", "-o", help="Name for the saved art")] = None,
    ) -> None:
        """Apply a color theme to ASCII art."""
        engine = ColorEngine()
        try:
            content = load_art(art)
            if custom is not None:
                color_theme = engine.parse_theme(custom)
            else:
                color_theme = engine.load_theme(theme or "rainbow")
        except (ArtNotFoundError, ThemeError) as e:
            raise fail(str(e))

        colored = engine.apply_theme(content, color_theme)
        print(colored)

        if save:
            name = output or f"{Path(art).stem}-colored"
            saved_path = engine.save_colored_art(colored, name)
            console.print(f"[green]Saved colored art to {escape(str(saved_path))}[/]", soft_wrap=True)

    @app.command()
    def themes() -> None:
        """List available color themes."""
        for name in ColorEngine().list_themes():
            marker = "" if name in BUILTIN_THEMES else " [dim](user)[/]"
            console.print(f"  {escape(name)}{marker}")

    @app.command()
    def animations() -> None:
        """List saved animations."""
        saved = list_animations()
        if not saved:
            console.print("No saved animations found")
            return
        for name, kind in saved:
            console.print(f"  {escape(name)} [dim]({escape(kind)})[/]")

    return app
