"""Command line interface."""

from aahook.cli.app import create_app
from aahook.cli.main import main

__all__ = ["create_app", "main"]
