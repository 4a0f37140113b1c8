"""Tests for the command line interface."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from aahook.cli.app import create_app

runner = CliRunner()


@pytest.fixture
def art(tmp_path: Path) -> Path:
    path = tmp_path / "cat.txt"
    path.write_text(" /\\_/\\\n( o.o )", encoding="utf-8")
    return path


class TestAnimateCommand:
    """Tests for `aahook animate`."""

    def test_static_when_piped(self, art: Path) -> None:
        result = runner.invoke(create_app(), ["animate", str(art), "--type", "fade"])
        assert result.exit_code == 0
        assert "( o.o )" in result.output
        assert "\x1b[?25l" not in result.output

    def test_unknown_style_prints_art(self, art: Path) -> None:
        result = runner.invoke(create_app(), ["animate", str(art), "-t", "spin"])
        assert result.exit_code == 0
        assert "( o.o )" in result.output

    def test_missing_art(self) -> None:
        result = runner.invoke(create_app(), ["animate", "ghost"])
        assert result.exit_code == 1
        assert "Art not found: ghost" in result.output

    def test_missing_theme(self, art: Path) -> None:
        result = runner.invoke(create_app(), ["animate", str(art), "--theme", "nope"])
        assert result.exit_code == 1
        assert "Theme not found: nope" in result.output
        assert "Available themes" in result.output

    def test_bad_direction(self, art: Path) -> None:
        result = runner.invoke(create_app(), ["animate", str(art), "-d", "sideways"])
        assert result.exit_code == 1
        assert "Invalid option" in result.output

    def test_bad_pattern(self, art: Path) -> None:
        result = runner.invoke(create_app(), ["animate", str(art), "-t", "blink", "-p", "("])
        assert result.exit_code == 1
        assert "Invalid option" in result.output

    def test_save(self, art: Path, isolated_env: Path) -> None:
        result = runner.invoke(create_app(), ["animate", str(art), "--save"])
        assert result.exit_code == 0
        assert "Animation saved" in result.output
        assert (isolated_env / "animations" / "cat.json").is_file()

    def test_no_frames(self, art: Path) -> None:
        result = runner.invoke(create_app(), ["animate", str(art), "-t", "frames"])
        assert result.exit_code == 1
        assert "No frames found" in result.output

    def test_frames(self, tmp_path: Path) -> None:
        (tmp_path / "wave-1.txt").write_text("o/", encoding="utf-8")
        (tmp_path / "wave-2.txt").write_text("o|", encoding="utf-8")
        result = runner.invoke(create_app(), ["animate", str(tmp_path / "wave"), "-t", "frames", "--loop", "2"])
        assert result.exit_code == 0
        assert "o/\no|" in result.output


class TestColorizeCommand:
    """Tests for `aahook colorize`."""

    def test_default_rainbow(self, art: Path) -> None:
        result = runner.invoke(create_app(), ["colorize", str(art)])
        assert result.exit_code == 0
        assert "\x1b[31m /\\_/\\\x1b[0m" in result.output
        assert "\x1b[33m( o.o )\x1b[0m" in result.output

    def test_custom_theme(self, art: Path, tmp_path: Path) -> None:
        theme = tmp_path / "mine.json"
        theme.write_text(
            '{"name": "mine", "version": "1", "colors": {"mode": "character",'
            ' "rules": [{"match": "o", "color": {"fg": "blue"}}]}}',
            encoding="utf-8",
        )
        result = runner.invoke(create_app(), ["colorize", str(art), "--custom", str(theme)])
        assert result.exit_code == 0
        assert "( \x1b[34mo\x1b[0m.\x1b[34mo\x1b[0m )" in result.output

    def test_invalid_custom_theme(self, art: Path, tmp_path: Path) -> None:
        theme = tmp_path / "bad.json"
        theme.write_text('{"name": "bad"}', encoding="utf-8")
        result = runner.invoke(create_app(), ["colorize", str(art), "--custom", str(theme)])
        assert result.exit_code == 1
        assert "missing 'version'" in result.output

    def test_save(self, art: Path, isolated_env: Path) -> None:
        result = runner.invoke(create_app(), ["colorize", str(art), "--theme", "fire", "--save"])
        assert result.exit_code == 0
        saved = isolated_env / "arts" / "colored" / "cat-colored.txt"
        assert saved.is_file()
        assert "\x1b[" in saved.read_text(encoding="utf-8")

    def test_save_with_output_name(self, art: Path, isolated_env: Path) -> None:
        result = runner.invoke(create_app(), ["colorize", str(art), "--save", "-o", "kitty"])
        assert result.exit_code == 0
        assert (isolated_env / "arts" / "colored" / "kitty.txt").is_file()


class TestThemesCommand:
    """Tests for `aahook themes`."""

    def test_lists_builtins(self) -> None:
        result = runner.invoke(create_app(), ["themes"])
        assert result.exit_code == 0
        for name in ("rainbow", "neon", "ocean", "fire", "retro"):
            assert name in result.output

    def test_lists_user_themes(self, isolated_env: Path) -> None:
        themes_dir = isolated_env / "themes"
        themes_dir.mkdir(parents=True)
        (themes_dir / "sunset.json").write_text("{}", encoding="utf-8")
        result = runner.invoke(create_app(), ["--verbose", "themes"])
        assert result.exit_code == 0
        assert "sunset (user)" in result.output

    def test_verbose_logging(self, art: Path) -> None:
        result = runner.invoke(create_app(), ["--verbose", "colorize", str(art)])
        assert result.exit_code == 0


class TestAnimationsCommand:
    """Tests for `aahook animations`."""

    def test_empty(self) -> None:
        result = runner.invoke(create_app(), ["animations"])
        assert result.exit_code == 0
        assert "No saved animations found" in result.output

    def test_lists_saved(self, art: Path) -> None:
        runner.invoke(create_app(), ["animate", str(art), "--save"])
        result = runner.invoke(create_app(), ["animations"])
        assert result.exit_code == 0
        assert "cat (typing)" in result.output
