"""Tests for file loading/saving and configuration."""

from pathlib import Path

import pytest

import webbs_terminal as bbs
from webbs_terminal.config import EngineConfig
from webbs_terminal.core.grid import GridDocument
from webbs_terminal.io import load_art, load_grid, save_grid
from webbs_terminal.sauce import SauceRecord, write_sauce


class TestLoadArt:
    """Tests for the upload ingest path."""

    def test_bytes_without_sauce(self) -> None:
        art = load_art(b"\x1b[1;33mHi\x1b[0m\r\nthere")
        assert art.sauce is None
        assert art.width == 80
        assert art.text == "Hi\nthere"
        assert art.tokens[0].fg == 11
        assert art.title == "Untitled"

    def test_sauce_width_drives_decoder(self) -> None:
        data = write_sauce(SauceRecord(title="Narrow", tinfo1=4, tinfo2=2), b"ABCDEFGH")
        art = load_art(data)
        assert art.width == 4
        assert art.text == "ABCD\nEFGH"
        assert art.payload == b"ABCDEFGH"
        assert art.title == "Narrow"

    def test_explicit_width_wins(self) -> None:
        data = write_sauce(SauceRecord(tinfo1=4), b"ABCDEFGH")
        assert load_art(data, width=8).text == "ABCDEFGH"

    def test_sauce_never_decoded_as_text(self) -> None:
        data = write_sauce(SauceRecord(title="Hidden"), b"art", comments=["a comment"])
        art = load_art(data)
        assert art.text == "art"
        assert art.comments == ["a comment"]

    def test_renders(self) -> None:
        art = load_art(b"\x1b[31m<red>")
        assert "&lt;red&gt;" in art.render_to_html()
        assert art.render_to_text() == "<red>"
        assert art.render().startswith("\x1b[0;31;49m")


class TestSaveGrid:
    """Tests for exporting menu screens."""

    def test_ans_roundtrip(self, tmp_path: Path, main_screen: GridDocument) -> None:
        path = tmp_path / "main.ans"
        save_grid(main_screen, path)
        art = load_art(path)
        assert art.sauce is not None
        assert art.sauce.title == "main"
        assert (art.sauce.width, art.sauce.height) == (main_screen.width, main_screen.height)
        assert art.source_path == path
        rebuilt = GridDocument.from_tokens(art.tokens, main_screen.width, main_screen.height)
        assert rebuilt == main_screen

    def test_custom_sauce(self, tmp_path: Path, main_screen: GridDocument) -> None:
        path = tmp_path / "main.ans"
        save_grid(main_screen, path, sauce=SauceRecord(title="Main Menu", author="sysop",
                                                        tinfo1=30, tinfo2=6))
        art = bbs.ArtFile.load(path)
        assert art.title == "Main Menu"
        assert art.author == "sysop"

    def test_without_sauce(self, tmp_path: Path, main_screen: GridDocument) -> None:
        path = tmp_path / "main.ans"
        save_grid(main_screen, path, include_sauce=False)
        assert load_art(path).sauce is None

    def test_json_roundtrip(self, tmp_path: Path, main_screen: GridDocument) -> None:
        path = tmp_path / "main.json"
        save_grid(main_screen, path)
        assert load_grid(path) == main_screen


class TestEngineConfig:
    """Tests for EngineConfig."""

    def test_defaults(self) -> None:
        config = EngineConfig.from_env({})
        assert config == EngineConfig()
        assert (config.width, config.height) == (80, 25)
        assert config.session_timeout == 900
        assert config.prompt == "Select option: "
        assert config.transport_encoding == "cp437"

    def test_from_env(self) -> None:
        config = EngineConfig.from_env({
            "WEBBS_WIDTH": "132",
            "WEBBS_HEIGHT": "50",
            "WEBBS_PROMPT": "Command: ",
            "WEBBS_ENCODING": "utf-8",
            "WEBBS_SESSION_TIMEOUT": "60",
        })
        assert (config.width, config.height) == (132, 50)
        assert config.prompt == "Command: "
        assert config.transport_encoding == "utf-8"
        assert config.session_timeout == 60

    def test_bad_integer(self) -> None:
        with pytest.raises(ValueError, match="WEBBS_WIDTH"):
            EngineConfig.from_env({"WEBBS_WIDTH": "wide"})

    def test_bad_size(self) -> None:
        with pytest.raises(ValueError):
            EngineConfig(width=0)


@pytest.mark.external
class TestExternalFiles:
    """Tests that require external .ans files."""

    def test_load_single_file(self, single_ans_file: Path) -> None:
        art = load_art(single_ans_file)
        assert art.width > 0
        assert art.tokens

    def test_render_to_html(self, single_ans_file: Path) -> None:
        html = load_art(single_ans_file).render_to_html()
        assert html.startswith('<')
        assert '</div>' in html

    def test_render_to_text(self, single_ans_file: Path) -> None:
        text = load_art(single_ans_file).render_to_text()
        # Plain text should not contain ANSI escapes
        assert '\x1b[' not in text


@pytest.mark.external
@pytest.mark.slow
class TestAllFiles:
    """Decode every file in the external directory."""

    def test_decode(self, ans_file: Path) -> None:
        art = load_art(ans_file)
        for token in art.tokens:
            if hasattr(token, "fg"):
                assert 0 <= token.fg <= 15
                assert 0 <= token.bg <= 15
