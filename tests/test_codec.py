"""Tests for CP437 conversion and the ANSI decoder/encoder."""

import pytest

from webbs_terminal.codec.ansi_decoder import AnsiDecoder
from webbs_terminal.codec.ansi_encoder import (
    AnsiEncoder,
    color_sequence,
    move_cursor,
    to_transport,
)
from webbs_terminal.codec.cp437 import (
    cp437_to_unicode,
    is_printable,
    stream_to_unicode,
    unicode_to_cp437,
)
from webbs_terminal.core.cell import Cell
from webbs_terminal.core.grid import BoxStyle, GridDocument
from webbs_terminal.core.run import LINE_BREAK, StyledRun


class TestCp437:
    """Tests for the code page table."""

    def test_box_drawing(self) -> None:
        assert cp437_to_unicode(b"\xc9\xcd\xbb") == "╔═╗"
        assert unicode_to_cp437("╔═╗") == b"\xc9\xcd\xbb"

    def test_blocks(self) -> None:
        assert cp437_to_unicode(b"\xb0\xb1\xb2\xdb") == "░▒▓█"

    def test_ascii_passthrough(self) -> None:
        assert cp437_to_unicode(b"Hello") == "Hello"
        assert unicode_to_cp437("Hello") == b"Hello"

    def test_unmappable_becomes_question_mark(self) -> None:
        assert unicode_to_cp437("漢") == b"?"

    def test_stream_keeps_controls(self) -> None:
        assert stream_to_unicode(b"\x1b[0mA\r\n") == "\x1b[0mA\r\n"
        # The glyph table still maps them for display
        assert cp437_to_unicode(b"\x1b") == "←"

    def test_printable(self) -> None:
        assert is_printable("█")
        assert is_printable(" ")
        assert not is_printable("◙")  # Glyph for the LF byte
        assert not is_printable("♪")  # Glyph for the CR byte
        assert not is_printable("←")  # Glyph for the ESC byte
        assert not is_printable("漢")


class TestAnsiDecoder:
    """Tests for AnsiDecoder."""

    def test_bold_promotes_and_reset(self) -> None:
        tokens = AnsiDecoder().decode(b"\x1b[31;1mX\x1b[0mY")
        assert tokens == [
            StyledRun("X", fg=9, bg=0, bold=True),
            StyledRun("Y", fg=7, bg=0),
        ]

    def test_bold_keeps_bright_color(self) -> None:
        tokens = AnsiDecoder().decode(b"\x1b[1;91mA")
        assert tokens == [StyledRun("A", fg=9, bold=True)]

    def test_bold_off(self) -> None:
        tokens = AnsiDecoder().decode(b"\x1b[1;31mA\x1b[22mB")
        assert tokens == [StyledRun("A", fg=9, bold=True), StyledRun("B", fg=1)]

    def test_bright_codes(self) -> None:
        tokens = AnsiDecoder().decode(b"\x1b[93;104mA")
        assert tokens == [StyledRun("A", fg=11, bg=12)]

    def test_background(self) -> None:
        tokens = AnsiDecoder().decode(b"\x1b[44mA\x1b[49mB")
        assert tokens == [StyledRun("A", bg=4), StyledRun("B")]

    def test_blink(self) -> None:
        tokens = AnsiDecoder().decode(b"\x1b[5mA\x1b[25mB")
        assert tokens == [StyledRun("A", blink=True), StyledRun("B")]

    def test_empty_sgr_is_reset(self) -> None:
        tokens = AnsiDecoder().decode(b"\x1b[32mA\x1b[mB")
        assert tokens == [StyledRun("A", fg=2), StyledRun("B")]

    def test_unknown_sgr_ignored(self) -> None:
        tokens = AnsiDecoder().decode(b"\x1b[32mA\x1b[4mB")
        assert tokens == [StyledRun("AB", fg=2)]

    def test_line_feed(self) -> None:
        tokens = AnsiDecoder().decode(b"AB\nCD")
        assert tokens == [StyledRun("AB"), LINE_BREAK, StyledRun("CD")]

    def test_carriage_return_ignored(self) -> None:
        tokens = AnsiDecoder().decode(b"A\r\nB\r")
        assert tokens == [StyledRun("A"), LINE_BREAK, StyledRun("B")]

    def test_blank_lines_kept(self) -> None:
        tokens = AnsiDecoder().decode(b"A\n\nB")
        assert tokens == [StyledRun("A"), LINE_BREAK, LINE_BREAK, StyledRun("B")]

    def test_wraps_at_width(self) -> None:
        tokens = AnsiDecoder(4).decode(b"ABCDEF")
        assert tokens == [StyledRun("ABCD"), LINE_BREAK, StyledRun("EF")]

    def test_wrap_then_line_feed_is_one_break(self) -> None:
        tokens = AnsiDecoder(4).decode(b"ABCD\r\nEF")
        assert tokens == [StyledRun("ABCD"), LINE_BREAK, StyledRun("EF")]

    def test_cursor_and_erase_sequences_skipped(self) -> None:
        tokens = AnsiDecoder().decode(b"\x1b[2J\x1b[1;1HA\x1b[K\x1b[5CB")
        assert tokens == [StyledRun("AB")]

    def test_private_mode_sequences_skipped(self) -> None:
        tokens = AnsiDecoder().decode(b"\x1b[?25lA\x1b[?7h")
        assert tokens == [StyledRun("A")]

    def test_truncated_escape_abandoned(self) -> None:
        tokens = AnsiDecoder().decode(b"AB\x1b[31;4")
        assert tokens == [StyledRun("AB")]

    def test_trailing_escape_dropped(self) -> None:
        assert AnsiDecoder().decode(b"A\x1b") == [StyledRun("A")]

    def test_bare_escape_shown_as_glyph(self) -> None:
        assert AnsiDecoder().decode(b"A\x1b(B") == [StyledRun("A←(B")]
        assert AnsiDecoder().decode_text("\x1b\x1b[31mX") == [
            StyledRun("←"),
            StyledRun("X", fg=1),
        ]

    def test_code_page_glyphs(self) -> None:
        tokens = AnsiDecoder().decode(b"\xdb\xb2\x01")
        assert tokens == [StyledRun("█▓☺")]

    def test_decode_text(self) -> None:
        tokens = AnsiDecoder().decode_text("\x1b[36m█ok")
        assert tokens == [StyledRun("█ok", fg=6)]

    def test_empty_input(self) -> None:
        assert AnsiDecoder().decode(b"") == []

    def test_invalid_width(self) -> None:
        with pytest.raises(ValueError):
            AnsiDecoder(0)

    def test_decoder_is_reusable(self) -> None:
        decoder = AnsiDecoder()
        decoder.decode(b"\x1b[1;31mred")
        # No style leaks from the previous call
        assert decoder.decode(b"plain") == [StyledRun("plain")]


class TestAnsiEncoder:
    """Tests for AnsiEncoder."""

    def test_helpers(self) -> None:
        assert color_sequence(7, 0) == "\x1b[37;40m"
        assert color_sequence(14, 12) == "\x1b[96;104m"
        assert color_sequence(9) == "\x1b[91m"
        assert color_sequence(None, None) == ""
        assert move_cursor(1, 25) == "\x1b[25;1H"

    def test_minimal_grid(self) -> None:
        doc = GridDocument(2, 1)
        assert AnsiEncoder().encode(doc) == (
            "\x1b[2J\x1b[H"
            "\x1b[1;1H\x1b[37;40m  "
            "\x1b[0m"
        )

    def test_color_emitted_only_on_change(self) -> None:
        doc = GridDocument(3, 2)
        doc[1, 0] = Cell('A', 1, 0)
        out = AnsiEncoder().encode(doc)
        assert out.count("\x1b[37;40m") == 2
        assert out.count("\x1b[31;40m") == 1
        assert "\x1b[2;1H   " in out

    def test_row_positioning(self) -> None:
        out = AnsiEncoder().encode(GridDocument(1, 3))
        for row in (1, 2, 3):
            assert f"\x1b[{row};1H" in out

    def test_unprintable_written_as_question_mark(self) -> None:
        doc = GridDocument(2, 1)
        doc[0, 0] = Cell('漢')
        doc[1, 0] = Cell('◙')
        assert "\x1b[37;40m??" in AnsiEncoder().encode(doc)

    def test_options(self) -> None:
        out = AnsiEncoder(clear=False, reset_at_end=False).encode(GridDocument(1, 1))
        assert out == "\x1b[1;1H\x1b[37;40m "

    def test_encode_bytes(self) -> None:
        doc = GridDocument(1, 1)
        doc[0, 0] = Cell('█')
        assert b"\xdb" in AnsiEncoder().encode_bytes(doc)
        assert "█".encode("utf-8") in AnsiEncoder().encode_bytes(doc, encoding="utf-8")

    def test_to_transport(self) -> None:
        assert to_transport("\x1b[0m░", "CP-437") == b"\x1b[0m\xb0"
        assert to_transport("░", "utf-8") == "░".encode("utf-8")


class TestRoundTrip:
    """Decoding the encoder's output reproduces the grid."""

    @staticmethod
    def _roundtrip(doc: GridDocument) -> GridDocument:
        data = AnsiEncoder().encode_bytes(doc)
        return GridDocument.from_tokens(AnsiDecoder(doc.width).decode(data), doc.width, doc.height)

    def test_blank_grid(self) -> None:
        doc = GridDocument(80, 25)
        assert self._roundtrip(doc) == doc

    def test_menu_screen(self, main_screen: GridDocument) -> None:
        assert self._roundtrip(main_screen) == main_screen

    def test_all_printable_glyphs_and_colors(self) -> None:
        doc = GridDocument(16, 16)
        glyphs = [chr(c) for c in range(0x20, 0x7F)] + list("░▒▓█▀▄▌▐■☺☻♥♦♣♠•○◘♂♀♫☼►◄↕‼¶§▬↨↑↓→∟↔▲▼⌂ÇüéΓπΣσµτΦΘΩδ∞φε∩≡±≥≤⌠⌡÷≈°∙·√ⁿ² ")
        i = 0
        for y in range(16):
            for x in range(16):
                doc[x, y] = Cell(glyphs[i % len(glyphs)], (x + y) % 16, (x * 3 + y) % 16)
                i += 1
        assert self._roundtrip(doc) == doc

    def test_utf8_transport_via_decode_text(self) -> None:
        doc = GridDocument(4, 2)
        doc.set_pen(fg=10, bg=5).draw_box(0, 0, 3, 1, BoxStyle.DOUBLE)
        text = AnsiEncoder().encode_bytes(doc, encoding="utf-8").decode("utf-8")
        tokens = AnsiDecoder(4).decode_text(text)
        assert GridDocument.from_tokens(tokens, 4, 2) == doc
