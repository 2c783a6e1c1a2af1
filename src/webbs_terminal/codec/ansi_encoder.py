"""Serialize grid documents to minimal ANSI streams."""

from __future__ import annotations

from typing import TYPE_CHECKING

from webbs_terminal.codec.cp437 import is_printable, unicode_to_cp437
from webbs_terminal.core.color import Color
from webbs_terminal.core.constants import (
    CLEAR_SCREEN,
    CSI,
    HIDE_CURSOR,
    RESET,
    SHOW_CURSOR,
)

if TYPE_CHECKING:
    from webbs_terminal.core.grid import GridDocument


def color_sequence(fg: int | None, bg: int | None = None) -> str:
    """SGR sequence selecting palette colors; either side may be omitted."""
    codes: list[str] = []
    if fg is not None:
        codes.append(str(Color(fg).to_sgr_fg()))
    if bg is not None:
        codes.append(str(Color(bg).to_sgr_bg()))
    if not codes:
        return ''
    return f"{CSI}{';'.join(codes)}m"


def move_cursor(x: int, y: int) -> str:
    """Cursor position sequence; coordinates are 1-based."""
    return f"{CSI}{y};{x}H"


def clear_screen() -> str:
    return CLEAR_SCREEN


def reset() -> str:
    return RESET


def hide_cursor() -> str:
    return HIDE_CURSOR


def show_cursor() -> str:
    return SHOW_CURSOR


class AnsiEncoder:
    """
    Render a GridDocument to ANSI escape sequences.

    Output is minimal: an SGR sequence is written only when the
    foreground or background differs from the previously written
    cell. Each row starts with an explicit cursor position so the
    stream paints the same screen regardless of terminal wrap mode.
    """

    def __init__(self, clear: bool = True, reset_at_end: bool = True):
        self.clear = clear
        self.reset_at_end = reset_at_end

    def encode(self, doc: GridDocument) -> str:
        """Encode the grid as ANSI text."""
        parts: list[str] = []
        if self.clear:
            parts.append(CLEAR_SCREEN)

        last: tuple[int, int] | None = None
        for y, row in enumerate(doc.rows()):
            parts.append(move_cursor(1, y + 1))
            for cell in row:
                colors = (cell.fg, cell.bg)
                if colors != last:
                    parts.append(color_sequence(cell.fg, cell.bg))
                    last = colors
                parts.append(cell.char if is_printable(cell.char) else '?')

        if self.reset_at_end:
            parts.append(RESET)
        return ''.join(parts)

    def encode_bytes(self, doc: GridDocument, encoding: str = "cp437") -> bytes:
        """Encode the grid for transmission."""
        return to_transport(self.encode(doc), encoding)


def to_transport(text: str, encoding: str = "cp437") -> bytes:
    """
    Encode ANSI text for a client connection.

    ``cp437`` produces a classic .ANS byte stream through the code
    page table; any other Python codec name (``utf-8`` for web
    terminals) encodes the text directly.
    """
    if encoding.lower().replace('-', '') == "cp437":
        return unicode_to_cp437(text)
    return text.encode(encoding)
