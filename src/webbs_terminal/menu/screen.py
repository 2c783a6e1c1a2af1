"""Compose the ANSI stream for an interactive menu screen."""

from typing import Iterable

from webbs_terminal.codec.ansi_encoder import (
    AnsiEncoder,
    color_sequence,
    hide_cursor,
    move_cursor,
    show_cursor,
)
from webbs_terminal.core.cell import Cell
from webbs_terminal.core.grid import GridDocument
from webbs_terminal.menu.item import MenuItem

DEFAULT_PROMPT = "Select option: "


def overlay_items(doc: GridDocument, items: Iterable[MenuItem]) -> GridDocument:
    """
    Draw ``[K] Label`` for each item onto a copy of ``doc``.

    The hotkey letter uses the item's highlight colour so it stands
    out from the label.
    """
    screen = doc.copy()
    for item in items:
        screen.set_pen(item.fg, item.bg)
        screen.place_text(item.x, item.y, item.caption)
        screen.set_cell(item.x + 1, item.y, Cell(item.hotkey, item.highlight_fg, item.bg))
    return screen


def prompt_sequence(height: int, prompt: str = DEFAULT_PROMPT) -> str:
    """Park the cursor on the bottom row and print the input prompt."""
    return ''.join([
        hide_cursor(),
        move_cursor(1, height),
        color_sequence(7, 0),
        prompt,
        show_cursor(),
    ])


def compose_screen(
    doc: GridDocument,
    items: Iterable[MenuItem],
    encoder: AnsiEncoder | None = None,
    prompt: str = DEFAULT_PROMPT,
) -> str:
    """Full ANSI text for one menu: layout, item captions, prompt."""
    encoder = encoder or AnsiEncoder()
    screen = overlay_items(doc, items)
    return encoder.encode(screen) + prompt_sequence(doc.height, prompt)
