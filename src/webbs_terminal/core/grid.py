"""GridDocument - fixed-size cell grid for one menu screen."""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Iterable, Iterator

from webbs_terminal.core.cell import DEFAULT_CELL, Cell
from webbs_terminal.core.color import check_color
from webbs_terminal.core.constants import (
    BOX_CHARS,
    DEFAULT_BG,
    DEFAULT_FG,
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
)
from webbs_terminal.core.run import LINE_BREAK, LineBreak, StyledRun, Token

logger = logging.getLogger(__name__)


class BoxStyle(Enum):
    """Line style for box drawing."""
    SINGLE = "single"
    DOUBLE = "double"


class GridDocument:
    """
    A width x height grid of Cells representing one menu screen.

    This is the canonical form of an authored screen: it is what
    gets persisted, edited and encoded for terminals. The grid has
    a fixed size; writes outside it are ignored so stray
    coordinates from an editor never corrupt the layout.

    Drawing operations (place_text, draw_box) use the current pen,
    set with set_pen().

    Example:
        doc = GridDocument(80, 25)
        doc.set_pen(fg=14)
        doc.draw_box(20, 5, 59, 19, BoxStyle.DOUBLE)
        doc.place_text(24, 7, "[M] Messages")
    """

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.fg = DEFAULT_FG
        self.bg = DEFAULT_BG
        self._rows: list[list[Cell]] = [
            [DEFAULT_CELL] * width for _ in range(height)
        ]

    # -------------------------------------------------------------------------
    # Cell access
    # -------------------------------------------------------------------------

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell(self, x: int, y: int) -> Cell:
        """Get the cell at position (x, y).

        Raises:
            IndexError: If (x, y) is outside the grid
        """
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) out of bounds ({self.width}x{self.height})")
        return self._rows[y][x]

    def set_cell(self, x: int, y: int, cell: Cell) -> None:
        """Set the cell at position (x, y); out-of-bounds writes are ignored."""
        if self.in_bounds(x, y):
            self._rows[y][x] = cell

    def __getitem__(self, pos: tuple[int, int]) -> Cell:
        """Get cell using indexing: doc[x, y]."""
        x, y = pos
        return self.get_cell(x, y)

    def __setitem__(self, pos: tuple[int, int], cell: Cell) -> None:
        """Set cell using indexing: doc[x, y] = cell."""
        x, y = pos
        self.set_cell(x, y, cell)

    def rows(self) -> Iterator[list[Cell]]:
        """Iterate over rows, top to bottom."""
        yield from self._rows

    def cells(self) -> Iterator[tuple[int, int, Cell]]:
        """Iterate over all cells as (x, y, cell) tuples."""
        for y, row in enumerate(self._rows):
            for x, cell in enumerate(row):
                yield x, y, cell

    # -------------------------------------------------------------------------
    # Pen
    # -------------------------------------------------------------------------

    def set_pen(self, fg: int | None = None, bg: int | None = None) -> GridDocument:
        """Set the colors used by place_text and draw_box."""
        if fg is not None:
            self.fg = check_color(fg, "fg")
        if bg is not None:
            self.bg = check_color(bg, "bg")
        return self

    def pen_cell(self, char: str) -> Cell:
        """A cell holding ``char`` in the current pen colors."""
        return Cell(char, self.fg, self.bg)

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------

    def place_text(self, x: int, y: int, text: str) -> int:
        """
        Write text left to right starting at (x, y) with the current pen.

        Text is clipped at the end of the row; it never wraps onto
        the next one. Returns the number of cells written.
        """
        written = 0
        for i, char in enumerate(text):
            cx = x + i
            if cx >= self.width:
                break
            if self.in_bounds(cx, y):
                self._rows[y][cx] = self.pen_cell(char)
                written += 1
        return written

    def flood_fill(self, x: int, y: int, cell: Cell) -> int:
        """
        Replace the 4-connected region containing (x, y) with ``cell``.

        The region is every cell reachable through neighbours whose
        character, foreground and background all equal the start
        cell's. Returns the number of cells changed.
        """
        if not self.in_bounds(x, y):
            return 0
        target = self._rows[y][x]
        if target == cell:
            return 0

        filled = 0
        stack = [(x, y)]
        while stack:
            cx, cy = stack.pop()
            if not self.in_bounds(cx, cy):
                continue
            if self._rows[cy][cx] != target:
                continue
            self._rows[cy][cx] = cell
            filled += 1
            stack.extend(((cx + 1, cy), (cx - 1, cy), (cx, cy + 1), (cx, cy - 1)))
        return filled

    def draw_box(
        self,
        x1: int,
        y1: int,
        x2: int,
        y2: int,
        style: BoxStyle | str = BoxStyle.SINGLE,
    ) -> None:
        """
        Draw a box outline between two opposite corners.

        The corners may be given in any order. Parts of the box that
        fall outside the grid are clipped.
        """
        chars = BOX_CHARS[BoxStyle(style).value]
        min_x, max_x = min(x1, x2), max(x1, x2)
        min_y, max_y = min(y1, y2), max(y1, y2)

        # Corners
        self.set_cell(min_x, min_y, self.pen_cell(chars["top_left"]))
        self.set_cell(max_x, min_y, self.pen_cell(chars["top_right"]))
        self.set_cell(min_x, max_y, self.pen_cell(chars["bottom_left"]))
        self.set_cell(max_x, max_y, self.pen_cell(chars["bottom_right"]))

        # Horizontal edges
        horizontal = self.pen_cell(chars["horizontal"])
        for x in range(min_x + 1, max_x):
            self.set_cell(x, min_y, horizontal)
            self.set_cell(x, max_y, horizontal)

        # Vertical edges
        vertical = self.pen_cell(chars["vertical"])
        for y in range(min_y + 1, max_y):
            self.set_cell(min_x, y, vertical)
            self.set_cell(max_x, y, vertical)

    def fill_rect(self, x: int, y: int, w: int, h: int, cell: Cell) -> None:
        """Fill a rectangle with a cell, clipped to the grid."""
        for row in range(max(y, 0), min(y + h, self.height)):
            for col in range(max(x, 0), min(x + w, self.width)):
                self._rows[row][col] = cell

    def clear(self, cell: Cell = DEFAULT_CELL) -> None:
        """Reset every cell."""
        self._rows = [[cell] * self.width for _ in range(self.height)]

    def copy(self) -> GridDocument:
        """Create a copy of this grid (cells are immutable, rows are not shared)."""
        new = GridDocument(self.width, self.height)
        new.fg = self.fg
        new.bg = self.bg
        new._rows = [list(row) for row in self._rows]
        return new

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def to_tokens(self) -> list[Token]:
        """Express the grid as styled runs, one line per row."""
        tokens: list[Token] = []
        for row in self._rows:
            chars: list[str] = []
            style: tuple[int, int] | None = None
            for cell in row:
                if (cell.fg, cell.bg) != style and chars:
                    tokens.append(StyledRun(''.join(chars), style[0], style[1]))
                    chars = []
                style = (cell.fg, cell.bg)
                chars.append(cell.char)
            if chars and style is not None:
                tokens.append(StyledRun(''.join(chars), style[0], style[1]))
            tokens.append(LINE_BREAK)
        return tokens

    @classmethod
    def from_tokens(
        cls,
        tokens: Iterable[Token],
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
    ) -> GridDocument:
        """
        Paint decoded runs into a new grid.

        Each LineBreak moves to the start of the next row; text past
        the right edge or below the last row is dropped.
        """
        doc = cls(width, height)
        x = y = 0
        for token in tokens:
            if isinstance(token, LineBreak):
                x = 0
                y += 1
                continue
            if y >= height:
                continue
            for char in token.text:
                if x < width:
                    doc._rows[y][x] = Cell(char, token.fg, token.bg)
                x += 1
        return doc

    def to_dict(self) -> dict:
        """Serialize to the persisted layout shape."""
        return {
            "width": self.width,
            "height": self.height,
            "cells": [[cell.to_dict() for cell in row] for row in self._rows],
        }

    @classmethod
    def from_dict(
        cls,
        data: dict | list,
        width: int | None = None,
        height: int | None = None,
    ) -> GridDocument:
        """
        Load a persisted layout.

        Accepts either the ``to_dict`` shape or a bare list of rows
        (the legacy ``grid_data`` column). Missing rows and cells are
        left at their defaults; malformed cells load as defaults.
        """
        if isinstance(data, dict):
            rows = data.get("cells") or []
            width = width or data.get("width")
            height = height or data.get("height")
        else:
            rows = data
        if not isinstance(rows, list):
            rows = []
        height = height or len(rows) or DEFAULT_HEIGHT
        width = width or max((len(r) for r in rows if isinstance(r, list)), default=0) or DEFAULT_WIDTH

        doc = cls(width, height)
        skipped = 0
        for y, row in enumerate(rows[:height]):
            if not isinstance(row, list):
                skipped += 1
                continue
            for x, raw in enumerate(row[:width]):
                doc._rows[y][x] = Cell.coerce(raw)
        if skipped:
            logger.debug("Ignored %d malformed rows while loading layout", skipped)
        return doc

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> GridDocument:
        return cls.from_dict(json.loads(text))

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridDocument):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self._rows == other._rows
        )

    def __repr__(self) -> str:
        return f"GridDocument(width={self.width}, height={self.height})"
