"""Core data structures for art and menu screens."""

from webbs_terminal.core.cell import Cell
from webbs_terminal.core.color import Color
from webbs_terminal.core.document import ArtFile
from webbs_terminal.core.grid import BoxStyle, GridDocument
from webbs_terminal.core.run import LINE_BREAK, LineBreak, StyledRun

__all__ = ["Cell", "Color", "ArtFile", "BoxStyle", "GridDocument", "StyledRun", "LineBreak", "LINE_BREAK"]
