"""File I/O for ANSI art uploads and menu screens."""

from webbs_terminal.io.reader import load_art, load_grid
from webbs_terminal.io.writer import save_grid

__all__ = ["load_art", "load_grid", "save_grid"]
