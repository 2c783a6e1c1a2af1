"""
webbs-terminal: ANSI art and menu engine for a web BBS

Decode uploaded BBS art for previews, author menu screens as cell
grids, encode them for terminal clients and navigate between menus
by hotkey.

Quick Start:
    >>> import webbs_terminal as bbs
    >>> art = bbs.load_art("welcome.ans")
    >>> html = art.render_to_html()
    >>> doc = bbs.GridDocument(80, 25)
    >>> doc.set_pen(fg=14).draw_box(0, 0, 79, 24)
    >>> data = bbs.AnsiEncoder().encode_bytes(doc)

Features:
    - CP437 code page and SAUCE metadata reading and writing
    - ANSI decoding to styled runs and HTML previews
    - Grid documents with box drawing, text and flood fill
    - Minimal ANSI encoding for terminal delivery
    - Hotkey menu navigation with per-user access levels
"""

__version__ = "0.1.0"

# Core types
from webbs_terminal.core.cell import Cell
from webbs_terminal.core.color import Color
from webbs_terminal.core.document import ArtFile
from webbs_terminal.core.grid import BoxStyle, GridDocument
from webbs_terminal.core.run import LINE_BREAK, LineBreak, StyledRun

# Codecs
from webbs_terminal.codec.ansi_decoder import AnsiDecoder
from webbs_terminal.codec.ansi_encoder import AnsiEncoder

# SAUCE metadata
from webbs_terminal.sauce.record import SauceRecord
from webbs_terminal.sauce.reader import read_sauce

# Rendering
from webbs_terminal.render.html import HtmlRenderer

# Convenience functions
from webbs_terminal.io.reader import load_art, load_grid
from webbs_terminal.io.writer import save_grid

# Menus
from webbs_terminal.menu.item import ActionType, MenuItem
from webbs_terminal.menu.navigator import MenuNavigator, NavigationResult
from webbs_terminal.menu.session import MenuSession, SessionStore

from webbs_terminal.config import EngineConfig

__all__ = [
    # Version
    "__version__",
    # Core types
    "Cell",
    "Color",
    "ArtFile",
    "BoxStyle",
    "GridDocument",
    "StyledRun",
    "LineBreak",
    "LINE_BREAK",
    # Codecs
    "AnsiDecoder",
    "AnsiEncoder",
    # SAUCE
    "SauceRecord",
    "read_sauce",
    # Rendering
    "HtmlRenderer",
    # I/O
    "load_art",
    "load_grid",
    "save_grid",
    # Menus
    "ActionType",
    "MenuItem",
    "MenuNavigator",
    "NavigationResult",
    "MenuSession",
    "SessionStore",
    # Config
    "EngineConfig",
]
