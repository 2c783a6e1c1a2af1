"""Renderers for outputting decoded ANSI art to various formats."""

from webbs_terminal.render.terminal import TerminalRenderer
from webbs_terminal.render.html import HtmlRenderer, escape_html
from webbs_terminal.render.text import TextRenderer

__all__ = ["TerminalRenderer", "HtmlRenderer", "TextRenderer", "escape_html"]
