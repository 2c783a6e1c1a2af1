"""Render decoded ANSI runs to HTML."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from webbs_terminal.core.color import Color
from webbs_terminal.core.constants import DEFAULT_BG, DEFAULT_FG, DEFAULT_WIDTH
from webbs_terminal.core.run import LineBreak, StyledRun, Token

if TYPE_CHECKING:
    from webbs_terminal.core.grid import GridDocument


_HTML_ESCAPES = {
    '&': '&amp;',
    '<': '&lt;',
    '>': '&gt;',
    '"': '&quot;',
    "'": '&#39;',
}

BLINK_KEYFRAMES = "@keyframes ansi-blink { 0%, 49% { opacity: 1; } 50%, 100% { opacity: 0; } }"
BLINK_ANIMATION = "animation:ansi-blink 1s step-end infinite"


def escape_html(text: str) -> str:
    """Escape the five HTML-sensitive characters."""
    return ''.join(_HTML_ESCAPES.get(c, c) for c in text)


class HtmlRenderer:
    """
    Render decoded runs to an HTML fragment for admin previews.

    The fragment is a single ``<div>`` using ``white-space:pre`` so
    spacing survives; each run becomes one ``<span>``. Lines longer
    than ``width`` columns are wrapped with ``<br>``.
    """

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        font_family: str = "'Perfect DOS VGA 437', 'Courier New', monospace",
        font_size: str = "16px",
        line_height: str = "1.0",
        css_class: str = "ansi-art",
    ):
        if width <= 0:
            raise ValueError(f"Render width must be positive, got {width}")
        self.width = width
        self.font_family = font_family
        self.font_size = font_size
        self.line_height = line_height
        self.css_class = css_class

    def render(self, tokens: Iterable[Token]) -> str:
        """Render decoder output to an HTML string."""
        parts: list[str] = []
        column = 0
        has_blink = False

        for token in tokens:
            if isinstance(token, LineBreak):
                parts.append('<br>')
                column = 0
                continue

            has_blink = has_blink or token.blink
            text = token.text
            while text:
                if column >= self.width:
                    parts.append('<br>')
                    column = 0
                chunk = text[:self.width - column]
                parts.append(self._make_span(chunk, token))
                column += len(chunk)
                text = text[len(chunk):]

        return self._wrap(''.join(parts), has_blink)

    def render_grid(self, doc: GridDocument) -> str:
        """Render a grid document, one line per row."""
        return self.render(doc.to_tokens())

    def _make_span(self, text: str, run: StyledRun) -> str:
        """Create an HTML span with styling."""
        style_parts = [f"color:{Color(run.fg).css}"]
        if run.bg != DEFAULT_BG:
            style_parts.append(f"background-color:{Color(run.bg).css}")
        if run.blink:
            style_parts.append(BLINK_ANIMATION)
        return f'<span style="{";".join(style_parts)}">{escape_html(text)}</span>'

    def _wrap(self, body: str, has_blink: bool) -> str:
        container_style = ';'.join([
            f"font-family:{self.font_family}",
            f"font-size:{self.font_size}",
            f"line-height:{self.line_height}",
            f"background-color:{Color(DEFAULT_BG).css}",
            f"color:{Color(DEFAULT_FG).css}",
            "white-space:pre",
            "overflow-x:auto",
        ])
        style_block = f"<style>{BLINK_KEYFRAMES}</style>" if has_blink else ""
        return (
            f'{style_block}<div class="{escape_html(self.css_class)}" '
            f'style="{escape_html(container_style)}">{body}</div>'
        )
