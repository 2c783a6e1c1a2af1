"""ANSI escape sequence decoder producing styled runs."""

import logging
from dataclasses import dataclass, field

from webbs_terminal.codec.cp437 import decode_byte, stream_to_unicode
from webbs_terminal.core.color import Color
from webbs_terminal.core.constants import DEFAULT_BG, DEFAULT_FG, DEFAULT_WIDTH, ESCAPE
from webbs_terminal.core.run import LINE_BREAK, StyledRun, Token

logger = logging.getLogger(__name__)

ESC_GLYPH = decode_byte(ESCAPE)


@dataclass
class _ScanState:
    """Everything a single decode call mutates."""
    width: int
    fg: int = DEFAULT_FG
    bg: int = DEFAULT_BG
    bold: bool = False
    blink: bool = False
    column: int = 0
    just_wrapped: bool = False
    tokens: list[Token] = field(default_factory=list)
    chars: list[str] = field(default_factory=list)
    run_style: tuple[int, int, bool, bool] | None = None

    @property
    def style(self) -> tuple[int, int, bool, bool]:
        fg = int(Color(self.fg).brightened()) if self.bold else self.fg
        return (fg, self.bg, self.bold, self.blink)

    def flush(self) -> None:
        """Close the run being accumulated."""
        if self.chars and self.run_style is not None:
            fg, bg, bold, blink = self.run_style
            self.tokens.append(StyledRun(''.join(self.chars), fg, bg, bold, blink))
        self.chars = []
        self.run_style = None

    def line_break(self) -> None:
        self.flush()
        self.tokens.append(LINE_BREAK)
        self.column = 0

    def put(self, char: str) -> None:
        style = self.style
        if style != self.run_style:
            self.flush()
            self.run_style = style
        self.chars.append(char)
        self.just_wrapped = False
        self.column += 1
        if self.column >= self.width:
            self.line_break()
            self.just_wrapped = True


class AnsiDecoder:
    """
    Decodes legacy ANSI art into styled runs and line breaks.

    Only the escape subset used by BBS art is interpreted: SGR
    colors and attributes. Cursor positioning, erase and mode
    sequences are consumed without effect, so the output is a
    flowing stream of runs rather than a painted screen.

    The decoder holds configuration only; each call scans with
    fresh state, so one instance can serve many sessions.
    """

    def __init__(self, width: int = DEFAULT_WIDTH):
        if width <= 0:
            raise ValueError(f"Decoder width must be positive, got {width}")
        self.width = width

    def decode(self, data: bytes) -> list[Token]:
        """Decode raw bytes (CP437 encoded) into runs and line breaks."""
        return self._scan(stream_to_unicode(data))

    def decode_text(self, text: str) -> list[Token]:
        """Decode text that is already Unicode (e.g. encoder output)."""
        return self._scan(text)

    def _scan(self, text: str) -> list[Token]:
        state = _ScanState(width=self.width)
        n = len(text)
        i = 0
        while i < n:
            char = text[i]
            if char == '\x1b':
                if i + 1 < n and text[i + 1] == '[':
                    i = self._read_csi(text, i + 2, state)
                elif i + 1 >= n:
                    logger.debug("Dropping lone ESC at end of input")
                    i += 1
                else:
                    # Not a CSI introducer, so the byte is art like any other
                    state.put(ESC_GLYPH)
                    i += 1
                continue

            if char == '\n':
                if state.just_wrapped:
                    state.just_wrapped = False
                else:
                    state.line_break()
            elif char == '\r':
                pass
            else:
                state.put(char)
            i += 1

        state.flush()
        return state.tokens

    def _read_csi(self, text: str, start: int, state: _ScanState) -> int:
        """Consume one CSI sequence starting after ``ESC[``; return next index."""
        n = len(text)
        j = start
        # Parameter bytes: digits, ';' and private markers such as '?'
        while j < n and '0' <= text[j] <= '?':
            j += 1
        # Intermediate bytes
        while j < n and ' ' <= text[j] <= '/':
            j += 1

        if j >= n:
            logger.debug("Abandoning unterminated escape sequence at offset %d", start - 2)
            return n

        command = text[j]
        if not '@' <= command <= '~':
            # Malformed: drop the introducer, keep the byte as text
            logger.debug("Malformed escape sequence at offset %d", start - 2)
            return j

        params_str = text[start:j]
        if command == 'm':
            if params_str and not all(c.isdigit() or c == ';' for c in params_str):
                return j + 1
            params = [int(p) if p else 0 for p in params_str.split(';')] if params_str else [0]
            self._handle_sgr(params, state)
        # H, J, K and everything else: recognised, not interpreted
        return j + 1

    def _handle_sgr(self, params: list[int], state: _ScanState) -> None:
        """Handle SGR (Select Graphic Rendition) parameters."""
        for p in params:
            if p == 0:
                state.fg = DEFAULT_FG
                state.bg = DEFAULT_BG
                state.bold = False
                state.blink = False
            elif p == 1:
                state.bold = True
            elif p == 5:
                state.blink = True
            elif p == 22:
                state.bold = False
            elif p == 25:
                state.blink = False
            elif p == 39:
                state.fg = DEFAULT_FG
            elif p == 49:
                state.bg = DEFAULT_BG
            elif 30 <= p <= 37 or 90 <= p <= 97:
                state.fg = int(Color.from_sgr(p))
            elif 40 <= p <= 47 or 100 <= p <= 107:
                state.bg = int(Color.from_sgr(p))
