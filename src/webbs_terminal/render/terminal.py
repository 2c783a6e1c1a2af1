"""Render decoded runs back to escape sequences for a modern terminal."""

from typing import Iterable

from webbs_terminal.core.color import Color
from webbs_terminal.core.constants import CSI, RESET
from webbs_terminal.core.run import StyledRun, Token, iter_lines


class TerminalRenderer:
    """
    Re-emit decoded runs as ANSI for display in a local terminal.

    The decoder has already flattened cursor movement into lines, so
    the output is plain text with SGR codes; it is meant for viewing
    uploaded art in a console, not for sending to BBS clients (the
    AnsiEncoder produces that stream). SGR codes are emitted only
    when the run style changes.
    """

    def __init__(self, reset_at_end: bool = True):
        self.reset_at_end = reset_at_end

    def render(self, tokens: Iterable[Token]) -> str:
        """Render runs to an ANSI string."""
        lines: list[str] = []
        last: tuple[int, int, bool, bool] | None = None

        for line in iter_lines(tokens):
            line_parts: list[str] = []
            for run in line:
                if run.style != last:
                    line_parts.append(self._sgr(run))
                    last = run.style
                line_parts.append(run.text)

            # Reset at end of each line to prevent color bleeding into clear-to-EOL
            if last is not None and (last[1] != 0 or last[3]):
                line_parts.append(RESET)
                last = None

            lines.append(''.join(line_parts))

        result = '\n'.join(lines)

        if self.reset_at_end:
            result += RESET

        return result

    @staticmethod
    def _sgr(run: StyledRun) -> str:
        codes = ['0']
        codes.append(str(Color(run.fg).to_sgr_fg()))
        # Default bg (49) for black so the terminal's own background shows
        if run.bg == 0:
            codes.append('49')
        else:
            codes.append(str(Color(run.bg).to_sgr_bg()))
        if run.blink:
            codes.append('5')
        return f"{CSI}{';'.join(codes)}m"
