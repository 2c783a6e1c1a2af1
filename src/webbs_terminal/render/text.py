"""Render decoded runs to plain text (strip colors)."""

from typing import Iterable

from webbs_terminal.core.run import Token, iter_lines


class TextRenderer:
    """Render runs to plain text without any styling."""

    def __init__(self, preserve_whitespace: bool = False):
        self.preserve_whitespace = preserve_whitespace

    def render(self, tokens: Iterable[Token]) -> str:
        """Render runs to plain text."""
        lines: list[str] = []

        for line in iter_lines(tokens):
            text = ''.join(run.text for run in line)
            if not self.preserve_whitespace:
                text = text.rstrip()
            lines.append(text)

        result = '\n'.join(lines)

        if not self.preserve_whitespace:
            # Remove trailing empty lines
            result = result.rstrip('\n')

        return result
