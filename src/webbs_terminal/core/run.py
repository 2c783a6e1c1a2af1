"""Styled runs - the decoder's output model."""

from dataclasses import dataclass
from typing import Iterable, Iterator, Union

from webbs_terminal.core.constants import DEFAULT_BG, DEFAULT_FG


@dataclass(frozen=True)
class StyledRun:
    """
    A span of decoded text sharing one style.

    ``fg`` is the effective foreground: bold text on a normal
    color is already promoted to its bright variant.
    """
    text: str
    fg: int = DEFAULT_FG
    bg: int = DEFAULT_BG
    bold: bool = False
    blink: bool = False

    @property
    def style(self) -> tuple[int, int, bool, bool]:
        return (self.fg, self.bg, self.bold, self.blink)

    def __len__(self) -> int:
        return len(self.text)


@dataclass(frozen=True)
class LineBreak:
    """Explicit end of a display line."""


LINE_BREAK = LineBreak()

Token = Union[StyledRun, LineBreak]


def iter_lines(tokens: Iterable[Token]) -> Iterator[list[StyledRun]]:
    """
    Group tokens into lines of runs.

    Every LineBreak closes a line, so a stream ending in a break
    does not produce a trailing empty line.
    """
    line: list[StyledRun] = []
    pending = False
    for token in tokens:
        if isinstance(token, LineBreak):
            yield line
            line = []
            pending = False
        else:
            line.append(token)
            pending = True
    if pending:
        yield line


def plain_text(tokens: Iterable[Token]) -> str:
    """Concatenate run text, one output line per decoded line."""
    return '\n'.join(''.join(run.text for run in line) for line in iter_lines(tokens))
