"""Cell - atomic unit of a menu screen grid."""

from dataclasses import dataclass, replace

from webbs_terminal.core.color import check_color
from webbs_terminal.core.constants import DEFAULT_BG, DEFAULT_FG


@dataclass(frozen=True, slots=True)
class Cell:
    """
    A single character cell with its colors.

    Represents one position in the screen grid. Cells are values:
    two cells are interchangeable whenever character, foreground
    and background all match.
    """
    char: str = ' '
    fg: int = DEFAULT_FG   # Light gray
    bg: int = DEFAULT_BG   # Black

    def __post_init__(self) -> None:
        if not isinstance(self.char, str) or len(self.char) != 1:
            raise ValueError(f"Cell char must be a single character, got {self.char!r}")
        check_color(self.fg, "fg")
        check_color(self.bg, "bg")

    def with_char(self, char: str) -> "Cell":
        """Same colors, different character."""
        return replace(self, char=char)

    def is_default(self) -> bool:
        """Check if this cell has default values (empty space, default colors)."""
        return self.char == ' ' and self.fg == DEFAULT_FG and self.bg == DEFAULT_BG

    def to_dict(self) -> dict:
        return {"char": self.char, "fg": self.fg, "bg": self.bg}

    @classmethod
    def coerce(cls, data: object) -> "Cell":
        """
        Build a cell from persisted data, falling back to defaults.

        Stored layouts come from an authoring surface and may carry
        empty characters, missing keys or stray color values; those
        degrade to the default cell's fields instead of failing.
        """
        if not isinstance(data, dict):
            return cls()
        char = data.get("char")
        if not isinstance(char, str) or len(char) != 1:
            char = ' '
        fg = data.get("fg")
        bg = data.get("bg")
        if isinstance(fg, bool) or not isinstance(fg, int) or not 0 <= fg <= 15:
            fg = DEFAULT_FG
        if isinstance(bg, bool) or not isinstance(bg, int) or not 0 <= bg <= 15:
            bg = DEFAULT_BG
        return cls(char, fg, bg)


DEFAULT_CELL = Cell()
