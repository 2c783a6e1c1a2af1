"""Color representation for the 16-color terminal palette."""

from enum import IntEnum

from webbs_terminal.core.constants import PALETTE_16


class Color(IntEnum):
    """
    A palette index in the classic 16-color DOS palette.

    Indices 0-7 are normal intensity; 8-15 are the bright
    variants of the same eight hues.
    """
    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7
    BRIGHT_BLACK = 8
    BRIGHT_RED = 9
    BRIGHT_GREEN = 10
    BRIGHT_YELLOW = 11
    BRIGHT_BLUE = 12
    BRIGHT_MAGENTA = 13
    BRIGHT_CYAN = 14
    BRIGHT_WHITE = 15

    @classmethod
    def from_sgr(cls, code: int) -> "Color":
        """Create a Color from an SGR code (30-37, 40-47, 90-97, 100-107)."""
        if 30 <= code <= 37:
            return cls(code - 30)
        elif 40 <= code <= 47:
            return cls(code - 40)
        elif 90 <= code <= 97:
            return cls(code - 90 + 8)
        elif 100 <= code <= 107:
            return cls(code - 100 + 8)
        else:
            raise ValueError(f"Invalid SGR color code: {code}")

    @property
    def is_bright(self) -> bool:
        return self >= 8

    @property
    def css(self) -> str:
        """CSS hex color for this palette entry."""
        return PALETTE_16[self]

    def brightened(self) -> "Color":
        """Bright variant of a normal-intensity color (bold rendering)."""
        return self if self.is_bright else Color(self + 8)

    def to_sgr_fg(self) -> int:
        """Return the SGR code selecting this color as foreground."""
        return 30 + self if self < 8 else 90 + self - 8

    def to_sgr_bg(self) -> int:
        """Return the SGR code selecting this color as background."""
        return 40 + self if self < 8 else 100 + self - 8


def check_color(value: int, name: str = "color") -> int:
    """Validate a palette index, returning it unchanged."""
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 15:
        raise ValueError(f"{name} must be a palette index 0-15, got {value!r}")
    return int(value)
