"""Shared constants for terminal screen processing."""

# ANSI escape sequences
ESC = "\x1b"
CSI = f"{ESC}["
RESET = f"{CSI}0m"
CLEAR_SCREEN = f"{CSI}2J{CSI}H"
HIDE_CURSOR = f"{CSI}?25l"
SHOW_CURSOR = f"{CSI}?25h"

# Default colors (palette indices)
DEFAULT_FG = 7
DEFAULT_BG = 0

# Default screen size
DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 25

# Bytes with stream meaning; never emitted as cell characters
LINE_FEED = 0x0A
CARRIAGE_RETURN = 0x0D
ESCAPE = 0x1B
EOF_MARKER = 0x1A

# CP437 to Unicode mapping (characters 0x00-0xFF)
# Source: https://en.wikipedia.org/wiki/Code_page_437
# 0x00 renders as a blank, like the DOS screen it came from.
CP437_TO_UNICODE: tuple[str, ...] = (
    # 0x00-0x1F: Control characters mapped to symbols
    ' ', '☺', '☻', '♥', '♦', '♣', '♠', '•',
    '◘', '○', '◙', '♂', '♀', '♪', '♫', '☼',
    '►', '◄', '↕', '‼', '¶', '§', '▬', '↨',
    '↑', '↓', '→', '←', '∟', '↔', '▲', '▼',
    # 0x20-0x7E: Standard ASCII (printable)
    ' ', '!', '"', '#', '$', '%', '&', "'", '(', ')', '*', '+', ',', '-', '.', '/',
    '0', '1', '2', '3', '4', '5', '6', '7', '8', '9', ':', ';', '<', '=', '>', '?',
    '@', 'A', 'B', 'C', 'D', 'E', 'F', 'G', 'H', 'I', 'J', 'K', 'L', 'M', 'N', 'O',
    'P', 'Q', 'R', 'S', 'T', 'U', 'V', 'W', 'X', 'Y', 'Z', '[', '\\', ']', '^', '_',
    '`', 'a', 'b', 'c', 'd', 'e', 'f', 'g', 'h', 'i', 'j', 'k', 'l', 'm', 'n', 'o',
    'p', 'q', 'r', 's', 't', 'u', 'v', 'w', 'x', 'y', 'z', '{', '|', '}', '~', '⌂',
    # 0x80-0xFF: Extended ASCII
    'Ç', 'ü', 'é', 'â', 'ä', 'à', 'å', 'ç',
    'ê', 'ë', 'è', 'ï', 'î', 'ì', 'Ä', 'Å',
    'É', 'æ', 'Æ', 'ô', 'ö', 'ò', 'û', 'ù',
    'ÿ', 'Ö', 'Ü', '¢', '£', '¥', '₧', 'ƒ',
    'á', 'í', 'ó', 'ú', 'ñ', 'Ñ', 'ª', 'º',
    '¿', '⌐', '¬', '½', '¼', '¡', '«', '»',
    '░', '▒', '▓', '│', '┤', '╡', '╢', '╖',
    '╕', '╣', '║', '╗', '╝', '╜', '╛', '┐',
    '└', '┴', '┬', '├', '─', '┼', '╞', '╟',
    '╚', '╔', '╩', '╦', '╠', '═', '╬', '╧',
    '╨', '╤', '╥', '╙', '╘', '╒', '╓', '╫',
    '╪', '┘', '┌', '█', '▄', '▌', '▐', '▀',
    'α', 'ß', 'Γ', 'π', 'Σ', 'σ', 'µ', 'τ',
    'Φ', 'Θ', 'Ω', 'δ', '∞', 'φ', 'ε', '∩',
    '≡', '±', '≥', '≤', '⌠', '⌡', '÷', '≈',
    '°', '∙', '·', '√', 'ⁿ', '²', '■', '\u00A0',
)

# Box drawing characters by style
BOX_CHARS = {
    "single": {
        "horizontal": "─",
        "vertical": "│",
        "top_left": "┌",
        "top_right": "┐",
        "bottom_left": "└",
        "bottom_right": "┘",
    },
    "double": {
        "horizontal": "═",
        "vertical": "║",
        "top_left": "╔",
        "top_right": "╗",
        "bottom_left": "╚",
        "bottom_right": "╝",
    },
}

# Standard 16-color palette (CSS colors, DOS VGA values)
PALETTE_16 = (
    "#000000",  # 0 - Black
    "#aa0000",  # 1 - Red
    "#00aa00",  # 2 - Green
    "#aa5500",  # 3 - Brown/Yellow
    "#0000aa",  # 4 - Blue
    "#aa00aa",  # 5 - Magenta
    "#00aaaa",  # 6 - Cyan
    "#aaaaaa",  # 7 - Light Gray
    "#555555",  # 8 - Dark Gray
    "#ff5555",  # 9 - Bright Red
    "#55ff55",  # 10 - Bright Green
    "#ffff55",  # 11 - Bright Yellow
    "#5555ff",  # 12 - Bright Blue
    "#ff55ff",  # 13 - Bright Magenta
    "#55ffff",  # 14 - Bright Cyan
    "#ffffff",  # 15 - Bright White
)
