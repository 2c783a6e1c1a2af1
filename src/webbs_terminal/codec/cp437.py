"""CP437 (IBM PC) character set conversion."""

from webbs_terminal.core.constants import (
    CARRIAGE_RETURN,
    CP437_TO_UNICODE,
    ESCAPE,
    LINE_FEED,
)

# Bytes that carry stream meaning and so never reach a cell as glyphs
CONTROL_BYTES = frozenset({LINE_FEED, CARRIAGE_RETURN, ESCAPE})

# Build reverse mapping; 0x00 shares its blank glyph with 0x20 and loses
UNICODE_TO_CP437: dict[str, int] = {
    char: idx for idx, char in enumerate(CP437_TO_UNICODE) if idx != 0x00
}

# Glyphs that survive an encode/decode cycle unchanged
PRINTABLE_CHARS: frozenset[str] = frozenset(
    char for char, idx in UNICODE_TO_CP437.items() if idx not in CONTROL_BYTES
)

# Byte-to-text translation that keeps stream controls as themselves
_STREAM_TABLE: tuple[str, ...] = tuple(
    chr(idx) if idx in CONTROL_BYTES else char
    for idx, char in enumerate(CP437_TO_UNICODE)
)


def decode_byte(byte: int) -> str:
    """Display character for one CP437 byte."""
    return CP437_TO_UNICODE[byte]


def cp437_to_unicode(data: bytes) -> str:
    """Convert CP437-encoded bytes to Unicode string."""
    return ''.join(CP437_TO_UNICODE[b] for b in data)


def stream_to_unicode(data: bytes) -> str:
    """
    Convert an ANSI byte stream to text for scanning.

    Like cp437_to_unicode, except LF, CR and ESC stay control
    characters so escape sequences and line structure survive.
    """
    return ''.join(_STREAM_TABLE[b] for b in data)


def unicode_to_cp437(text: str) -> bytes:
    """Convert Unicode string to CP437 bytes."""
    result = bytearray()
    for char in text:
        if char in ('\x1b', '\n', '\r'):
            result.append(ord(char))
        elif char in UNICODE_TO_CP437:
            result.append(UNICODE_TO_CP437[char])
        elif ord(char) < 128:
            result.append(ord(char))
        else:
            result.append(0x3F)  # '?' for unmappable chars
    return bytes(result)


def is_printable(char: str) -> bool:
    """True if the character can be stored in a cell and survive transport."""
    return char in PRINTABLE_CHARS
