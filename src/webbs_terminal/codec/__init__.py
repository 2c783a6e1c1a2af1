"""Encoding/decoding for ANSI art streams."""

from webbs_terminal.codec.cp437 import cp437_to_unicode, unicode_to_cp437
from webbs_terminal.codec.ansi_decoder import AnsiDecoder
from webbs_terminal.codec.ansi_encoder import AnsiEncoder

__all__ = ["cp437_to_unicode", "unicode_to_cp437", "AnsiDecoder", "AnsiEncoder"]
