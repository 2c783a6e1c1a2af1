"""SAUCE metadata handling."""

from webbs_terminal.sauce.record import DataType, FileType, SauceRecord
from webbs_terminal.sauce.reader import parse_sauce, read_comments, read_sauce, strip_sauce
from webbs_terminal.sauce.writer import sauce_to_bytes, write_sauce

__all__ = [
    "SauceRecord",
    "DataType",
    "FileType",
    "read_sauce",
    "parse_sauce",
    "read_comments",
    "strip_sauce",
    "sauce_to_bytes",
    "write_sauce",
]
