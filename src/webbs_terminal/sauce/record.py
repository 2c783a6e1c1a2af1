"""SAUCE record data structure."""

from dataclasses import dataclass
from datetime import date as Date
from enum import IntEnum

from webbs_terminal.core.constants import DEFAULT_HEIGHT, DEFAULT_WIDTH


class DataType(IntEnum):
    """SAUCE data types."""
    NONE = 0
    CHARACTER = 1
    BITMAP = 2
    VECTOR = 3
    AUDIO = 4
    BINARYTEXT = 5
    XBIN = 6
    ARCHIVE = 7
    EXECUTABLE = 8


class FileType(IntEnum):
    """SAUCE file types for CHARACTER data type."""
    ASCII = 0
    ANSI = 1
    ANSIMATION = 2
    RIP = 3
    PCBOARD = 4
    AVATAR = 5
    HTML = 6
    SOURCE = 7
    TUNDRA = 8


@dataclass(frozen=True)
class SauceRecord:
    """
    SAUCE (Standard Architecture for Universal Comment Extensions) record.

    SAUCE is a metadata format used by the BBS/ANSI art scene to embed
    information about artwork in files. See: https://www.acid.org/info/sauce/sauce.htm

    Records are parsed once at ingest and never change afterwards.
    ``date_raw`` keeps the stored characters even when they do not
    form a valid calendar date (``date`` is then None).
    """
    id: str = "SAUCE"
    version: str = "00"
    title: str = ""
    author: str = ""
    group: str = ""
    date_raw: str = ""
    date: Date | None = None
    file_size: int = 0
    data_type: int = DataType.CHARACTER
    file_type: int = FileType.ANSI
    tinfo1: int = 0  # Width for character data
    tinfo2: int = 0  # Height for character data
    tinfo3: int = 0
    tinfo4: int = 0
    comment_count: int = 0
    flags: int = 0
    tinfos: str = ""

    @classmethod
    def from_bytes(cls, data: bytes) -> "SauceRecord | None":
        """Parse a SAUCE record from the tail of ``data``."""
        from webbs_terminal.sauce.reader import read_sauce
        return read_sauce(data)

    def to_bytes(self) -> bytes:
        """Serialize this record to bytes."""
        from webbs_terminal.sauce.writer import sauce_to_bytes
        return sauce_to_bytes(self)

    @property
    def is_character(self) -> bool:
        """True when the art is character-cell content with dimensions."""
        return self.data_type == DataType.CHARACTER

    @property
    def width(self) -> int | None:
        """Columns, for character data only."""
        if not self.is_character:
            return None
        return self.tinfo1 or DEFAULT_WIDTH

    @property
    def height(self) -> int | None:
        """Rows, for character data only."""
        if not self.is_character:
            return None
        return self.tinfo2 or DEFAULT_HEIGHT

    def to_dict(self) -> dict:
        """Plain-data form for storing alongside an uploaded file."""
        return {
            "id": self.id,
            "version": self.version,
            "title": self.title,
            "author": self.author,
            "group": self.group,
            "date": self.date_raw,
            "parsedDate": self.date.isoformat() if self.date else None,
            "fileSize": self.file_size,
            "dataType": int(self.data_type),
            "fileType": int(self.file_type),
            "tInfo1": self.tinfo1,
            "tInfo2": self.tinfo2,
            "tInfo3": self.tinfo3,
            "tInfo4": self.tinfo4,
            "comments": self.comment_count,
            "flags": self.flags,
            "width": self.width,
            "height": self.height,
        }

    def __str__(self) -> str:
        """Human-readable representation."""
        parts = []
        if self.title:
            parts.append(f"Title: {self.title}")
        if self.author:
            parts.append(f"Author: {self.author}")
        if self.group:
            parts.append(f"Group: {self.group}")
        if self.date:
            parts.append(f"Date: {self.date.strftime('%Y-%m-%d')}")
        if self.width:
            parts.append(f"Width: {self.width}")
        if self.height:
            parts.append(f"Height: {self.height}")
        return "\n".join(parts) if parts else "(No SAUCE metadata)"
