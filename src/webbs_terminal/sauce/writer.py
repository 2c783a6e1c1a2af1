"""SAUCE record writing."""

from datetime import date as Date
from typing import Sequence

from webbs_terminal.sauce.record import SauceRecord


SAUCE_ID = b"SAUCE"
SAUCE_VERSION = b"00"
COMNT_ID = b"COMNT"
COMMENT_LINE_SIZE = 64


def _field(text: str, size: int, pad: bytes = b' ') -> bytes:
    return text.encode('cp437', errors='replace')[:size].ljust(size, pad)


def sauce_to_bytes(record: SauceRecord, comment_count: int | None = None) -> bytes:
    """Serialize a SAUCE record to its 128-byte form."""
    # Start with SAUCE signature and version
    data = bytearray(SAUCE_ID + SAUCE_VERSION)

    data.extend(_field(record.title, 35))
    data.extend(_field(record.author, 20))
    data.extend(_field(record.group, 20))

    # Date (8 bytes, YYYYMMDD)
    if record.date:
        date_str = record.date.strftime("%Y%m%d")
    elif record.date_raw:
        date_str = record.date_raw
    else:
        date_str = Date.today().strftime("%Y%m%d")
    data.extend(_field(date_str, 8))

    # File size (4 bytes, little-endian)
    data.extend(record.file_size.to_bytes(4, 'little'))

    # Data type and file type (1 byte each)
    data.append(record.data_type)
    data.append(record.file_type)

    # TInfo fields (2 bytes each, little-endian)
    data.extend(record.tinfo1.to_bytes(2, 'little'))
    data.extend(record.tinfo2.to_bytes(2, 'little'))
    data.extend(record.tinfo3.to_bytes(2, 'little'))
    data.extend(record.tinfo4.to_bytes(2, 'little'))

    count = record.comment_count if comment_count is None else comment_count
    data.append(min(count, 255))
    data.append(record.flags)

    # TInfoS (22 bytes)
    data.extend(_field(record.tinfos, 22, b'\x00'))

    return bytes(data)


def write_sauce(record: SauceRecord, data: bytes, comments: Sequence[str] = ()) -> bytes:
    """Append EOF marker, optional comments and the SAUCE record to data."""
    result = bytearray(data)

    # Add EOF marker
    result.append(0x1A)

    comments = list(comments)[:255]
    if comments:
        result.extend(COMNT_ID)
        for comment in comments:
            result.extend(_field(comment, COMMENT_LINE_SIZE))

    result.extend(sauce_to_bytes(record, comment_count=len(comments)))

    return bytes(result)
