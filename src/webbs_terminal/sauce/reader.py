"""SAUCE record parsing."""

import logging
from datetime import datetime
from pathlib import Path

from webbs_terminal.sauce.record import SauceRecord

logger = logging.getLogger(__name__)

SAUCE_ID = b"SAUCE"
COMNT_ID = b"COMNT"
SAUCE_RECORD_SIZE = 128
COMMENT_LINE_SIZE = 64


def _text(field: bytes) -> str:
    """Decode a fixed-width text field, trimming null padding and spaces."""
    return field.decode('cp437', errors='replace').rstrip('\x00').rstrip()


def _parse_date(raw: str):
    """Parse YYYYMMDD, or None when it is not a real calendar date."""
    if len(raw) != 8 or not raw.isdigit():
        return None
    try:
        return datetime.strptime(raw, "%Y%m%d").date()
    except ValueError:
        return None


def read_sauce(data: bytes) -> SauceRecord | None:
    """
    Parse the SAUCE record at the end of ``data``.

    Returns None when the buffer is shorter than a record or its
    last 128 bytes do not start with the SAUCE id. Plain ASCII files
    have no record, so absence is not an error.
    """
    if len(data) < SAUCE_RECORD_SIZE:
        return None

    tail = data[-SAUCE_RECORD_SIZE:]
    if tail[0:5] != SAUCE_ID:
        return None

    date_raw = tail[82:90].decode('cp437', errors='replace').rstrip('\x00')
    parsed_date = _parse_date(date_raw)
    if date_raw and parsed_date is None:
        logger.debug("SAUCE date %r is not a valid date", date_raw)

    return SauceRecord(
        id=SAUCE_ID.decode('ascii'),
        version=tail[5:7].decode('cp437', errors='replace'),
        title=_text(tail[7:42]),
        author=_text(tail[42:62]),
        group=_text(tail[62:82]),
        date_raw=date_raw,
        date=parsed_date,
        file_size=int.from_bytes(tail[90:94], 'little'),
        data_type=tail[94],
        file_type=tail[95],
        tinfo1=int.from_bytes(tail[96:98], 'little'),
        tinfo2=int.from_bytes(tail[98:100], 'little'),
        tinfo3=int.from_bytes(tail[100:102], 'little'),
        tinfo4=int.from_bytes(tail[102:104], 'little'),
        comment_count=tail[104],
        flags=tail[105],
        tinfos=tail[106:128].decode('cp437', errors='replace').rstrip('\x00'),
    )


def parse_sauce(path: str | Path) -> SauceRecord | None:
    """Parse SAUCE record from a file, reading only its tail."""
    with open(path, "rb") as f:
        f.seek(0, 2)  # End of file
        file_size = f.tell()

        if file_size < SAUCE_RECORD_SIZE:
            return None

        # Read SAUCE record (last 128 bytes)
        f.seek(-SAUCE_RECORD_SIZE, 2)
        return read_sauce(f.read(SAUCE_RECORD_SIZE))


def _comment_start(data: bytes, record: SauceRecord) -> int | None:
    """Offset of the COMNT block, if the file really has one."""
    if record.comment_count <= 0:
        return None
    start = len(data) - SAUCE_RECORD_SIZE - 5 - record.comment_count * COMMENT_LINE_SIZE
    if start < 0 or data[start:start + 5] != COMNT_ID:
        return None
    return start


def read_comments(data: bytes, record: SauceRecord) -> list[str]:
    """
    Read the comment lines that precede the record.

    Returns an empty list when the record announces no comments or
    the COMNT block is not where the count says it should be.
    """
    start = _comment_start(data, record)
    if start is None:
        if record.comment_count:
            logger.debug("SAUCE announces %d comments but no COMNT block found",
                         record.comment_count)
        return []

    comments: list[str] = []
    offset = start + 5
    for _ in range(record.comment_count):
        comments.append(_text(data[offset:offset + COMMENT_LINE_SIZE]))
        offset += COMMENT_LINE_SIZE
    return comments


def strip_sauce(data: bytes) -> bytes:
    """
    Return the art payload without its SAUCE trailer.

    Removes the record, the comment block and the EOF marker (0x1A)
    that conventionally separates them from the art. Data without a
    record is returned unchanged.
    """
    record = read_sauce(data)
    if record is None:
        return data

    end = _comment_start(data, record)
    if end is None:
        end = len(data) - SAUCE_RECORD_SIZE
    if end > 0 and data[end - 1] == 0x1A:
        end -= 1
    return data[:end]
