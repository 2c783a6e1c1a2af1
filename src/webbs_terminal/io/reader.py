"""Load ANSI art files and saved grids."""

import logging
from pathlib import Path

from webbs_terminal.codec.ansi_decoder import AnsiDecoder
from webbs_terminal.core.constants import DEFAULT_WIDTH
from webbs_terminal.core.document import ArtFile
from webbs_terminal.core.grid import GridDocument
from webbs_terminal.sauce.reader import read_comments, read_sauce, strip_sauce

logger = logging.getLogger(__name__)


def load_art(source: str | Path | bytes, width: int | None = None) -> ArtFile:
    """
    Ingest an ANSI art upload from a path or raw bytes.

    SAUCE metadata is parsed first; when it describes character data
    its width drives the decoder, otherwise ``width`` (or 80) does.
    The SAUCE trailer is stripped before decoding so it never shows
    up as text.
    """
    if isinstance(source, (bytes, bytearray)):
        data = bytes(source)
        path = None
    else:
        path = Path(source)
        data = path.read_bytes()

    sauce = read_sauce(data)
    comments = read_comments(data, sauce) if sauce else []
    payload = strip_sauce(data)

    decode_width = width or (sauce.width if sauce and sauce.width else None) or DEFAULT_WIDTH
    logger.debug("Decoding %d bytes at width %d", len(payload), decode_width)

    return ArtFile(
        tokens=AnsiDecoder(decode_width).decode(payload),
        sauce=sauce,
        comments=comments,
        payload=payload,
        width=decode_width,
        source_path=path,
    )


def load_grid(path: str | Path) -> GridDocument:
    """Load a grid document saved as JSON by save_grid."""
    return GridDocument.from_json(Path(path).read_text(encoding="utf-8"))
