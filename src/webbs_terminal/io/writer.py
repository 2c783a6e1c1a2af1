"""Save grid documents as .ans screens or JSON layouts."""

from pathlib import Path

from webbs_terminal.codec.ansi_encoder import AnsiEncoder
from webbs_terminal.core.grid import GridDocument
from webbs_terminal.sauce.record import DataType, FileType, SauceRecord
from webbs_terminal.sauce.writer import write_sauce


def save_grid(
    doc: GridDocument,
    path: str | Path,
    sauce: SauceRecord | None = None,
    include_sauce: bool = True,
) -> None:
    """
    Save a grid document to disk.

    ``.json`` paths store the editable layout; anything else is
    written as a CP437 ANSI screen, optionally tagged with SAUCE.
    """
    path = Path(path)

    if path.suffix.lower() == ".json":
        path.write_text(doc.to_json(), encoding="utf-8")
        return

    data = AnsiEncoder().encode_bytes(doc)

    # Add SAUCE if requested
    if include_sauce:
        sauce = sauce or SauceRecord(
            title=path.stem[:35],
            data_type=DataType.CHARACTER,
            file_type=FileType.ANSI,
            file_size=len(data),
            tinfo1=doc.width,
            tinfo2=doc.height,
        )
        data = write_sauce(sauce, data)

    # Write to file
    with open(path, 'wb') as f:
        f.write(data)
