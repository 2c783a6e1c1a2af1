"""ArtFile - an ingested ANSI art upload."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from webbs_terminal.core.run import Token, plain_text

if TYPE_CHECKING:
    from webbs_terminal.sauce.record import SauceRecord


@dataclass
class ArtFile:
    """
    Represents an uploaded ANSI artwork with metadata.

    Combines the decoded runs + SAUCE metadata + source info into a
    single object. ``payload`` is the art without its SAUCE trailer;
    it is what gets passed through untouched for raw display.
    """
    tokens: list[Token] = field(default_factory=list)
    sauce: "SauceRecord | None" = None
    comments: list[str] = field(default_factory=list)
    payload: bytes = b""
    width: int = 80
    source_path: Path | None = None

    @classmethod
    def load(cls, path: str | Path, width: int | None = None) -> "ArtFile":
        """Load an ANSI file from disk."""
        from webbs_terminal.io.reader import load_art
        return load_art(path, width=width)

    def render_to_html(self, **kwargs) -> str:
        """Render to HTML for previews."""
        from webbs_terminal.render.html import HtmlRenderer
        kwargs.setdefault("width", self.width)
        return HtmlRenderer(**kwargs).render(self.tokens)

    def render(self) -> str:
        """Render to ANSI for a local terminal."""
        from webbs_terminal.render.terminal import TerminalRenderer
        return TerminalRenderer().render(self.tokens)

    def render_to_text(self) -> str:
        """Render to plain text (no colors)."""
        from webbs_terminal.render.text import TextRenderer
        return TextRenderer().render(self.tokens)

    @property
    def text(self) -> str:
        return plain_text(self.tokens)

    @property
    def title(self) -> str:
        """Get title from SAUCE or filename."""
        if self.sauce and self.sauce.title:
            return self.sauce.title
        if self.source_path:
            return self.source_path.stem
        return "Untitled"

    @property
    def author(self) -> str:
        """Get author from SAUCE."""
        return self.sauce.author if self.sauce else ""

    @property
    def group(self) -> str:
        """Get group from SAUCE."""
        return self.sauce.group if self.sauce else ""

    @property
    def line_count(self) -> int:
        """Number of decoded display lines."""
        return len(self.text.split('\n')) if self.tokens else 0
