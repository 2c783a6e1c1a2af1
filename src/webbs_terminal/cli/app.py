"""Typer CLI application."""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from webbs_terminal.config import EngineConfig


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="webbs-terminal",
        help="Preview BBS ANSI art and encode menu screens for terminal clients.",
        no_args_is_help=True,
        rich_markup_mode="rich",
    )
    console = Console()
    config = EngineConfig.from_env()

    @app.callback()
    def main(
        verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log decoding details")] = False,
    ) -> None:
        """Preview BBS ANSI art and encode menu screens for terminal clients."""
        _configure_logging(verbose)

    def _require(path: Path) -> None:
        if not path.exists():
            console.print(f"[red]File not found: {path}[/]")
            raise typer.Exit(1)

    @app.command()
    def info(
        path: Annotated[Path, typer.Argument(help="ANSI file to inspect")],
        json_output: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
    ) -> None:
        """Show SAUCE metadata for an ANSI file."""
        from webbs_terminal.io.reader import load_art

        _require(path)
        art = load_art(path)

        if not art.sauce:
            console.print(f"[yellow]No SAUCE metadata found in {path}[/]")
            raise typer.Exit(1)

        sauce = art.sauce
        if json_output:
            data = sauce.to_dict()
            data["commentLines"] = art.comments
            print(json.dumps(data, indent=2))
            return

        table = Table(title=f"SAUCE Metadata for {path.name}", show_header=False)
        table.add_column("Field", style="bold")
        table.add_column("Value")
        table.add_row("Title", sauce.title or "(none)")
        table.add_row("Author", sauce.author or "(none)")
        table.add_row("Group", sauce.group or "(none)")
        table.add_row("Date", sauce.date.strftime('%Y-%m-%d') if sauce.date else sauce.date_raw or "(none)")
        if sauce.width is not None:
            table.add_row("Size", f"{sauce.width}x{sauce.height}")
        table.add_row("Data type", str(sauce.data_type))
        table.add_row("File type", str(sauce.file_type))
        for comment in art.comments:
            table.add_row("Comment", comment)
        console.print(table)

    @app.command()
    def view(
        path: Annotated[Path, typer.Argument(help="ANSI file to view")],
        width: Annotated[Optional[int], typer.Option("--width", "-w", help="Wrap column (default: SAUCE or 80)")] = None,
        sauce: Annotated[bool, typer.Option("--sauce", "-s", help="Show SAUCE metadata")] = False,
        plain: Annotated[bool, typer.Option("--plain", "-p", help="Strip colors")] = False,
    ) -> None:
        """Decode ANSI art and print it to this terminal."""
        from webbs_terminal.io.reader import load_art

        _require(path)
        art = load_art(path, width=width)

        if sauce and art.sauce:
            console.print(f"[bold]Title:[/] {art.title}")
            console.print(f"[bold]Author:[/] {art.author}")
            console.print(f"[bold]Group:[/] {art.group}")
            console.print()

        print(art.render_to_text() if plain else art.render())

    @app.command()
    def html(
        source: Annotated[Path, typer.Argument(help="ANSI file or saved grid (.json)")],
        dest: Annotated[Optional[Path], typer.Argument(help="Output file (default: stdout)")] = None,
        width: Annotated[Optional[int], typer.Option("--width", "-w", help="Wrap column")] = None,
        font_family: Annotated[Optional[str], typer.Option("--font-family", help="CSS font family")] = None,
    ) -> None:
        """Render an ANSI file or grid to an HTML preview."""
        from webbs_terminal.io.reader import load_art, load_grid
        from webbs_terminal.render.html import HtmlRenderer

        _require(source)
        options = {
            "font_family": font_family or config.font_family,
            "font_size": config.font_size,
        }
        if source.suffix.lower() == ".json":
            doc = load_grid(source)
            markup = HtmlRenderer(width=width or doc.width, **options).render_grid(doc)
        else:
            art = load_art(source, width=width)
            markup = HtmlRenderer(width=art.width, **options).render(art.tokens)

        if dest is None:
            print(markup)
        else:
            dest.write_text(markup, encoding="utf-8")
            console.print(f"[green]Rendered {source} → {dest}[/]")

    @app.command()
    def encode(
        source: Annotated[Path, typer.Argument(help="Saved grid (.json)")],
        dest: Annotated[Path, typer.Argument(help="Destination .ans file")],
        title: Annotated[Optional[str], typer.Option("--title", "-t", help="SAUCE title")] = None,
        author: Annotated[str, typer.Option("--author", "-a", help="SAUCE author")] = "",
        no_sauce: Annotated[bool, typer.Option("--no-sauce", help="Do not append SAUCE")] = False,
    ) -> None:
        """Encode a saved grid as a CP437 ANSI screen."""
        from webbs_terminal.io.reader import load_grid
        from webbs_terminal.io.writer import save_grid
        from webbs_terminal.sauce.record import SauceRecord

        _require(source)
        try:
            doc = load_grid(source)
        except json.JSONDecodeError as e:
            console.print(f"[red]Invalid grid file {source}: {e}[/]")
            raise typer.Exit(1)

        record = None
        if title is not None or author:
            record = SauceRecord(
                title=(title or dest.stem)[:35],
                author=author[:20],
                tinfo1=doc.width,
                tinfo2=doc.height,
            )
        save_grid(doc, dest, sauce=record, include_sauce=not no_sauce)
        console.print(f"[green]Encoded {source} → {dest}[/] ({doc.width}x{doc.height})")

    @app.command()
    def preview(
        layout: Annotated[Optional[Path], typer.Argument(help="Saved grid (.json) for the menu (default: blank screen)")] = None,
        items: Annotated[Optional[Path], typer.Option("--items", "-i", help="JSON list of menu items")] = None,
        level: Annotated[int, typer.Option("--level", "-l", help="User level to preview as")] = 1,
        hotkey: Annotated[Optional[str], typer.Option("--key", "-k", help="Resolve a hotkey instead of drawing")] = None,
    ) -> None:
        """
        Draw a menu screen as a user at LEVEL would see it.

        The screen is written in the transport encoding (WEBBS_ENCODING),
        exactly as a connected client would receive it.
        """
        from webbs_terminal.io.reader import load_grid
        from webbs_terminal.menu.item import MenuItem
        from webbs_terminal.menu.navigator import MenuNavigator
        from webbs_terminal.menu.session import SessionStore
        from webbs_terminal.menu.store import MemoryLayoutStore, MemoryMenuItemStore

        layouts = MemoryLayoutStore()
        if layout is None:
            menu_id = "main"
        else:
            _require(layout)
            menu_id = layout.stem
            layouts.save(menu_id, load_grid(layout))

        store = MemoryMenuItemStore()
        if items is not None:
            _require(items)
            try:
                for row in json.loads(items.read_text(encoding="utf-8")):
                    store.create(menu_id, MenuItem.from_dict(row))
            except (ValueError, KeyError, TypeError) as e:
                console.print(f"[red]Invalid menu items in {items}: {e}[/]")
                raise typer.Exit(1)

        navigator = MenuNavigator(
            store,
            layouts,
            prompt=config.prompt,
            width=config.width,
            height=config.height,
        )
        sessions = SessionStore(timeout=config.session_timeout)
        session = sessions.create(menu_id, user_level=level, session_id="preview")

        if hotkey is not None:
            result = navigator.select(session, hotkey)
            print(json.dumps(result.to_dict(), indent=2))
            if not result.matched:
                raise typer.Exit(1)
            return

        typer.echo(navigator.render_bytes(session, config.transport_encoding), nl=False)

    return app
