"""CLI for inspecting and populating a mypod library.

Intended for debugging and development; applications should use the
library API (``create_library``) directly.
"""

import json
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError as SettingsError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from mypod import create_library
from mypod.catalog.client import ItunesClient
from mypod.exceptions import MyPodError
from mypod.library import Library
from mypod.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Configure logging with Rich handler.

    Clears existing handlers first so it can be called more than once.

    Args:
        verbose: If True, set log level to DEBUG. Otherwise WARNING.
        console: Optional Console instance for the RichHandler.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = RichHandler(
        rich_tracebacks=True,
        show_path=False,
        console=console,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    root_logger.setLevel(level)
    root_logger.addHandler(handler)


def load_settings(ctx: click.Context) -> Settings:
    """Load settings onto the context, overriding the data directory if given.

    Unless --verbose was passed, the configured log level replaces the
    CLI default.
    """
    root = ctx.obj["root"]
    try:
        if root is not None:
            settings = Settings(root=root)  # type: ignore[call-arg]
        else:
            settings = get_settings()
    except SettingsError as e:
        raise click.ClickException(
            f"Configuration error: {e.errors()[0]['msg']}"
        ) from e
    if not ctx.obj["verbose"]:
        logging.getLogger().setLevel(settings.log_level)
    ctx.obj["settings"] = settings
    return settings


def open_library(ctx: click.Context) -> Library:
    """Create a library from the settings stored on the context."""
    return create_library(ctx.obj["settings"])


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    help="Data directory (defaults to MYPOD_ROOT).",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, root: Path | None) -> None:
    """Build and browse a music library from the iTunes catalog."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["root"] = root
    setup_logging(verbose=verbose)


@main.command("init")
@click.pass_context
def init_cmd(ctx: click.Context) -> None:
    """Ingest the catalog into an empty library and create default playlists."""
    console = Console()
    load_settings(ctx)

    try:
        with open_library(ctx) as library, console.status("Ingesting catalog..."):
            summary = library.init()
    except MyPodError as e:
        logger.error(str(e))
        raise click.ClickException(str(e)) from e

    if summary.skipped:
        console.print("[yellow]Library already populated, ingestion skipped[/yellow]")
    else:
        console.print(
            f"[green]Ingested {len(summary.terms)} terms:[/green] "
            f"{summary.artists_added} artists, {summary.albums_added} albums, "
            f"{summary.songs_added} songs"
        )
    for name in summary.playlists_created:
        console.print(f"Created playlist [cyan]{name}[/cyan]")


@main.command("search")
@click.argument("term")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def search_cmd(ctx: click.Context, term: str, as_json: bool) -> None:
    """Show catalog records whose artist matches TERM."""
    settings = load_settings(ctx)
    try:
        with ItunesClient(settings.catalog) as client:
            records = client.search_songs(term)
    except MyPodError as e:
        logger.error(str(e))
        raise click.ClickException(str(e)) from e

    if as_json:
        data = [r.model_dump(by_alias=True) for r in records]
        json.dump(data, sys.stdout, indent=2, ensure_ascii=False, default=str)
        return

    console = Console()
    if not records:
        console.print(f"[yellow]No records matched '{term}'[/yellow]")
        return

    table = Table(title=f"Catalog results for '{term}'")
    table.add_column("Track ID", justify="right")
    table.add_column("Artist")
    table.add_column("Album")
    table.add_column("Title")
    table.add_column("Year", justify="right")
    for r in records:
        table.add_row(
            str(r.track_id),
            r.artist_name or "",
            r.collection_name or "",
            r.track_name or "",
            str(r.release_year or ""),
        )
    console.print(table)


@main.command("playlists")
@click.pass_context
def playlists_cmd(ctx: click.Context) -> None:
    """List playlists with their song counts."""
    load_settings(ctx)
    with open_library(ctx) as library:
        playlists = library.playlists.find_all()

    console = Console()
    if not playlists:
        console.print("[yellow]No playlists[/yellow]")
        return

    table = Table(title="Playlists")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Songs", justify="right")
    for p in playlists:
        table.add_row(str(p.id), p.name, str(p.song_count))
    console.print(table)


@main.command("songs")
@click.option("--genre", help="Only songs whose album has this genre.")
@click.option("--playlist", "playlist_id", type=int, help="Only songs in a playlist.")
@click.pass_context
def songs_cmd(ctx: click.Context, genre: str | None, playlist_id: int | None) -> None:
    """List stored songs with their album and artist."""
    load_settings(ctx)
    with open_library(ctx) as library:
        if playlist_id is not None:
            songs = library.playlists.find_songs_in_playlist(playlist_id)
        elif genre:
            songs = library.songs.find_by_genre(genre)
        else:
            songs = library.songs.find_all()

    console = Console()
    table = Table(title=f"Songs ({len(songs)})")
    table.add_column("ID", justify="right")
    table.add_column("Artist")
    table.add_column("Album")
    table.add_column("Title")
    table.add_column("Length", justify="right")
    for s in songs:
        table.add_row(
            str(s.id),
            s.artist.name if s.artist else "",
            s.album.name if s.album else "",
            s.title,
            s.formatted_length,
        )
    console.print(table)


if __name__ == "__main__":
    main()
