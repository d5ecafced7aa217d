"""List command: show the slide catalog of a directory."""

from __future__ import annotations

from pathlib import Path

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from dirslides.core.catalog import SlideSet, build_catalog, notes_path
from dirslides.core.config import config_from_context, resolve_settings
from dirslides.core.errors import EmptyCatalogError
from dirslides.core.orientation import is_landscape_image

console = Console()


def list_command(
    ctx: typer.Context,
    directory: Path = typer.Argument(
        Path("."),
        help="Directory whose files become the slides.",
    ),
    include_directories: bool | None = typer.Option(
        None,
        "--include-directories/--no-include-directories",
        help="Treat subdirectories as slides.",
    ),
    notes_suffix: str | None = typer.Option(
        None,
        "--notes-suffix",
        help="Suffix appended to a slide path to find its speaker notes.",
    ),
    ignore: str | None = typer.Option(
        None,
        "--ignore",
        help="Regex of file names to leave out (empty string disables).",
    ),
) -> None:
    """List the slides a directory would present, in order."""
    try:
        settings = resolve_settings(
            directory,
            config=config_from_context(ctx.obj),
            overrides={
                "include_directories": include_directories,
                "notes_suffix": notes_suffix,
                "ignore_pattern": ignore,
            },
        )
        slides = build_catalog(directory, settings.catalog_options())
    except (EmptyCatalogError, FileNotFoundError, NotADirectoryError, ValueError) as exc:
        console.print(f"[bold red]{exc}[/]")
        raise typer.Exit(code=1) from exc

    console.print(_slides_table(slides, notes_suffix=settings.notes_suffix))


def _slides_table(slides: SlideSet, *, notes_suffix: str) -> Table:
    table = Table(title="Slides", box=box.ROUNDED, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Slide")
    table.add_column("Notes")
    table.add_column("Orientation")
    for index, slide in enumerate(slides, start=1):
        has_notes = notes_path(slide, notes_suffix).is_file()
        table.add_row(
            str(index),
            slide.name,
            "yes" if has_notes else "-",
            "landscape" if is_landscape_image(slide) else "-",
        )
    return table
