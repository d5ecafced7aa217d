"""Show command: run an interactive slideshow in the terminal."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import click
from pydantic import ValidationError
import typer
from rich.console import Console
from rich.prompt import FloatPrompt

from dirslides.cli.console_renderer import ConsoleSlideRenderer
from dirslides.core.catalog import CatalogSource
from dirslides.core.config import config_from_context, resolve_settings
from dirslides.core.errors import EmptyCatalogError
from dirslides.core.navigation import LayoutMode
from dirslides.core.session import PresentationSession

console = Console()

_NEXT_KEYS = {"n", " ", "\r", "\n", "\x1b[C", "\xe0M", "\x00M"}
_PREV_KEYS = {"p", "\x7f", "\x08", "\x1b[D", "\xe0K", "\x00K"}
_QUIT_KEYS = {"q", "\x03", "\x04", "\x1b"}


def show_command(
    ctx: typer.Context,
    directory: Path = typer.Argument(
        Path("."),
        help="Directory whose files become the slides.",
    ),
    start: Path | None = typer.Option(
        None,
        "--start",
        help="Slide file to start the show on.",
    ),
    files_from: Path | None = typer.Option(
        None,
        "--files-from",
        help="Text file listing slide paths (one per line) instead of scanning DIRECTORY.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    layout: LayoutMode | None = typer.Option(
        None,
        "--layout",
        case_sensitive=False,
        help="Layout mode: single, chunk-two or sliding-window.",
    ),
    wrap: bool | None = typer.Option(
        None,
        "--wrap/--no-wrap",
        help="Cycle past the last/first slide.",
    ),
    preview: bool | None = typer.Option(
        None,
        "--preview/--no-preview",
        help="Show the upcoming slide(s).",
    ),
    autoplay: float | None = typer.Option(
        None,
        "--autoplay",
        help="Start autoplay with this interval in seconds.",
    ),
    reverse: bool | None = typer.Option(
        None,
        "--reverse/--forward",
        help="Autoplay direction.",
    ),
    atomic_landscape: bool | None = typer.Option(
        None,
        "--atomic-landscape/--no-atomic-landscape",
        help="Show landscape images alone in sliding-window layout.",
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
    """Present the files of a directory as a slideshow."""
    try:
        settings = resolve_settings(
            directory,
            config=config_from_context(ctx.obj),
            overrides={
                "layout_mode": layout,
                "wrap_around": wrap,
                "preview_enabled": preview,
                "autoplay_interval": autoplay,
                "autoplay_reverse": reverse,
                "atomic_landscape_images": atomic_landscape,
                "include_directories": include_directories,
                "notes_suffix": notes_suffix,
                "ignore_pattern": ignore,
            },
        )
    except ValueError as exc:
        console.print(f"[bold red]{exc}[/]")
        raise typer.Exit(code=1) from exc

    source: CatalogSource = directory
    if files_from is not None:
        source = read_file_list(files_from, base_dir=directory)

    renderer = ConsoleSlideRenderer(console)
    try:
        session = PresentationSession.open(source, renderer, settings=settings, start_at=start)
    except (EmptyCatalogError, FileNotFoundError, NotADirectoryError) as exc:
        console.print(f"[bold red]{exc}[/]")
        raise typer.Exit(code=1) from exc
    with session:
        if autoplay is not None:
            session.toggle_autoplay()
        run_key_loop(session, read_key=click.getchar)


def read_file_list(path: Path, *, base_dir: Path) -> list[Path]:
    """Read slide paths from a list file, resolving relative entries against base_dir."""
    entries: list[Path] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        cleaned = line.strip()
        if not cleaned or cleaned.startswith("#"):
            continue
        entry = Path(cleaned).expanduser()
        entries.append(entry if entry.is_absolute() else base_dir / entry)
    return entries


def run_key_loop(session: PresentationSession, *, read_key: Callable[[], str]) -> None:
    """Dispatch key presses to the session until the user quits."""
    actions: dict[str, Callable[[], object]] = {
        "g": session.first_slide,
        "G": session.last_slide,
        "a": session.toggle_autoplay,
        "r": session.toggle_autoplay_direction,
        "w": session.toggle_wrap_around,
        "l": session.cycle_layout_mode,
        "v": session.toggle_preview,
        "o": session.toggle_atomic_landscape,
        "i": lambda: _prompt_interval(session),
    }
    while True:
        key = read_key()
        if key in _QUIT_KEYS:
            return
        if key in _NEXT_KEYS:
            session.next_slide()
        elif key in _PREV_KEYS:
            session.previous_slide()
        elif key in actions:
            actions[key]()


def _prompt_interval(session: PresentationSession) -> None:
    with session.prompting():
        seconds = FloatPrompt.ask(
            "Autoplay interval (seconds)",
            default=session.settings.autoplay_interval,
            console=console,
        )
    try:
        session.set_autoplay_interval(seconds)
    except ValidationError:
        console.print("[bold red]Interval must be a positive number of seconds.[/]")
