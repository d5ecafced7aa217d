"""Config command for viewing and changing default settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError
import typer
from rich import box
from rich.console import Console
from rich.table import Table

from dirslides.core.config import global_config_path, load_global_config, save_global_config
from dirslides.core.navigation import LayoutMode
from dirslides.core.settings import PresentationSettings

console = Console()


def config_command(
    layout: LayoutMode | None = typer.Option(
        None,
        "--layout",
        case_sensitive=False,
        help="Default layout mode.",
    ),
    wrap: bool | None = typer.Option(None, "--wrap/--no-wrap", help="Default wrap-around."),
    preview: bool | None = typer.Option(
        None, "--preview/--no-preview", help="Show the preview by default."
    ),
    interval: float | None = typer.Option(
        None, "--interval", help="Default autoplay interval in seconds."
    ),
    reverse: bool | None = typer.Option(
        None, "--reverse/--forward", help="Default autoplay direction."
    ),
    atomic_landscape: bool | None = typer.Option(
        None,
        "--atomic-landscape/--no-atomic-landscape",
        help="Show landscape images alone in sliding-window layout.",
    ),
    notes_suffix: str | None = typer.Option(
        None, "--notes-suffix", help="Default speaker notes suffix."
    ),
    ignore: str | None = typer.Option(
        None, "--ignore", help="Default regex of file names to leave out."
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config-path",
        hidden=True,
    ),
) -> None:
    """Show or update the default presentation settings."""
    config_path = config_path or global_config_path()
    config = load_global_config(path=config_path)
    updates = {
        key: value
        for key, value in {
            "layout_mode": layout,
            "wrap_around": wrap,
            "preview_enabled": preview,
            "autoplay_interval": interval,
            "autoplay_reverse": reverse,
            "atomic_landscape_images": atomic_landscape,
            "notes_suffix": notes_suffix,
            "ignore_pattern": ignore,
        }.items()
        if value is not None
    }
    if updates:
        try:
            config.settings = config.settings.with_updates(**updates)
        except ValidationError as exc:
            console.print(f"[bold red]{exc}[/]")
            raise typer.Exit(code=1) from exc
        save_global_config(config, path=config_path)
        console.print(f"[bold green]Saved {len(updates)} setting(s) to {config_path}.[/]")

    console.print(_settings_table(config.settings))


def _settings_table(settings: PresentationSettings) -> Table:
    table = Table(title="Default settings", box=box.ROUNDED, header_style="bold")
    table.add_column("Setting", style="bold cyan")
    table.add_column("Value")
    for key, value in settings.model_dump(mode="json").items():
        table.add_row(key, "-" if value is None else str(value))
    return table
