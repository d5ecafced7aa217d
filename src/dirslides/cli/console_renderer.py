"""Terminal renderer drawing slides, notes, preview and controls as rich panels."""

from __future__ import annotations

from pathlib import Path

from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dirslides.core.interfaces import ControlPanelSnapshot, SlideRenderer
from dirslides.core.navigation import LayoutMode
from dirslides.core.preview import Preview

KEY_HELP = (
    "[bold]n[/]/space next  [bold]p[/] prev  [bold]g[/]/[bold]G[/] first/last  "
    "[bold]a[/] autoplay  [bold]r[/] reverse  [bold]i[/] interval  "
    "[bold]w[/] wrap  [bold]l[/] layout  [bold]v[/] preview  "
    "[bold]o[/] atomic landscape  [bold]q[/] quit"
)


class ConsoleSlideRenderer(SlideRenderer):
    """Render a presentation frame by frame on a rich console.

    Each slide render clears the screen and starts a new frame; notes,
    preview and control panel are appended to it. File contents are not
    rendered, only their names.
    """

    def __init__(self, console: Console | None = None, *, clear: bool = True) -> None:
        self.console = console or Console()
        self._clear = clear
        self._closed = False

    def show_slide(self, slide: Path, layout_mode: LayoutMode, partner: Path | None) -> None:
        if self._clear:
            self.console.clear()
        if partner is None:
            body: Group | Text = Text(slide.name, style="bold")
        else:
            grid = Table.grid(expand=True, padding=(0, 2))
            grid.add_column(ratio=1)
            grid.add_column(ratio=1)
            grid.add_row(Text(slide.name, style="bold"), Text(partner.name, style="bold"))
            body = Group(grid)
        self.console.print(
            Panel(
                body,
                title=f"Slide ({layout_mode.value})",
                subtitle=str(slide.parent),
                border_style="cyan",
                box=box.ROUNDED,
            )
        )

    def show_notes(self, slide: Path, notes: str | None) -> None:
        if notes is None:
            return
        self.console.print(
            Panel(notes.rstrip(), title="Speaker notes", border_style="magenta", box=box.ROUNDED)
        )

    def show_preview(self, preview: Preview) -> None:
        if preview.end_of_show:
            body = "[dim]End of show[/]"
        else:
            body = "  |  ".join(
                slide.name if slide is not None else "[dim](empty)[/]" for slide in preview.slides
            )
        self.console.print(Panel(body, title="Next", border_style="green", box=box.ROUNDED))

    def show_control_panel(self, snapshot: ControlPanelSnapshot) -> None:
        settings = snapshot.settings
        details = Table.grid(padding=(0, 1))
        details.add_column(style="bold cyan")
        details.add_column()
        details.add_row("Slide", f"{snapshot.current_index + 1}/{snapshot.slide_count}")
        details.add_row("Layout", settings.layout_mode.value)
        details.add_row("Wrap around", _on_off(settings.wrap_around))
        details.add_row("Preview", _on_off(settings.preview_enabled))
        details.add_row("Atomic landscape", _on_off(settings.atomic_landscape_images))
        details.add_row(
            "Autoplay",
            f"{_on_off(snapshot.autoplay_active)} every {settings.autoplay_interval:g}s "
            f"({'reverse' if settings.autoplay_reverse else 'forward'})",
        )
        self.console.print(
            Panel(
                Group(details, Text.from_markup(f"\n[dim]{KEY_HELP}[/]")),
                title="Controls",
                border_style="blue",
                box=box.ROUNDED,
            )
        )

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.console.print("[dim]Presentation closed.[/]")


def _on_off(value: bool) -> str:
    return "[green]on[/]" if value else "[dim]off[/]"
