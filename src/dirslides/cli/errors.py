"""Shared CLI error rendering helpers."""

from __future__ import annotations

from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel

from dirslides.core.errors import EmptyCatalogError, InvalidModeError, SessionClosedError


def render_cli_error(
    exc: BaseException,
    *,
    console: Console,
    action: str | None = None,
) -> None:
    """Render a friendly TUI panel for a command failure."""
    title, summary, hint = _classify_error(exc)
    message = _normalize_text(str(exc))

    lines: list[str] = []
    if action:
        lines.append(f"[bold]{action}[/]")
        lines.append("")
    lines.append(f"[bold red]{title}[/]")
    lines.append(summary)
    if hint:
        lines.append(f"[dim]{hint}[/]")
    if message and message.lower() not in summary.lower():
        lines.append(f"[dim]Details: {message}[/]")

    console.print(
        Panel.fit(
            "\n".join(lines),
            title="dirslides",
            border_style="red",
        )
    )


def _classify_error(exc: BaseException) -> tuple[str, str, str]:
    if isinstance(exc, KeyboardInterrupt):
        return (
            "Command cancelled",
            "The command was cancelled before it finished.",
            "",
        )
    if isinstance(exc, EmptyCatalogError):
        return (
            "Nothing to present",
            "No slides are left after filtering the source.",
            "Check --ignore, --notes-suffix and --include-directories, or pick another directory.",
        )
    if isinstance(exc, (FileNotFoundError, NotADirectoryError)):
        return (
            "Slides directory unavailable",
            "The slides source could not be read as a directory.",
            "Pass an existing directory, or a --files-from list of paths.",
        )
    if isinstance(exc, InvalidModeError):
        return (
            "Unsupported layout mode",
            "The presentation was asked to render an unknown layout mode.",
            "Use one of: single, chunk-two, sliding-window.",
        )
    if isinstance(exc, ValidationError):
        return (
            "Invalid settings",
            "A setting from the config file, .dirslides.yaml or the command line was rejected.",
            "Fix the value and retry.",
        )
    if isinstance(exc, SessionClosedError):
        return (
            "Presentation closed",
            "The presentation was already closed.",
            "",
        )
    return (
        "Command failed",
        "An unexpected error occurred while running this command.",
        "Try again. If the issue persists, rerun with --verbose for more context.",
    )


def _normalize_text(text: str) -> str:
    collapsed = " ".join(text.split())
    if len(collapsed) <= 240:
        return collapsed
    return f"{collapsed[:237]}..."
