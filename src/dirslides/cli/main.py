"""Main Typer application definition."""

from __future__ import annotations

import typer
from dotenv import load_dotenv
from rich.console import Console

from dirslides.cli.commands.config import config_command
from dirslides.cli.commands.list import list_command
from dirslides.cli.commands.show import show_command
from dirslides.cli.errors import render_cli_error
from dirslides.core.config import load_global_config
from dirslides.utils.logger import configure_logging

console = Console()
app = typer.Typer(
    help="Present a directory of files as a navigable slideshow.",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Emit logs in a JSON-friendly format."
    ),
) -> None:
    """Configure the runtime environment for all commands."""
    load_dotenv()
    configure_logging(verbose=verbose, json_output=json_output)
    ctx.obj = ctx.obj or {}
    ctx.obj["config"] = load_global_config()


app.command("show")(show_command)
app.command("list")(list_command)
app.command("config")(config_command)


def run() -> None:
    """CLI entrypoint used by console scripts."""
    try:
        app()
    except typer.Exit as exc:
        raise SystemExit(exc.exit_code) from None
    except KeyboardInterrupt as exc:
        render_cli_error(exc, console=console)
        raise SystemExit(130) from None
    except Exception as exc:
        render_cli_error(exc, console=console)
        raise SystemExit(1) from None
