"""ulidkit: generate, inspect, and convert ULIDs from the command line."""

from __future__ import annotations

import typer
from pydantic import ValidationError

from ulidkit import __version__
from ulidkit.cli.commands import common, register_all
from ulidkit.logging import setup_logging
from ulidkit.settings import get_settings

app = typer.Typer(
    add_completion=False,
    invoke_without_command=True,
    help="Generate, inspect, and convert ULIDs.",
)

register_all(app)


@app.callback()
def _main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Print the ulidkit version and exit."),
) -> None:
    if version:
        typer.echo(f"ulidkit {__version__}")
        raise typer.Exit()
    try:
        settings = get_settings()
    except ValidationError as exc:
        common.fail(f"invalid ULIDKIT_* settings: {exc}")
    setup_logging(settings)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


if __name__ == "__main__":
    app()
