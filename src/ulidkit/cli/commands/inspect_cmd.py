"""Inspect command."""

from __future__ import annotations

import json

import typer

from ulidkit.cli.commands import common


def run_inspect(value: str, *, source: common.Encoding = common.Encoding.TEXT, as_json: bool = False) -> None:
    """Show the timestamp, randomness, and every encoding of a ULID."""

    details = common.describe(common.decode_value(value, source))
    if as_json:
        typer.echo(json.dumps(details, indent=2))
        return
    width = max(len(key) for key in details)
    for key, field_value in details.items():
        rendered = "-" if field_value is None else field_value
        typer.echo(f"{key:<{width}}  {rendered}")


def register(app: typer.Typer) -> None:
    @app.command(name="inspect", help=run_inspect.__doc__)
    def inspect(
        value: str = typer.Argument(..., help="ULID to inspect."),
        source: common.Encoding = typer.Option(
            common.Encoding.TEXT,
            "--from",
            case_sensitive=False,
            help="Encoding of VALUE.",
        ),
        as_json: bool = typer.Option(False, "--json", help="Print the fields as JSON."),
    ) -> None:
        run_inspect(value, source=source, as_json=as_json)
