"""Convert command."""

from __future__ import annotations

import typer

from ulidkit.cli.commands import common


def run_convert(
    value: str,
    *,
    source: common.Encoding = common.Encoding.TEXT,
    target: common.Encoding = common.Encoding.TEXT,
) -> None:
    """Convert a ULID between text, integer, hex, native, network, and GUID forms."""

    typer.echo(common.encode_value(common.decode_value(value, source), target))


def register(app: typer.Typer) -> None:
    @app.command(name="convert", help=run_convert.__doc__)
    def convert(
        value: str = typer.Argument(..., help="ULID to convert."),
        source: common.Encoding = typer.Option(
            common.Encoding.TEXT,
            "--from",
            case_sensitive=False,
            help="Encoding of VALUE.",
        ),
        target: common.Encoding = typer.Option(
            common.Encoding.TEXT,
            "--to",
            case_sensitive=False,
            help="Encoding to print.",
        ),
    ) -> None:
        run_convert(value, source=source, target=target)
