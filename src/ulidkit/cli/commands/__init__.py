"""Command registrations for the ulidkit CLI."""

from __future__ import annotations

import typer

from . import convert
from . import inspect_cmd
from . import new

COMMAND_MODULES = (
    new,
    inspect_cmd,
    convert,
)


def register_all(app: typer.Typer) -> None:
    for module in COMMAND_MODULES:
        module.register(app)
