"""Module entrypoint so `python -m ulidkit` runs the CLI."""

from __future__ import annotations

import sys


def _print_install_help(missing: str) -> None:
    message = (
        f"Missing dependency '{missing}'. Install ulidkit into an active virtualenv first:\n\n"
        "    pip install -e .\n"
    )
    sys.stderr.write(message + "\n")
    sys.exit(1)


def main() -> None:
    try:
        from ulidkit.cli import app
    except ModuleNotFoundError as exc:
        missing = exc.name or "ulidkit dependencies"
        _print_install_help(missing)

    app()


if __name__ == "__main__":
    main()
