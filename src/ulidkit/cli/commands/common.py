"""Shared helpers for ulidkit CLI commands."""

from __future__ import annotations

import uuid
from enum import Enum
from typing import Any, NoReturn

import typer

from ulidkit.codec import BYTE_LENGTH
from ulidkit.identifier import Ulid

EXIT_INVALID_INPUT = 2


class Encoding(str, Enum):
    TEXT = "text"
    INT = "int"
    HEX = "hex"
    NATIVE = "native"
    NETWORK = "network"
    GUID = "guid"


def fail(message: str) -> NoReturn:
    """Print ``message`` to stderr and exit with the invalid-input code."""

    typer.echo(f"error: {message}", err=True)
    raise typer.Exit(code=EXIT_INVALID_INPUT)


def decode_value(raw: str, encoding: Encoding) -> Ulid:
    """Parse ``raw`` written in ``encoding``, exiting with code 2 when malformed."""

    raw = raw.strip()
    try:
        match encoding:
            case Encoding.TEXT:
                return Ulid.parse(raw)
            case Encoding.INT:
                return Ulid(int(raw, 0))
            case Encoding.HEX:
                return Ulid(int(raw, 16))
            case Encoding.NATIVE:
                return Ulid.from_bytes(_exact_bytes(raw))
            case Encoding.NETWORK:
                return Ulid.from_network_bytes(_exact_bytes(raw))
            case Encoding.GUID:
                return Ulid.from_guid(uuid.UUID(raw))
    except ValueError as exc:
        fail(f"invalid {encoding.value} ULID {raw!r}: {exc}")
    raise AssertionError(f"unhandled encoding {encoding!r}")


def _exact_bytes(raw: str) -> bytes:
    data = bytes.fromhex(raw)
    if len(data) != BYTE_LENGTH:
        raise ValueError(f"expected exactly {BYTE_LENGTH} bytes, got {len(data)}")
    return data


def encode_value(ulid: Ulid, encoding: Encoding) -> str:
    match encoding:
        case Encoding.TEXT:
            return str(ulid)
        case Encoding.INT:
            return str(int(ulid))
        case Encoding.HEX:
            return f"{ulid.value:032x}"
        case Encoding.NATIVE:
            return ulid.to_bytes().hex()
        case Encoding.NETWORK:
            return ulid.to_network_bytes().hex()
        case Encoding.GUID:
            return str(ulid.to_guid())
    raise AssertionError(f"unhandled encoding {encoding!r}")


def describe(ulid: Ulid) -> dict[str, Any]:
    """Return every decoded field of ``ulid`` as a JSON-friendly mapping."""

    try:
        moment: str | None = ulid.datetime.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    except OverflowError:
        moment = None
    details: dict[str, Any] = {
        "timestamp": ulid.timestamp,
        "datetime": moment,
        "randomness": f"{ulid.randomness.value:020x}",
    }
    for encoding in Encoding:
        details[encoding.value] = encode_value(ulid, encoding)
    details["int"] = int(ulid)
    return details


__all__ = [
    "EXIT_INVALID_INPUT",
    "Encoding",
    "decode_value",
    "describe",
    "encode_value",
    "fail",
]
