"""Base32 text codec, network byte order, and byte-array marshaling for ULIDs.

Everything here works on plain integers and byte strings so the value types in
:mod:`ulidkit.identifier` can stay thin wrappers around one 128-bit ``int``.

Native layout
    Two 64-bit words, the upper word (timestamp and the top 16 random bits)
    first, each written in the host byte order. This is also the in-memory
    layout of a GUID built from the same 16 bytes.

Network layout
    The native bytes ``b0..b15`` reordered as
    ``b5 b4 b3 b2 b1 b0 b15 b14 b13 b12 b11 b10 b9 b8 b7 b6`` on a
    little-endian host; identical to the native bytes on a big-endian host.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import Literal

from .errors import InvalidFormatError, InvalidLengthError

ByteOrder = Literal["little", "big"]
Buffer = bytes | bytearray | memoryview

ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
ENCODED_LENGTH = 26
BYTE_LENGTH = 16
WORD_BITS = 64
WORD_MASK = (1 << WORD_BITS) - 1
MAX_VALUE = (1 << 128) - 1

NETWORK_ORDER: tuple[int, ...] = (5, 4, 3, 2, 1, 0, 15, 14, 13, 12, 11, 10, 9, 8, 7, 6)
HOST_BYTEORDER: ByteOrder = sys.byteorder

_MAX_CODE_POINT = ord("z")


def _build_decode_table() -> tuple[int, ...]:
    table = [-1] * (_MAX_CODE_POINT + 1)
    for index, symbol in enumerate(ALPHABET):
        table[ord(symbol)] = index
    return tuple(table)


# Indexed by code point 0..122; -1 marks symbols outside the alphabet,
# which includes every lower-case letter.
DECODE_TABLE: tuple[int, ...] = _build_decode_table()


# ---------------------------------------------------------------------------
# Base32
# ---------------------------------------------------------------------------


def encode_base32(value: int) -> str:
    """Return the 26-character text form of a 128-bit ``value``."""

    if not 0 <= value <= MAX_VALUE:
        raise ValueError("ULID value must fit in 128 unsigned bits")
    symbols: list[str] = []
    for _ in range(ENCODED_LENGTH):
        symbols.append(ALPHABET[value & 0x1F])
        value >>= 5
    symbols.reverse()
    return "".join(symbols)


def _code_points(text: str | Buffer) -> Sequence[int]:
    if isinstance(text, str):
        return [ord(symbol) for symbol in text]
    if isinstance(text, bytes | bytearray | memoryview):
        return bytes(text)
    raise TypeError(f"ULID text must be str or bytes, not {type(text).__name__}")


def decode_base32(text: str | Buffer) -> int:
    """Decode 26 Base32 symbols into a 128-bit integer.

    ``bytes`` input is read as ASCII code units. Raises
    :class:`~ulidkit.errors.InvalidFormatError` on a wrong length, on any
    symbol outside the alphabet, or when the leading symbol would push the
    value past 128 bits.
    """

    points = _code_points(text)
    if len(points) != ENCODED_LENGTH:
        raise InvalidFormatError(
            f"ULID text must be {ENCODED_LENGTH} characters, got {len(points)}"
        )
    value = 0
    for position, point in enumerate(points):
        digit = DECODE_TABLE[point] if point <= _MAX_CODE_POINT else -1
        if digit < 0:
            raise InvalidFormatError(
                f"invalid ULID character {chr(point)!r} at position {position}"
            )
        value = (value << 5) | digit
    if value > MAX_VALUE:
        raise InvalidFormatError("ULID text overflows 128 bits (first character must be 0-7)")
    return value


def try_decode_base32(text: str | Buffer) -> int | None:
    """Like :func:`decode_base32` but return ``None`` for malformed text."""

    try:
        return decode_base32(text)
    except InvalidFormatError:
        return None


# ---------------------------------------------------------------------------
# Byte order
# ---------------------------------------------------------------------------


def _require(data: Buffer, length: int, what: str) -> None:
    if len(data) < length:
        raise InvalidLengthError(length, len(data), what=what)


def _reorder(data: Buffer, byteorder: ByteOrder, what: str) -> bytes:
    _require(data, BYTE_LENGTH, what)
    raw = bytes(data[:BYTE_LENGTH])
    if byteorder == "big":
        return raw
    return bytes(raw[index] for index in NETWORK_ORDER)


def native_to_network(data: Buffer, byteorder: ByteOrder = HOST_BYTEORDER) -> bytes:
    """Reorder 16 native-layout bytes into network format."""

    return _reorder(data, byteorder, "native ULID bytes")


def network_to_native(data: Buffer, byteorder: ByteOrder = HOST_BYTEORDER) -> bytes:
    """Reorder 16 network-format bytes back into the native layout."""

    return _reorder(data, byteorder, "network ULID bytes")


# ---------------------------------------------------------------------------
# Marshaling
# ---------------------------------------------------------------------------


def split_words(value: int) -> tuple[int, int]:
    """Return the ``(upper, lower)`` 64-bit words of a 128-bit value."""

    return value >> WORD_BITS, value & WORD_MASK


def join_words(upper: int, lower: int) -> int:
    if not 0 <= upper <= WORD_MASK or not 0 <= lower <= WORD_MASK:
        raise ValueError("ULID words must fit in 64 unsigned bits")
    return (upper << WORD_BITS) | lower


def int_to_native_bytes(value: int, byteorder: ByteOrder = HOST_BYTEORDER) -> bytes:
    upper, lower = split_words(value)
    return upper.to_bytes(8, byteorder) + lower.to_bytes(8, byteorder)


def int_from_native_bytes(data: Buffer, byteorder: ByteOrder = HOST_BYTEORDER) -> int:
    """Read a 128-bit value from the first 16 native-layout bytes of ``data``."""

    _require(data, BYTE_LENGTH, "ULID bytes")
    raw = bytes(data[:BYTE_LENGTH])
    return join_words(int.from_bytes(raw[:8], byteorder), int.from_bytes(raw[8:], byteorder))


def write_into(buffer: bytearray | memoryview, payload: bytes, offset: int = 0) -> None:
    """Copy ``payload`` into ``buffer`` at ``offset``.

    Raises :class:`~ulidkit.errors.InvalidLengthError` when the payload does
    not fit and ``TypeError`` when ``buffer`` is read-only.
    """

    view = memoryview(buffer).cast("B")
    if view.readonly:
        raise TypeError("target buffer is read-only")
    available = max(len(view) - offset, 0)
    if offset < 0 or available < len(payload):
        raise InvalidLengthError(len(payload), available, what="target buffer")
    view[offset : offset + len(payload)] = payload


__all__ = [
    "ALPHABET",
    "BYTE_LENGTH",
    "Buffer",
    "ByteOrder",
    "DECODE_TABLE",
    "ENCODED_LENGTH",
    "HOST_BYTEORDER",
    "MAX_VALUE",
    "NETWORK_ORDER",
    "WORD_MASK",
    "decode_base32",
    "encode_base32",
    "int_from_native_bytes",
    "int_to_native_bytes",
    "join_words",
    "native_to_network",
    "network_to_native",
    "split_words",
    "try_decode_base32",
    "write_into",
]
