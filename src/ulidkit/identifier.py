"""ULID and randomness value types.

A :class:`Ulid` wraps one unsigned 128-bit integer. The timestamp lives in
bits 127..80 and the randomness in bits 79..0, so integer order, timestamp
order, and the order of the Base32 text all agree.
"""

from __future__ import annotations

import datetime as dt
import uuid
from dataclasses import dataclass
from typing import Any, ClassVar

from .codec import (
    HOST_BYTEORDER,
    MAX_VALUE,
    WORD_MASK,
    Buffer,
    ByteOrder,
    decode_base32,
    encode_base32,
    int_from_native_bytes,
    int_to_native_bytes,
    join_words,
    native_to_network,
    network_to_native,
    split_words,
    write_into,
)
from .errors import InvalidFormatError, InvalidLengthError

TIMESTAMP_BITS = 48
RANDOMNESS_BITS = 80
TIMESTAMP_MASK = (1 << TIMESTAMP_BITS) - 1
RANDOMNESS_MASK = (1 << RANDOMNESS_BITS) - 1
RANDOMNESS_BYTE_LENGTH = 10

_HIGH16_MASK = 0xFFFF
_EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.UTC)


@dataclass(frozen=True, slots=True, order=True)
class Randomness:
    """The 80 random bits of a ULID, detachable from its timestamp.

    Laid out as a 64-bit ``low64`` field followed by a 16-bit ``high16``
    field, matching how generators fill the value.
    """

    value: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"randomness value must be int, not {type(self.value).__name__}")
        if not 0 <= self.value <= RANDOMNESS_MASK:
            raise ValueError("randomness must fit in 80 unsigned bits")

    @classmethod
    def from_parts(cls, low64: int, high16: int) -> Randomness:
        if not 0 <= low64 <= WORD_MASK or not 0 <= high16 <= _HIGH16_MASK:
            raise ValueError("randomness parts must fit in 64 and 16 unsigned bits")
        return cls((high16 << 64) | low64)

    @classmethod
    def from_bytes(cls, data: Buffer, byteorder: ByteOrder = HOST_BYTEORDER) -> Randomness:
        """Read the first 10 bytes of ``data`` (``low64`` then ``high16``)."""

        if len(data) < RANDOMNESS_BYTE_LENGTH:
            raise InvalidLengthError(RANDOMNESS_BYTE_LENGTH, len(data), what="randomness bytes")
        raw = bytes(data[:RANDOMNESS_BYTE_LENGTH])
        return cls.from_parts(int.from_bytes(raw[:8], byteorder), int.from_bytes(raw[8:], byteorder))

    @property
    def low64(self) -> int:
        return self.value & WORD_MASK

    @property
    def high16(self) -> int:
        return self.value >> 64

    def to_bytes(self, byteorder: ByteOrder = HOST_BYTEORDER) -> bytes:
        return self.low64.to_bytes(8, byteorder) + self.high16.to_bytes(2, byteorder)

    def write_bytes(
        self,
        buffer: bytearray | memoryview,
        offset: int = 0,
        byteorder: ByteOrder = HOST_BYTEORDER,
    ) -> None:
        write_into(buffer, self.to_bytes(byteorder), offset)

    def try_write_bytes(
        self,
        buffer: bytearray | memoryview,
        offset: int = 0,
        byteorder: ByteOrder = HOST_BYTEORDER,
    ) -> bool:
        try:
            self.write_bytes(buffer, offset, byteorder)
        except InvalidLengthError:
            return False
        return True

    def __repr__(self) -> str:
        return f"Randomness(0x{self.value:020x})"


@dataclass(frozen=True, slots=True, order=True)
class Ulid:
    """Universally Unique Lexicographically Sortable Identifier."""

    value: int = 0

    MIN: ClassVar[Ulid]
    MAX: ClassVar[Ulid]
    EMPTY: ClassVar[Ulid]

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"ULID value must be int, not {type(self.value).__name__}")
        if not 0 <= self.value <= MAX_VALUE:
            raise ValueError("ULID value must fit in 128 unsigned bits")

    # -- construction -------------------------------------------------------

    @classmethod
    def from_int(cls, value: int) -> Ulid:
        return cls(value)

    @classmethod
    def from_words(cls, upper: int, lower: int) -> Ulid:
        """Build from the upper (timestamp-bearing) and lower 64-bit words."""

        return cls(join_words(upper, lower))

    @classmethod
    def from_parts(cls, timestamp: int, randomness: Randomness | int) -> Ulid:
        """Pack a millisecond ``timestamp`` and 80 random bits.

        Only the low 48 bits of ``timestamp`` are kept; callers that need a
        hard error for out-of-range times must check before calling.
        """

        if not isinstance(randomness, Randomness):
            randomness = Randomness(randomness)
        return cls(((timestamp & TIMESTAMP_MASK) << RANDOMNESS_BITS) | randomness.value)

    @classmethod
    def from_bytes(cls, data: Buffer, byteorder: ByteOrder = HOST_BYTEORDER) -> Ulid:
        """Build from at least 16 bytes in the native (GUID-compatible) layout."""

        return cls(int_from_native_bytes(data, byteorder))

    @classmethod
    def from_guid(cls, guid: uuid.UUID) -> Ulid:
        return cls.from_bytes(guid.bytes_le)

    @classmethod
    def from_network_bytes(cls, data: Buffer, byteorder: ByteOrder = HOST_BYTEORDER) -> Ulid:
        return cls.from_bytes(network_to_native(data, byteorder), byteorder)

    @classmethod
    def try_from_network_bytes(
        cls,
        data: Buffer,
        byteorder: ByteOrder = HOST_BYTEORDER,
    ) -> Ulid | None:
        try:
            return cls.from_network_bytes(data, byteorder)
        except InvalidLengthError:
            return None

    @classmethod
    def parse(cls, text: str | Buffer) -> Ulid:
        """Decode the 26-character text form, raising ``InvalidFormatError``."""

        return cls(decode_base32(text))

    @classmethod
    def try_parse(cls, text: str | Buffer) -> Ulid | None:
        try:
            return cls.parse(text)
        except InvalidFormatError:
            return None

    # -- accessors ----------------------------------------------------------

    @property
    def timestamp(self) -> int:
        """Milliseconds since the Unix epoch (bits 127..80)."""

        return self.value >> RANDOMNESS_BITS

    @property
    def randomness(self) -> Randomness:
        return Randomness(self.value & RANDOMNESS_MASK)

    @property
    def datetime(self) -> dt.datetime:
        """The timestamp as an aware UTC datetime.

        Raises ``OverflowError`` for timestamps past year 9999.
        """

        return _EPOCH + dt.timedelta(milliseconds=self.timestamp)

    @property
    def upper(self) -> int:
        return self.value >> 64

    @property
    def lower(self) -> int:
        return self.value & WORD_MASK

    @property
    def words(self) -> tuple[int, int]:
        return split_words(self.value)

    # -- conversion ---------------------------------------------------------

    def to_bytes(self, byteorder: ByteOrder = HOST_BYTEORDER) -> bytes:
        return int_to_native_bytes(self.value, byteorder)

    def write_bytes(
        self,
        buffer: bytearray | memoryview,
        offset: int = 0,
        byteorder: ByteOrder = HOST_BYTEORDER,
    ) -> None:
        write_into(buffer, self.to_bytes(byteorder), offset)

    def try_write_bytes(
        self,
        buffer: bytearray | memoryview,
        offset: int = 0,
        byteorder: ByteOrder = HOST_BYTEORDER,
    ) -> bool:
        """Like :meth:`write_bytes` but return ``False`` when the buffer is too short.

        A read-only buffer is a caller error and still raises ``TypeError``.
        """

        try:
            self.write_bytes(buffer, offset, byteorder)
        except InvalidLengthError:
            return False
        return True

    def to_network_bytes(self, byteorder: ByteOrder = HOST_BYTEORDER) -> bytes:
        return native_to_network(self.to_bytes(byteorder), byteorder)

    def write_network_bytes(
        self,
        buffer: bytearray | memoryview,
        offset: int = 0,
        byteorder: ByteOrder = HOST_BYTEORDER,
    ) -> None:
        write_into(buffer, self.to_network_bytes(byteorder), offset)

    def try_write_network_bytes(
        self,
        buffer: bytearray | memoryview,
        offset: int = 0,
        byteorder: ByteOrder = HOST_BYTEORDER,
    ) -> bool:
        try:
            self.write_network_bytes(buffer, offset, byteorder)
        except InvalidLengthError:
            return False
        return True

    def to_guid(self) -> uuid.UUID:
        """Reinterpret the native bytes as a GUID (no reordering)."""

        return uuid.UUID(bytes_le=self.to_bytes())

    # -- ordering -----------------------------------------------------------

    def compare(self, other: Ulid) -> int:
        """Return -1, 0 or 1 as ``self`` sorts before, with, or after ``other``."""

        if self.value == other.value:
            return 0
        if self.timestamp != other.timestamp:
            return -1 if self.timestamp < other.timestamp else 1
        return -1 if self.value < other.value else 1

    # -- dunder -------------------------------------------------------------

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return encode_base32(self.value)

    def __repr__(self) -> str:
        return f"Ulid('{self}')"

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> Any:
        from pydantic_core import core_schema

        from_text = core_schema.no_info_plain_validator_function(cls.parse)
        return core_schema.json_or_python_schema(
            json_schema=core_schema.chain_schema([core_schema.str_schema(), from_text]),
            python_schema=core_schema.no_info_plain_validator_function(cls._coerce),
            serialization=core_schema.plain_serializer_function_ser_schema(
                str,
                when_used="json-unless-none",
            ),
        )

    @classmethod
    def _coerce(cls, value: Any) -> Ulid:
        if isinstance(value, cls):
            return value
        if isinstance(value, uuid.UUID):
            return cls.from_guid(value)
        if isinstance(value, str | bytes | bytearray):
            return cls.parse(value)
        raise ValueError(f"cannot convert {type(value).__name__} to a ULID")


Ulid.MIN = Ulid(0)
Ulid.EMPTY = Ulid.MIN
Ulid.MAX = Ulid(MAX_VALUE)


__all__ = [
    "RANDOMNESS_BITS",
    "RANDOMNESS_MASK",
    "Randomness",
    "TIMESTAMP_BITS",
    "TIMESTAMP_MASK",
    "Ulid",
]
