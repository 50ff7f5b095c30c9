"""ULID value type, Base32 and network codecs, and generators."""

from __future__ import annotations

from importlib import metadata as _metadata

from .codec import decode_base32, encode_base32, native_to_network, network_to_native
from .errors import InvalidFormatError, InvalidLengthError, UlidError
from .generation import (
    UlidGenerator,
    new_ulid,
    new_ulid_crypto,
    new_ulid_from_random,
    new_ulid_with_randomness,
    spawn_generators,
)
from .identifier import Randomness, Ulid
from .sources import (
    Clock,
    CryptoEntropy,
    EntropySource,
    FixedClock,
    GeneratorEntropy,
    SeededEntropy,
    SystemClock,
)

try:  # pragma: no cover - executed when package metadata is available
    __version__ = _metadata.version("ulidkit")
except _metadata.PackageNotFoundError:  # pragma: no cover - local source tree fallback
    __version__ = "0.0.0"

__all__ = [
    "Clock",
    "CryptoEntropy",
    "EntropySource",
    "FixedClock",
    "GeneratorEntropy",
    "InvalidFormatError",
    "InvalidLengthError",
    "Randomness",
    "SeededEntropy",
    "SystemClock",
    "Ulid",
    "UlidError",
    "UlidGenerator",
    "__version__",
    "decode_base32",
    "encode_base32",
    "native_to_network",
    "network_to_native",
    "new_ulid",
    "new_ulid_crypto",
    "new_ulid_from_random",
    "new_ulid_with_randomness",
    "spawn_generators",
]
