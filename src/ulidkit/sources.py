"""Clock and entropy capabilities consumed by ULID generators.

Generators never reach for global state: each one holds a :class:`Clock` and an
:class:`EntropySource`, so tests and workers can swap either independently.
"""

from __future__ import annotations

import logging
import random
import threading
import time
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from .identifier import RANDOMNESS_BITS, Randomness

logger = logging.getLogger(__name__)

NANOSECONDS_PER_MILLISECOND = 1_000_000
NANOSECONDS_PER_TICK = 100


@runtime_checkable
class Clock(Protocol):
    """Source of the current time in milliseconds since the Unix epoch."""

    def now_ms(self) -> int: ...


@runtime_checkable
class RandomBits(Protocol):
    """Anything that can hand out ``k`` random bits (``random.Random`` does)."""

    def getrandbits(self, k: int, /) -> int: ...


@runtime_checkable
class EntropySource(Protocol):
    """Source of the 80 random bits of a ULID."""

    def randomness(self) -> Randomness: ...


class SystemClock:
    """Wall-clock time read from :func:`time.time_ns`."""

    __slots__ = ()

    def now_ms(self) -> int:
        return time.time_ns() // NANOSECONDS_PER_MILLISECOND

    def __repr__(self) -> str:
        return "SystemClock()"


class FixedClock:
    """Clock pinned to one instant."""

    __slots__ = ("timestamp",)

    def __init__(self, timestamp: int) -> None:
        self.timestamp = timestamp

    def now_ms(self) -> int:
        return self.timestamp

    def __repr__(self) -> str:
        return f"FixedClock({self.timestamp})"


def _default_ticks() -> int:
    return time.time_ns() // NANOSECONDS_PER_TICK


def _fold_seed(ticks: int) -> int:
    # 64-bit tick count folded to 32 bits (low word xor high word).
    ticks &= 0xFFFF_FFFF_FFFF_FFFF
    return (ticks ^ (ticks >> 32)) & 0xFFFF_FFFF


class SeededEntropy:
    """Fast, non-cryptographic randomness seeded from the clock on every call.

    Two calls that land in the same 100 ns tick produce the same bits; use
    :class:`CryptoEntropy` or a caller-owned generator when that matters.
    """

    __slots__ = ("_ticks",)

    def __init__(self, ticks: Callable[[], int] | None = None) -> None:
        self._ticks = ticks or _default_ticks

    def randomness(self) -> Randomness:
        generator = random.Random(_fold_seed(self._ticks()))
        return Randomness(generator.getrandbits(RANDOMNESS_BITS))

    def __repr__(self) -> str:
        return "SeededEntropy()"


class GeneratorEntropy:
    """Randomness drawn from a generator owned by the caller.

    The caller controls seeding and must not share one generator between
    concurrent callers without its own locking.
    """

    __slots__ = ("generator",)

    def __init__(self, generator: RandomBits) -> None:
        self.generator = generator

    @classmethod
    def seeded(cls, seed: int) -> GeneratorEntropy:
        return cls(random.Random(seed))

    def randomness(self) -> Randomness:
        return Randomness(self.generator.getrandbits(RANDOMNESS_BITS))

    def __repr__(self) -> str:
        return f"GeneratorEntropy({self.generator!r})"


class CryptoEntropy:
    """Randomness from the operating system's secure source.

    Each thread lazily gets its own :class:`random.SystemRandom`, so no two
    threads ever draw from the same generator instance.
    """

    __slots__ = ("_local",)

    def __init__(self) -> None:
        self._local = threading.local()

    def _generator(self) -> random.SystemRandom:
        generator = getattr(self._local, "generator", None)
        if generator is None:
            generator = random.SystemRandom()
            self._local.generator = generator
            logger.debug(
                "ulidkit.entropy.crypto.thread_init",
                extra={"worker_thread": threading.current_thread().name},
            )
        return generator

    def randomness(self) -> Randomness:
        return Randomness(self._generator().getrandbits(RANDOMNESS_BITS))

    def __repr__(self) -> str:
        return "CryptoEntropy()"


__all__ = [
    "Clock",
    "CryptoEntropy",
    "EntropySource",
    "FixedClock",
    "GeneratorEntropy",
    "RandomBits",
    "SeededEntropy",
    "SystemClock",
]
