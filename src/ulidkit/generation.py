"""ULID generation: a clock plus an entropy source."""

from __future__ import annotations

import datetime as dt
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .identifier import Randomness, Ulid
from .sources import (
    Clock,
    CryptoEntropy,
    EntropySource,
    GeneratorEntropy,
    RandomBits,
    SeededEntropy,
    SystemClock,
)

if TYPE_CHECKING:
    from .settings import Settings


@dataclass(slots=True)
class UlidGenerator:
    """Produce ULIDs from an injected clock and entropy source.

    A generator is as thread-safe as its entropy source: the default
    :class:`SeededEntropy` and :class:`CryptoEntropy` keep no shared state,
    while a :class:`GeneratorEntropy` belongs to one worker at a time.
    """

    clock: Clock = field(default_factory=SystemClock)
    entropy: EntropySource = field(default_factory=SeededEntropy)

    def new(self, timestamp: int | None = None) -> Ulid:
        """Return a new ULID at ``timestamp`` (ms) or at the clock's current time."""

        if timestamp is None:
            timestamp = self.clock.now_ms()
        return Ulid.from_parts(timestamp, self.entropy.randomness())

    def batch(self, count: int, timestamp: int | None = None) -> list[Ulid]:
        return [self.new(timestamp) for _ in range(count)]


_FAST = UlidGenerator()
_CRYPTO = UlidGenerator(entropy=CryptoEntropy())


def new_ulid(timestamp: int | None = None) -> Ulid:
    """Generate with the fast, clock-seeded randomness policy."""

    return _FAST.new(timestamp)


def new_ulid_crypto(timestamp: int | None = None) -> Ulid:
    """Generate with randomness from the operating system's secure source."""

    return _CRYPTO.new(timestamp)


def new_ulid_from_random(random_bits: RandomBits, timestamp: int | None = None) -> Ulid:
    """Generate with randomness drawn from the caller's generator."""

    if timestamp is None:
        timestamp = _FAST.clock.now_ms()
    return Ulid.from_parts(timestamp, GeneratorEntropy(random_bits).randomness())


def new_ulid_with_randomness(timestamp: int, randomness: Randomness | int) -> Ulid:
    return Ulid.from_parts(timestamp, randomness)


def spawn_generators(
    count: int,
    *,
    seed: int,
    clock: Clock | None = None,
) -> list[UlidGenerator]:
    """Return ``count`` independent generators, worker ``i`` seeded with ``seed + i``.

    Hand one generator to each worker; none of them share generator state.
    """

    if count < 0:
        raise ValueError("count must be non-negative")
    shared_clock = clock or SystemClock()
    return [
        UlidGenerator(clock=shared_clock, entropy=GeneratorEntropy(random.Random(seed + index)))
        for index in range(count)
    ]


def generator_from_settings(settings: Settings) -> UlidGenerator:
    """Build the generator selected by ``ULIDKIT_RANDOMNESS`` / ``ULIDKIT_SEED``."""

    if settings.seed is not None:
        return UlidGenerator(entropy=GeneratorEntropy.seeded(settings.seed))
    if settings.randomness == "crypto":
        return UlidGenerator(entropy=CryptoEntropy())
    return UlidGenerator(entropy=SeededEntropy())


def timestamp_from_datetime(moment: dt.datetime) -> int:
    """Milliseconds since the epoch for ``moment``; naive values are treated as UTC."""

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=dt.UTC)
    delta = moment - dt.datetime(1970, 1, 1, tzinfo=dt.UTC)
    return delta // dt.timedelta(milliseconds=1)


__all__ = [
    "UlidGenerator",
    "generator_from_settings",
    "new_ulid",
    "new_ulid_crypto",
    "new_ulid_from_random",
    "new_ulid_with_randomness",
    "spawn_generators",
    "timestamp_from_datetime",
]
