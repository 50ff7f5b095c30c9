from __future__ import annotations

import random
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime, timedelta, timezone

import pytest

from ulidkit.generation import (
    UlidGenerator,
    generator_from_settings,
    new_ulid,
    new_ulid_crypto,
    new_ulid_from_random,
    new_ulid_with_randomness,
    spawn_generators,
    timestamp_from_datetime,
)
from ulidkit.identifier import TIMESTAMP_MASK, Randomness, Ulid
from ulidkit.settings import Settings
from ulidkit.sources import CryptoEntropy, FixedClock, GeneratorEntropy, SeededEntropy


def test_generator_reads_clock_when_no_timestamp() -> None:
    generator = UlidGenerator(clock=FixedClock(1234), entropy=GeneratorEntropy.seeded(1))
    assert generator.new().timestamp == 1234


def test_generator_masks_explicit_timestamp() -> None:
    generator = UlidGenerator(clock=FixedClock(0), entropy=GeneratorEntropy.seeded(1))
    assert generator.new(timestamp=(1 << 48) + 7).timestamp == 7


@pytest.mark.parametrize("timestamp", [0, 1, 1000, 1_700_000_000_000, TIMESTAMP_MASK])
def test_every_policy_keeps_timestamp(timestamp: int) -> None:
    assert new_ulid(timestamp).timestamp == timestamp
    assert new_ulid_crypto(timestamp).timestamp == timestamp
    assert new_ulid_from_random(random.Random(0), timestamp).timestamp == timestamp


def test_default_generation_uses_wall_clock() -> None:
    before = time.time_ns() // 1_000_000
    ulid = new_ulid()
    after = time.time_ns() // 1_000_000
    assert before <= ulid.timestamp <= after


def test_ulids_at_later_times_sort_later() -> None:
    assert new_ulid(1000) < new_ulid(2000)
    assert new_ulid_crypto(1000) < new_ulid_crypto(2000)


def test_caller_generator_is_reproducible() -> None:
    first = new_ulid_from_random(random.Random(3), 5)
    second = new_ulid_from_random(random.Random(3), 5)

    assert first == second
    assert first == Ulid.from_parts(5, random.Random(3).getrandbits(80))


def test_new_ulid_with_randomness() -> None:
    randomness = Randomness(0xABCDEF)
    ulid = new_ulid_with_randomness(77, randomness)
    assert ulid.timestamp == 77
    assert ulid.randomness == randomness


def test_crypto_generation_is_distinct() -> None:
    ulids = {new_ulid_crypto(1000) for _ in range(100)}
    assert len(ulids) == 100


def test_batch_generates_requested_count() -> None:
    generator = UlidGenerator(clock=FixedClock(500), entropy=GeneratorEntropy.seeded(2))
    batch = generator.batch(5)
    assert len(batch) == 5
    assert {ulid.timestamp for ulid in batch} == {500}


def test_spawned_generators_are_independent_and_reproducible() -> None:
    clock = FixedClock(10_000)
    first = [generator.batch(3) for generator in spawn_generators(4, seed=100, clock=clock)]
    second = [generator.batch(3) for generator in spawn_generators(4, seed=100, clock=clock)]

    assert first == second
    assert first[0] == UlidGenerator(clock=clock, entropy=GeneratorEntropy.seeded(100)).batch(3)
    assert len({ulid for batch in first for ulid in batch}) == 12


def test_spawned_generators_across_threads_match_sequential_run() -> None:
    clock = FixedClock(20_000)
    sequential = [generator.batch(50) for generator in spawn_generators(8, seed=7, clock=clock)]

    generators = spawn_generators(8, seed=7, clock=clock)
    with ThreadPoolExecutor(max_workers=4) as pool:
        parallel = list(pool.map(lambda generator: generator.batch(50), generators))

    assert parallel == sequential


def test_spawn_generators_rejects_negative_count() -> None:
    with pytest.raises(ValueError):
        spawn_generators(-1, seed=0)
    assert spawn_generators(0, seed=0) == []


def test_generator_from_settings_selects_policy() -> None:
    assert isinstance(generator_from_settings(Settings(_env_file=None)).entropy, SeededEntropy)
    crypto = generator_from_settings(Settings(_env_file=None, randomness="crypto"))
    assert isinstance(crypto.entropy, CryptoEntropy)
    seeded = generator_from_settings(Settings(_env_file=None, randomness="crypto", seed=11))
    assert isinstance(seeded.entropy, GeneratorEntropy)
    assert seeded.new(1) == UlidGenerator(entropy=GeneratorEntropy.seeded(11)).new(1)


@pytest.mark.parametrize(
    ("moment", "expected"),
    [
        (datetime(1970, 1, 1, tzinfo=UTC), 0),
        (datetime(1970, 1, 1, 0, 0, 1), 1000),
        (datetime(2023, 11, 14, 22, 13, 20, 123000, tzinfo=UTC), 1_700_000_000_123),
        (datetime(1970, 1, 1, 2, 0, tzinfo=timezone(timedelta(hours=2))), 0),
    ],
)
def test_timestamp_from_datetime(moment: datetime, expected: int) -> None:
    assert timestamp_from_datetime(moment) == expected
