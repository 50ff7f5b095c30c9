"""Cross-check the codec against the python-ulid package."""

from __future__ import annotations

import random

from ulid import ULID

from ulidkit.identifier import Ulid


def _values(seed: int, count: int) -> list[int]:
    rng = random.Random(seed)
    return [rng.getrandbits(128) for _ in range(count)]


def test_text_matches_python_ulid() -> None:
    for value in _values(1, 100):
        theirs = ULID.from_bytes(value.to_bytes(16, "big"))
        assert str(Ulid(value)) == str(theirs)


def test_parses_python_ulid_text() -> None:
    for _ in range(50):
        theirs = ULID()
        ours = Ulid.parse(str(theirs))

        assert ours.timestamp == theirs.milliseconds
        assert ours.value == int(theirs)
        assert ours.to_bytes("big") == theirs.bytes


def test_timestamp_matches_python_ulid() -> None:
    theirs = ULID.from_str("01ARZ3NDEKTSV4RRFFQ69G5FAV")
    assert Ulid.parse("01ARZ3NDEKTSV4RRFFQ69G5FAV").timestamp == theirs.milliseconds
