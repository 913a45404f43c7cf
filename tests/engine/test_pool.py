from __future__ import annotations

import pytest

from llmsteg.codec import LSBCodec
from llmsteg.engine import CoverMedium, CoverPool, StegEngine
from llmsteg.engine.pool import estimate_capacity, normalise_cover
from llmsteg.exceptions import ConfigurationError


def test_round_robin_wraps() -> None:
    pool = CoverPool([CoverMedium(b"a"), CoverMedium(b"b"), CoverMedium(b"c")])
    picked = [pool.next().data for _ in range(5)]
    assert picked == [b"a", b"b", b"c", b"a", b"b"]
    assert pool.cursor == 2


def test_empty_pool_returns_none() -> None:
    assert CoverPool().next() is None


def test_replace_resets_cursor() -> None:
    pool = CoverPool([CoverMedium(b"a"), CoverMedium(b"b")])
    pool.next()
    pool.replace([CoverMedium(b"c")])
    assert pool.cursor == 0
    assert pool.next().data == b"c"


@pytest.mark.parametrize(("length", "expected"), [(0, 0), (3, 0), (12, 1), (100, 12)])
def test_fallback_capacity_never_negative(length: int, expected: int) -> None:
    assert estimate_capacity(bytes(length)) == expected


def test_normalise_cover_uses_codec_when_present() -> None:
    medium = normalise_cover(bytes(100), LSBCodec(), kind="pattern")
    assert medium.capacity == 8
    assert medium.kind == "pattern"


def test_normalise_cover_recomputes_supplied_capacity() -> None:
    medium = normalise_cover(CoverMedium(data=bytes(128), kind="test", capacity=99), LSBCodec())
    assert medium.capacity == 12
    assert medium.kind == "test"


def test_normalise_cover_rejects_other_types() -> None:
    with pytest.raises(ConfigurationError):
        normalise_cover("not bytes")  # type: ignore[arg-type]


def test_pool_stats() -> None:
    engine = StegEngine()
    assert engine.get_pool_stats().to_dict() == {
        "size": 0,
        "total_capacity": 0,
        "average_capacity": 0,
    }

    engine.set_codec(LSBCodec())
    engine.add_cover_media(bytes(256))
    engine.add_cover_media(bytes(100))
    stats = engine.get_pool_stats()
    assert stats.size == 2
    assert stats.total_capacity == 36
    assert stats.average_capacity == 18


def test_set_codec_recomputes_existing_capacities() -> None:
    engine = StegEngine()
    engine.add_cover_media(bytes(100))
    assert engine.covers()[0].capacity == 12

    engine.set_codec(LSBCodec())
    assert engine.covers()[0].capacity == 8


def test_add_cover_media_returns_stored_entry() -> None:
    engine = StegEngine()
    engine.set_codec(LSBCodec())
    stored = engine.add_cover_media(bytearray(64), kind="noise")
    assert stored.kind == "noise"
    assert stored.capacity == 4
    assert engine.covers() == (stored,)
