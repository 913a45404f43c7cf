from __future__ import annotations

import pytest

from llmsteg.codec import LSBCodec
from llmsteg.codec.base import Codec
from llmsteg.engine import CoverMedium, EngineConfig, ErrorPolicy, StegEngine
from llmsteg.exceptions import ConfigurationError


class _UnseededCodec(Codec):
    name = "unseeded"

    def encode(self, payload, cover):
        return bytes(cover)

    def decode(self, steg_data):
        return b""

    def calculate_capacity(self, cover):
        return len(cover)


def test_defaults() -> None:
    config = EngineConfig()
    assert config.enabled is True
    assert config.codec_name == "lsb"
    assert config.cover_media == ()
    assert config.on_error is ErrorPolicy.PASSTHROUGH
    assert config.debug is False
    assert config.seed


def test_random_seed_differs_between_configs() -> None:
    assert EngineConfig().seed != EngineConfig().seed


def test_from_mapping_accepts_aliases() -> None:
    config = EngineConfig.from_mapping(
        {"codecName": "custom", "onError": "throw", "coverMedia": [b"\x00" * 8], "debug": True}
    )
    assert config.codec_name == "custom"
    assert config.on_error is ErrorPolicy.THROW
    assert config.cover_media == (b"\x00" * 8,)
    assert config.debug is True


def test_unknown_option_rejected() -> None:
    with pytest.raises(ConfigurationError):
        EngineConfig.from_mapping({"encodingRatio": 100})


def test_invalid_policy_rejected() -> None:
    with pytest.raises(ConfigurationError):
        EngineConfig(on_error="explode")


def test_single_buffer_is_not_a_cover_list() -> None:
    with pytest.raises(ConfigurationError):
        EngineConfig(cover_media=b"\x00" * 64)


def test_updated_returns_new_instance() -> None:
    config = EngineConfig(seed="one")
    updated = config.updated({"enabled": False, "seed": None})
    assert config.enabled is True
    assert updated.enabled is False
    assert updated.seed == "one"


def test_engine_update_config_emits_event() -> None:
    engine = StegEngine()
    seen = []
    engine.on("configUpdated", seen.append)

    updated = engine.update_config(enabled=False)

    assert engine.get_config().enabled is False
    assert seen == [updated]


def test_update_config_rebuilds_pool_and_resets_cursor() -> None:
    engine = StegEngine()
    engine.set_codec(LSBCodec())
    engine.add_cover_media(bytes([0x11]) * 256)
    engine.add_cover_media(bytes([0x22]) * 256)
    engine.encode(b"a")

    engine.update_config({"coverMedia": [bytes(256), bytes(128)]})

    stats = engine.get_pool_stats()
    assert stats.size == 2
    assert stats.total_capacity == 28 + 12
    assert engine.covers()[0].data == bytes(256)
    reference = LSBCodec().encode(b"a", bytes(256))
    assert engine.encode(b"a").data == reference


def test_update_config_without_cover_media_keeps_pool() -> None:
    engine = StegEngine()
    engine.add_cover_media(bytes(256))
    engine.update_config(debug=True)
    assert engine.get_pool_stats().size == 1


def test_seed_propagation() -> None:
    engine = StegEngine(seed="first")
    codec = LSBCodec()
    engine.set_codec(codec)
    assert codec.seed == "first"

    engine.update_config(seed="second")
    assert codec.seed == "second"


def test_initial_cover_media_from_config() -> None:
    engine = StegEngine(
        {"cover_media": [bytes(100), CoverMedium(data=bytes(200), kind="noise")]}
    )
    kinds = [cover.kind for cover in engine.covers()]
    assert kinds == ["binary", "noise"]
    assert [cover.capacity for cover in engine.covers()] == [12, 24]


def test_engine_accepts_config_instance_with_overrides() -> None:
    engine = StegEngine(EngineConfig(seed="s"), debug=True)
    assert engine.config.seed == "s"
    assert engine.config.debug is True


def test_seed_skipped_for_codecs_without_seeding() -> None:
    engine = StegEngine(seed="first")
    codec = _UnseededCodec()

    engine.set_codec(codec)
    updated = engine.update_config(seed="x")

    assert updated.seed == "x"
    assert engine.codec is codec
    assert codec.seed is None
