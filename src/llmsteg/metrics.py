"""Timing and throughput measurements for codecs."""

from __future__ import annotations

import time
from dataclasses import dataclass

from .codec.base import BytesLike, Codec
from .exceptions import CodecError


@dataclass(frozen=True)
class CodecMetrics:
    """Averaged performance figures for one payload/cover pair."""

    encode_time_ms: float
    decode_time_ms: float
    encode_throughput: float
    decode_throughput: float
    capacity_ratio: float


def _throughput(size: int, elapsed_ms: float) -> float:
    if elapsed_ms <= 0:
        return 0.0
    return size / (elapsed_ms / 1000.0)


def measure_codec(codec: Codec, payload: BytesLike, cover: BytesLike, *, repeats: int = 1) -> CodecMetrics:
    """Time ``repeats`` encode/decode round trips of *payload* through *codec*.

    Throughput figures are payload bytes per second.  The round trip is
    verified on every repetition.
    """

    if repeats <= 0:
        raise ValueError("repeats must be positive")
    payload = bytes(payload)
    cover = bytes(cover)

    encode_total = 0.0
    decode_total = 0.0
    for _ in range(repeats):
        started = time.perf_counter()
        encoded = codec.encode(payload, cover)
        encode_total += time.perf_counter() - started

        started = time.perf_counter()
        decoded = codec.decode(encoded)
        decode_total += time.perf_counter() - started

        if decoded != payload:
            raise CodecError(f"codec {codec.name!r} did not reproduce the payload")

    encode_ms = encode_total * 1000.0 / repeats
    decode_ms = decode_total * 1000.0 / repeats
    return CodecMetrics(
        encode_time_ms=encode_ms,
        decode_time_ms=decode_ms,
        encode_throughput=_throughput(len(payload), encode_ms),
        decode_throughput=_throughput(len(payload), decode_ms),
        capacity_ratio=len(payload) / len(cover) if cover else 0.0,
    )


__all__ = ["CodecMetrics", "measure_codec"]
