"""Least-significant-bit embedding codec.

Every payload bit occupies bit 0 of one cover byte, so a cover of ``n``
bytes carries ``(n - 32) // 8`` payload bytes after the 32-bit length
header.  The 8x expansion is the price for a trivially invertible
capacity formula and untouched high-order bits.

Buffer layout::

    cover bytes 0..31        payload length, bit k in bit 0 of byte k
    cover bytes 32..32+8n-1  payload bits, LSB-first within each byte
    remainder                untouched cover bytes
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..exceptions import CapacityError, FramingError, InvalidLengthError
from .base import BytesLike, Codec

HEADER_BYTES = 4
HEADER_BITS = HEADER_BYTES * 8
MAX_PAYLOAD_LENGTH = 2**HEADER_BITS - 1

_HEADER_SHIFTS = np.arange(HEADER_BITS, dtype=np.uint64)


def required_cover_size(payload_length: int) -> int:
    """Return the minimum cover size (bytes) for a payload of *payload_length*."""

    return (payload_length + HEADER_BYTES) * 8


def _as_array(data: BytesLike) -> np.ndarray:
    return np.frombuffer(bytes(data), dtype=np.uint8)


def _length_bits(length: int) -> np.ndarray:
    return ((np.uint64(length) >> _HEADER_SHIFTS) & np.uint64(1)).astype(np.uint8)


class LSBCodec(Codec):
    """Embed payload bits into the least significant bit of each cover byte."""

    name = "lsb"
    accepts_seed = True

    def __init__(self, seed: Optional[str] = None) -> None:
        # Stored for keyed variants; the embedding itself ignores it.
        self._seed = seed

    def encode(self, payload: BytesLike, cover: BytesLike) -> bytes:
        payload = bytes(payload)
        if len(payload) > MAX_PAYLOAD_LENGTH:
            raise CapacityError(
                f"payload of {len(payload)} bytes exceeds the 32-bit length header"
            )

        required = required_cover_size(len(payload))
        if len(cover) < required:
            raise CapacityError(
                f"cover media too small: needs {required} bytes, got {len(cover)}"
            )

        out = _as_array(cover).copy()
        bits = np.concatenate(
            (
                _length_bits(len(payload)),
                np.unpackbits(np.frombuffer(payload, dtype=np.uint8), bitorder="little"),
            )
        )
        span = bits.size
        out[:span] = (out[:span] & 0xFE) | bits
        return out.tobytes()

    def decode(self, steg_data: BytesLike) -> bytes:
        data = _as_array(steg_data)
        if data.size < HEADER_BITS:
            raise FramingError(
                f"data too small to contain a length header: {data.size} < {HEADER_BITS} bytes"
            )

        header = (data[:HEADER_BITS] & 1).astype(np.uint64)
        length = int(np.sum(header << _HEADER_SHIFTS))

        max_length = (data.size - HEADER_BITS) // 8
        if length > max_length:
            raise InvalidLengthError(
                f"invalid data length: {length} exceeds maximum {max_length}"
            )
        if length == 0:
            return b""

        start = HEADER_BITS
        stop = start + length * 8
        return np.packbits(data[start:stop] & 1, bitorder="little").tobytes()

    def calculate_capacity(self, cover: BytesLike) -> int:
        return max(0, (len(cover) - HEADER_BITS) // 8)

    def validate_cover(self, cover: BytesLike) -> bool:
        return len(cover) >= (HEADER_BYTES + 1) * 8

    def set_seed(self, seed: str) -> None:
        self._seed = seed

    @property
    def seed(self) -> Optional[str]:
        return self._seed


def create_lsb_codec(seed: Optional[str] = None) -> LSBCodec:
    """Factory used by the codec registry."""

    return LSBCodec(seed=seed)


__all__ = [
    "HEADER_BITS",
    "HEADER_BYTES",
    "LSBCodec",
    "MAX_PAYLOAD_LENGTH",
    "create_lsb_codec",
    "required_cover_size",
]
