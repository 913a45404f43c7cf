"""Bit-plane helpers used for diagnostics and cover comparisons."""

from __future__ import annotations

from bitarray import bitarray
from bitarray.util import count_xor

from ..codec.base import BytesLike


def _to_bitarray(data: BytesLike) -> bitarray:
    bits = bitarray(endian="little")
    bits.frombytes(bytes(data))
    return bits


def lsb_plane(data: BytesLike) -> bitarray:
    """Return bit 0 of every byte of *data* as a bitarray."""

    plane = bitarray(endian="little")
    plane.extend(byte & 1 for byte in bytes(data))
    return plane


def popcount(data: BytesLike) -> int:
    """Count the set bits in *data*."""

    return _to_bitarray(data).count(1)


def hamming_distance(a: BytesLike, b: BytesLike) -> int:
    """Bitwise Hamming distance over the common prefix of *a* and *b*."""

    common = min(len(a), len(b))
    return count_xor(_to_bitarray(bytes(a)[:common]), _to_bitarray(bytes(b)[:common]))


def lsb_changes(original: BytesLike, modified: BytesLike) -> int:
    """Number of common-prefix positions whose bit 0 differs."""

    common = min(len(original), len(modified))
    return count_xor(
        lsb_plane(bytes(original)[:common]),
        lsb_plane(bytes(modified)[:common]),
    )


def high_bits_equal(a: BytesLike, b: BytesLike) -> bool:
    """Return ``True`` when bits 1..7 of every byte agree."""

    a, b = bytes(a), bytes(b)
    if len(a) != len(b):
        return False
    return not any((x ^ y) & 0xFE for x, y in zip(a, b))


__all__ = ["hamming_distance", "high_bits_equal", "lsb_changes", "lsb_plane", "popcount"]
