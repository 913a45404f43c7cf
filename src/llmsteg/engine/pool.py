"""Round-robin pool of cover media."""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, List, Optional

from ..codec.base import Codec
from ..exceptions import ConfigurationError
from .config import CoverInput
from .types import DEFAULT_COVER_KIND, CoverMedium, PoolStats

# Capacity estimate used while no codec is attached: one bit per byte after
# a 4-byte allowance.
_FALLBACK_HEADER_BYTES = 4


def estimate_capacity(data: bytes) -> int:
    return max(0, (len(data) - _FALLBACK_HEADER_BYTES) // 8)


def capacity_function(codec: Optional[Codec]) -> Callable[[bytes], int]:
    if codec is None:
        return estimate_capacity
    return lambda data: max(0, int(codec.calculate_capacity(data)))


def normalise_cover(
    media: CoverInput,
    codec: Optional[Codec] = None,
    *,
    kind: str = DEFAULT_COVER_KIND,
) -> CoverMedium:
    """Turn a raw buffer or :class:`CoverMedium` into a pool entry."""

    capacity_of = capacity_function(codec)
    if isinstance(media, CoverMedium):
        return media.with_capacity(capacity_of(media.data))
    if isinstance(media, (bytes, bytearray, memoryview)):
        data = bytes(media)
        return CoverMedium(data=data, kind=kind, capacity=capacity_of(data))
    raise ConfigurationError(
        f"cover media must be bytes-like or CoverMedium, got {type(media).__name__}"
    )


class CoverPool:
    """Ordered cover buffers with a wrapping selection cursor.

    The pool is not thread-safe on its own; :class:`StegEngine` serialises
    access to it.
    """

    def __init__(self, media: Iterable[CoverMedium] = ()) -> None:
        self._items: List[CoverMedium] = list(media)
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[CoverMedium]:
        return iter(tuple(self._items))

    @property
    def cursor(self) -> int:
        return self._cursor

    def add(self, medium: CoverMedium) -> None:
        self._items.append(medium)

    def replace(self, media: Iterable[CoverMedium]) -> None:
        self._items = list(media)
        self._cursor = 0

    def next(self) -> Optional[CoverMedium]:
        if not self._items:
            return None
        cover = self._items[self._cursor]
        self._cursor = (self._cursor + 1) % len(self._items)
        return cover

    def recompute(self, codec: Optional[Codec]) -> None:
        capacity_of = capacity_function(codec)
        self._items = [item.with_capacity(capacity_of(item.data)) for item in self._items]

    def stats(self) -> PoolStats:
        size = len(self._items)
        total = sum(item.capacity for item in self._items)
        return PoolStats(
            size=size,
            total_capacity=total,
            average_capacity=total // size if size else 0,
        )


__all__ = ["CoverPool", "capacity_function", "estimate_capacity", "normalise_cover"]
