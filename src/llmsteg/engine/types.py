"""Data contracts exchanged between the engine and its callers."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Optional

DEFAULT_COVER_KIND = "binary"


@dataclass(frozen=True)
class CoverMedium:
    """A cover buffer together with its capacity under the active codec."""

    data: bytes
    kind: str = DEFAULT_COVER_KIND
    capacity: int = 0

    def __post_init__(self) -> None:
        # Snapshot the caller's buffer so later mutation cannot leak in.
        object.__setattr__(self, "data", bytes(self.data))
        object.__setattr__(self, "capacity", max(0, int(self.capacity)))

    def with_capacity(self, capacity: int) -> "CoverMedium":
        return replace(self, capacity=capacity)


@dataclass(frozen=True)
class EncodeResult:
    data: bytes
    payload_size: int
    cover_size: int
    codec_name: str
    success: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class DecodeResult:
    data: bytes
    payload_size: int
    codec_name: str
    success: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class PoolStats:
    """Aggregate view over the cover pool."""

    size: int
    total_capacity: int
    average_capacity: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = [
    "CoverMedium",
    "DEFAULT_COVER_KIND",
    "DecodeResult",
    "EncodeResult",
    "PoolStats",
]
