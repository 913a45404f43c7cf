"""Abstract codec contract shared by every embedding scheme."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Optional, Union

BytesLike = Union[bytes, bytearray, memoryview]


class Codec(ABC):
    """Stateless bit-level transform hiding a payload inside a cover buffer.

    Implementations must never mutate the cover they are given and must
    return a freshly allocated buffer from :meth:`encode`.  Seeding is an
    optional capability advertised through :attr:`accepts_seed`; cover
    validation has a capacity-based default that subclasses may tighten.
    """

    name: ClassVar[str] = "codec"
    accepts_seed: ClassVar[bool] = False

    @abstractmethod
    def encode(self, payload: BytesLike, cover: BytesLike) -> bytes:
        """Return a copy of *cover* carrying *payload*."""

    @abstractmethod
    def decode(self, steg_data: BytesLike) -> bytes:
        """Recover the payload hidden in *steg_data*."""

    @abstractmethod
    def calculate_capacity(self, cover: BytesLike) -> int:
        """Return the maximum payload size (in bytes) *cover* can carry."""

    def validate_cover(self, cover: BytesLike) -> bool:
        return self.calculate_capacity(cover) > 0

    def set_seed(self, seed: str) -> None:
        raise NotImplementedError(f"codec {self.name!r} does not accept a seed")

    @property
    def seed(self) -> Optional[str]:
        return None

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"{type(self).__name__}(name={self.name!r})"


__all__ = ["BytesLike", "Codec"]
