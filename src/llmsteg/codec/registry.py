"""Name-based codec registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from ..exceptions import ConfigurationError
from .base import Codec
from .lsb import create_lsb_codec

CodecFactory = Callable[..., Codec]


@dataclass(frozen=True)
class CodecEntry:
    """A registered codec factory together with its human-facing metadata."""

    name: str
    factory: CodecFactory
    description: Optional[str] = None
    media_kinds: Tuple[str, ...] = ()


_REGISTRY: Dict[str, CodecEntry] = {}


def _normalise_name(name: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ConfigurationError("codec name must be a non-empty string")
    return name.strip().lower()


def register_codec(
    name: str,
    factory: CodecFactory,
    *,
    description: Optional[str] = None,
    media_kinds: Tuple[str, ...] = (),
    replace: bool = False,
) -> CodecEntry:
    """Register *factory* under *name* and return the stored entry."""

    key = _normalise_name(name)
    if key in _REGISTRY and not replace:
        raise ConfigurationError(f"codec already registered: {name}")
    entry = CodecEntry(
        name=key,
        factory=factory,
        description=description,
        media_kinds=tuple(media_kinds),
    )
    _REGISTRY[key] = entry
    return entry


def unregister_codec(name: str) -> None:
    key = _normalise_name(name)
    if key not in _REGISTRY:
        raise ConfigurationError(f"unknown codec: {name}")
    del _REGISTRY[key]


def create_codec(name: str, *, seed: Optional[str] = None) -> Codec:
    """Instantiate the codec registered under *name*."""

    key = _normalise_name(name)
    entry = _REGISTRY.get(key)
    if entry is None:
        raise ConfigurationError(f"unknown codec: {name}")
    codec = entry.factory()
    if seed is not None and codec.accepts_seed:
        codec.set_seed(seed)
    return codec


def available_codecs() -> List[CodecEntry]:
    return sorted(_REGISTRY.values(), key=lambda entry: entry.name)


register_codec(
    "lsb",
    create_lsb_codec,
    description="One payload bit per cover byte, stored in bit 0.",
    media_kinds=("binary", "noise", "pattern", "gradient", "text", "audio"),
)


__all__ = [
    "CodecEntry",
    "CodecFactory",
    "available_codecs",
    "create_codec",
    "register_codec",
    "unregister_codec",
]
