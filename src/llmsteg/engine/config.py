"""Engine configuration with defaults, key aliases and whole-field updates."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from ..exceptions import ConfigurationError
from .types import CoverMedium

CoverInput = Union[bytes, bytearray, memoryview, CoverMedium]


class ErrorPolicy(str, Enum):
    """What :meth:`StegEngine.encode` does when it cannot embed a payload."""

    PASSTHROUGH = "passthrough"
    THROW = "throw"
    DROP = "drop"

    @classmethod
    def coerce(cls, value: Union[str, "ErrorPolicy"]) -> "ErrorPolicy":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        choices = ", ".join(policy.value for policy in cls)
        raise ConfigurationError(f"unsupported onError policy: {value!r} (expected one of {choices})")


_KEY_ALIASES = {
    "codecName": "codec_name",
    "codec-name": "codec_name",
    "algorithm": "codec_name",
    "coverMedia": "cover_media",
    "cover-media": "cover_media",
    "onError": "on_error",
    "on-error": "on_error",
}


def generate_seed() -> str:
    return uuid.uuid4().hex


def _freeze_covers(media: Iterable[CoverInput]) -> Tuple[CoverInput, ...]:
    if isinstance(media, (bytes, bytearray, memoryview, CoverMedium)):
        raise ConfigurationError("cover_media must be a sequence of buffers, not a single buffer")
    frozen = []
    for item in media:
        if isinstance(item, CoverMedium):
            frozen.append(item)
        elif isinstance(item, (bytes, bytearray, memoryview)):
            frozen.append(bytes(item))
        else:
            raise ConfigurationError(
                f"cover media entries must be bytes-like or CoverMedium, got {type(item).__name__}"
            )
    return tuple(frozen)


@dataclass(frozen=True)
class EngineConfig:
    """Effective engine configuration.

    Instances are immutable; :meth:`updated` returns a new configuration in
    which every supplied field is replaced wholesale.
    """

    enabled: bool = True
    codec_name: str = "lsb"
    cover_media: Tuple[CoverInput, ...] = ()
    seed: str = field(default_factory=generate_seed)
    on_error: ErrorPolicy = ErrorPolicy.PASSTHROUGH
    debug: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "on_error", ErrorPolicy.coerce(self.on_error))
        object.__setattr__(self, "cover_media", _freeze_covers(self.cover_media))
        if not isinstance(self.enabled, bool):
            raise ConfigurationError("'enabled' must be a boolean")
        if not isinstance(self.debug, bool):
            raise ConfigurationError("'debug' must be a boolean")
        if not isinstance(self.codec_name, str) or not self.codec_name:
            raise ConfigurationError("'codec_name' must be a non-empty string")
        if not isinstance(self.seed, str) or not self.seed:
            raise ConfigurationError("'seed' must be a non-empty string")

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]] = None) -> "EngineConfig":
        """Build a configuration from a (possibly camelCase) mapping."""

        return cls(**canonical_options(data))

    def updated(self, changes: Optional[Mapping[str, Any]] = None) -> "EngineConfig":
        return replace(self, **canonical_options(changes))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enabled": self.enabled,
            "codec_name": self.codec_name,
            "cover_media": list(self.cover_media),
            "seed": self.seed,
            "on_error": self.on_error.value,
            "debug": self.debug,
        }


_FIELD_NAMES = frozenset(f.name for f in fields(EngineConfig))


def canonical_options(data: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Canonicalise keys and drop ``None`` values (meaning "keep current")."""

    if not data:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigurationError("configuration must be a mapping")

    options: Dict[str, Any] = {}
    for key, value in data.items():
        canonical = _KEY_ALIASES.get(key, key)
        if canonical not in _FIELD_NAMES:
            raise ConfigurationError(f"unknown configuration option: {key}")
        if value is None:
            continue
        options[canonical] = value
    return options


__all__ = ["CoverInput", "EngineConfig", "ErrorPolicy", "canonical_options", "generate_seed"]
