"""Byte-level steganography: LSB codec plus a cover-pool engine."""

from .codec import Codec, LSBCodec, create_codec, register_codec
from .engine import (
    CoverMedium,
    DecodeResult,
    EncodeResult,
    EngineConfig,
    EngineEvent,
    ErrorPolicy,
    PoolStats,
    StegEngine,
    create_engine,
)
from .exceptions import (
    CapacityError,
    CodecError,
    ConfigurationError,
    FramingError,
    HandlerError,
    InvalidLengthError,
    LLMStegError,
)
from .metrics import CodecMetrics, measure_codec

__version__ = "0.1.0"

__all__ = [
    "CapacityError",
    "Codec",
    "CodecError",
    "CodecMetrics",
    "ConfigurationError",
    "CoverMedium",
    "DecodeResult",
    "EncodeResult",
    "EngineConfig",
    "EngineEvent",
    "ErrorPolicy",
    "FramingError",
    "HandlerError",
    "InvalidLengthError",
    "LLMStegError",
    "LSBCodec",
    "PoolStats",
    "StegEngine",
    "create_codec",
    "create_engine",
    "measure_codec",
    "register_codec",
]
