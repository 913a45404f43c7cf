"""Cover-pool orchestration around a pluggable codec."""

from .config import EngineConfig, ErrorPolicy
from .engine import StegEngine, create_engine
from .events import DebugEvent, DecodeEvent, EncodeEvent, EngineEvent, ErrorEvent, EventDispatcher
from .pool import CoverPool
from .types import CoverMedium, DecodeResult, EncodeResult, PoolStats

__all__ = [
    "CoverMedium",
    "CoverPool",
    "DebugEvent",
    "DecodeEvent",
    "DecodeResult",
    "EncodeEvent",
    "EncodeResult",
    "EngineConfig",
    "EngineEvent",
    "ErrorEvent",
    "ErrorPolicy",
    "EventDispatcher",
    "PoolStats",
    "StegEngine",
    "create_engine",
]
