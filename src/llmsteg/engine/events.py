"""Synchronous observer registry for engine notifications."""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, DefaultDict, Dict, List, Union

from ..exceptions import ConfigurationError, HandlerError
from .types import DecodeResult, EncodeResult

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]


class EngineEvent(str, Enum):
    ENCODE = "encode"
    DECODE = "decode"
    ERROR = "error"
    CONFIG_UPDATED = "configUpdated"
    DEBUG = "debug"

    @classmethod
    def coerce(cls, value: Union[str, "EngineEvent"]) -> "EngineEvent":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ConfigurationError(f"unknown engine event: {value!r}") from None


@dataclass(frozen=True)
class EncodeEvent:
    result: EncodeResult
    duration_ms: float


@dataclass(frozen=True)
class DecodeEvent:
    result: DecodeResult
    duration_ms: float


@dataclass(frozen=True)
class ErrorEvent:
    """Failure notification; ``operation`` is ``encode``, ``decode`` or ``handler``."""

    operation: str
    error: BaseException

    @property
    def message(self) -> str:
        return str(self.error)


@dataclass(frozen=True)
class DebugEvent:
    message: str
    details: Dict[str, Any] = field(default_factory=dict)


class EventDispatcher:
    """Deliver notifications to registered handlers in the calling thread.

    A handler that raises does not stop delivery to the handlers after it.
    Its exception is wrapped in :class:`HandlerError` and delivered to the
    ``error`` handlers; failures of ``error`` handlers themselves are only
    logged.
    """

    def __init__(self) -> None:
        self._handlers: DefaultDict[EngineEvent, List[Handler]] = defaultdict(list)
        self._lock = threading.Lock()

    def on(self, event: Union[str, EngineEvent], handler: Handler) -> Handler:
        key = EngineEvent.coerce(event)
        if not callable(handler):
            raise ConfigurationError("event handler must be callable")
        with self._lock:
            self._handlers[key].append(handler)
        return handler

    def off(self, event: Union[str, EngineEvent], handler: Handler) -> bool:
        key = EngineEvent.coerce(event)
        with self._lock:
            handlers = self._handlers.get(key, [])
            if handler in handlers:
                handlers.remove(handler)
                return True
        return False

    def handler_count(self, event: Union[str, EngineEvent]) -> int:
        key = EngineEvent.coerce(event)
        with self._lock:
            return len(self._handlers.get(key, ()))

    def emit(self, event: Union[str, EngineEvent], payload: Any) -> None:
        key = EngineEvent.coerce(event)
        for handler in self._snapshot(key):
            try:
                handler(payload)
            except Exception as exc:
                self._report_handler_failure(key, exc)

    def _snapshot(self, event: EngineEvent) -> List[Handler]:
        with self._lock:
            return list(self._handlers.get(event, ()))

    def _report_handler_failure(self, event: EngineEvent, exc: Exception) -> None:
        if event is EngineEvent.ERROR:
            logger.error("error handler raised", exc_info=exc)
            return

        failure = HandlerError(event=event.value, error=exc)
        logger.warning("%s", failure)
        notification = ErrorEvent(operation="handler", error=failure)
        for handler in self._snapshot(EngineEvent.ERROR):
            try:
                handler(notification)
            except Exception as nested:
                logger.error("error handler raised while reporting %s", failure, exc_info=nested)


__all__ = [
    "DebugEvent",
    "DecodeEvent",
    "EncodeEvent",
    "EngineEvent",
    "ErrorEvent",
    "EventDispatcher",
    "Handler",
]
