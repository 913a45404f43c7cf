"""Stateful orchestrator that pairs payloads with pooled cover media."""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Mapping, Optional, Tuple, Union

from ..codec.base import BytesLike, Codec
from ..codec.registry import create_codec
from ..exceptions import CapacityError, ConfigurationError
from ..utils.bits import lsb_changes
from .config import CoverInput, EngineConfig, ErrorPolicy, canonical_options
from .events import (
    DebugEvent,
    DecodeEvent,
    EncodeEvent,
    EngineEvent,
    ErrorEvent,
    EventDispatcher,
    Handler,
)
from .pool import CoverPool, normalise_cover
from .types import DEFAULT_COVER_KIND, CoverMedium, DecodeResult, EncodeResult, PoolStats

logger = logging.getLogger(__name__)


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000.0


class StegEngine:
    """Encode payloads into round-robin cover media through a pluggable codec.

    The engine owns its configuration, the active codec, the cover pool and
    the notification dispatcher.  All mutable state is guarded by a single
    re-entrant lock, so concurrent :meth:`encode` calls select covers in
    strict round-robin order and never observe a half-rebuilt pool.
    Notifications are delivered synchronously before the triggering call
    returns.

    Example::

        engine = create_engine()
        engine.add_cover_media(bytes(1024))
        result = engine.encode(b"secret")
        assert engine.decode(result.data).data == b"secret"
    """

    def __init__(
        self,
        config: Optional[Union[EngineConfig, Mapping[str, Any]]] = None,
        **options: Any,
    ) -> None:
        if isinstance(config, EngineConfig):
            effective = config.updated(options)
        else:
            merged = dict(config or {})
            merged.update(options)
            effective = EngineConfig.from_mapping(merged)

        self._lock = threading.RLock()
        self._events = EventDispatcher()
        self._config = effective
        self._codec: Optional[Codec] = None
        self._pool = CoverPool(normalise_cover(item) for item in effective.cover_media)

        self._debug(
            "engine initialised",
            codec_name=effective.codec_name,
            pool_size=len(self._pool),
            enabled=effective.enabled,
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def config(self) -> EngineConfig:
        with self._lock:
            return self._config

    def get_config(self) -> EngineConfig:
        return self.config

    @property
    def codec(self) -> Optional[Codec]:
        with self._lock:
            return self._codec

    def get_codec(self) -> Optional[Codec]:
        return self.codec

    def covers(self) -> Tuple[CoverMedium, ...]:
        with self._lock:
            return tuple(self._pool)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------
    def on(self, event: Union[str, EngineEvent], handler: Handler) -> Handler:
        """Register *handler* for *event* and return it."""

        return self._events.on(event, handler)

    def off(self, event: Union[str, EngineEvent], handler: Handler) -> bool:
        return self._events.off(event, handler)

    # ------------------------------------------------------------------
    # Codec & pool management
    # ------------------------------------------------------------------
    def set_codec(self, codec: Codec) -> None:
        """Install *codec*, seed it and recompute pooled cover capacities."""

        if not isinstance(codec, Codec):
            raise ConfigurationError(f"codec must implement Codec, got {type(codec).__name__}")
        with self._lock:
            self._codec = codec
            if self._config.seed and codec.accepts_seed:
                codec.set_seed(self._config.seed)
            self._pool.recompute(codec)
            pool_size = len(self._pool)
        self._debug("codec set", name=codec.name, pool_size=pool_size)

    def add_cover_media(self, media: CoverInput, kind: str = DEFAULT_COVER_KIND) -> CoverMedium:
        """Copy *media* into the pool and return the stored entry."""

        with self._lock:
            medium = normalise_cover(media, self._codec, kind=kind)
            self._pool.add(medium)
            pool_size = len(self._pool)
        self._debug("cover media added", capacity=medium.capacity, pool_size=pool_size)
        return medium

    def get_pool_stats(self) -> PoolStats:
        with self._lock:
            return self._pool.stats()

    def update_config(
        self,
        partial: Optional[Mapping[str, Any]] = None,
        **changes: Any,
    ) -> EngineConfig:
        """Replace the supplied fields and return the new effective config.

        Supplying ``cover_media`` rebuilds the pool from scratch and resets
        the selection cursor.  Supplying ``seed`` re-seeds the active codec
        when it accepts seeding.
        """

        merged = dict(partial or {})
        merged.update(changes)
        options = canonical_options(merged)

        with self._lock:
            updated = self._config.updated(options)
            self._config = updated
            if "cover_media" in options:
                self._pool.replace(
                    normalise_cover(item, self._codec) for item in updated.cover_media
                )
            if "seed" in options and self._codec is not None and self._codec.accepts_seed:
                self._codec.set_seed(updated.seed)

        self._events.emit(EngineEvent.CONFIG_UPDATED, updated)
        self._debug("config updated", fields=sorted(options))
        return updated

    # ------------------------------------------------------------------
    # Encode / decode
    # ------------------------------------------------------------------
    def encode(self, payload: BytesLike) -> EncodeResult:
        started = time.perf_counter()
        payload = bytes(payload)

        with self._lock:
            config = self._config
            codec = self._codec
            cover = self._pool.next() if config.enabled and codec is not None else None

        if not config.enabled:
            return EncodeResult(
                data=payload,
                payload_size=len(payload),
                cover_size=len(payload),
                codec_name=config.codec_name,
                success=True,
            )

        if codec is None:
            return self._encode_failure(config, payload, ConfigurationError("no codec set"))

        if cover is None:
            return self._encode_failure(
                config, payload, ConfigurationError("no cover media available")
            )

        try:
            capacity = codec.calculate_capacity(cover.data)
        except Exception as exc:
            return self._encode_failure(config, payload, exc, message=f"encoding failed: {exc}")
        if len(payload) > capacity:
            return self._encode_failure(
                config,
                payload,
                CapacityError(f"payload too large: {len(payload)} bytes > {capacity} capacity"),
            )

        try:
            encoded = codec.encode(payload, cover.data)
        except Exception as exc:
            return self._encode_failure(config, payload, exc, message=f"encoding failed: {exc}")

        result = EncodeResult(
            data=encoded,
            payload_size=len(payload),
            cover_size=len(cover.data),
            codec_name=config.codec_name,
            success=True,
        )
        self._events.emit(EngineEvent.ENCODE, EncodeEvent(result=result, duration_ms=_elapsed_ms(started)))

        if config.debug:
            self._debug(
                "encoded",
                payload_size=len(payload),
                cover_size=len(cover.data),
                output_size=len(encoded),
                lsb_changes=lsb_changes(cover.data, encoded),
            )
        return result

    def decode(self, steg_data: BytesLike) -> DecodeResult:
        started = time.perf_counter()
        steg_data = bytes(steg_data)

        with self._lock:
            config = self._config
            codec = self._codec

        if not config.enabled:
            return DecodeResult(
                data=steg_data,
                payload_size=len(steg_data),
                codec_name=config.codec_name,
                success=True,
            )

        if codec is None:
            return self._decode_failure(config, ConfigurationError("no codec set"))

        try:
            decoded = codec.decode(steg_data)
        except Exception as exc:
            return self._decode_failure(config, exc, message=f"decoding failed: {exc}")

        result = DecodeResult(
            data=decoded,
            payload_size=len(decoded),
            codec_name=config.codec_name,
            success=True,
        )
        self._events.emit(EngineEvent.DECODE, DecodeEvent(result=result, duration_ms=_elapsed_ms(started)))
        self._debug("decoded", payload_size=len(decoded))
        return result

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _encode_failure(
        self,
        config: EngineConfig,
        payload: bytes,
        error: BaseException,
        *,
        message: Optional[str] = None,
    ) -> EncodeResult:
        message = message or str(error)
        logger.debug("encode failed: %s", message)
        self._events.emit(EngineEvent.ERROR, ErrorEvent(operation="encode", error=error))

        if config.on_error is ErrorPolicy.THROW:
            raise error
        if config.on_error is ErrorPolicy.DROP:
            return EncodeResult(
                data=b"",
                payload_size=0,
                cover_size=0,
                codec_name=config.codec_name,
                success=False,
                error=message,
            )
        return EncodeResult(
            data=payload,
            payload_size=len(payload),
            cover_size=len(payload),
            codec_name=config.codec_name,
            success=False,
            error=message,
        )

    def _decode_failure(
        self,
        config: EngineConfig,
        error: BaseException,
        *,
        message: Optional[str] = None,
    ) -> DecodeResult:
        message = message or str(error)
        logger.debug("decode failed: %s", message)
        self._events.emit(EngineEvent.ERROR, ErrorEvent(operation="decode", error=error))
        return DecodeResult(
            data=b"",
            payload_size=0,
            codec_name=config.codec_name,
            success=False,
            error=message,
        )

    def _debug(self, message: str, **details: Any) -> None:
        logger.debug("%s %s", message, details)
        if self._config.debug:
            self._events.emit(EngineEvent.DEBUG, DebugEvent(message=message, details=details))


def create_engine(
    config: Optional[Union[EngineConfig, Mapping[str, Any]]] = None,
    *,
    codec: Optional[Codec] = None,
    **options: Any,
) -> StegEngine:
    """Build an engine and attach *codec*, or the registry codec named by ``codec_name``."""

    engine = StegEngine(config, **options)
    engine.set_codec(codec if codec is not None else create_codec(engine.config.codec_name))
    return engine


__all__ = ["StegEngine", "create_engine"]
