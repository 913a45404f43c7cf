"""Custom exception hierarchy for the llmsteg toolkit."""
from __future__ import annotations

from dataclasses import dataclass


class LLMStegError(Exception):
    """Base class for all llmsteg errors."""


class CodecError(LLMStegError):
    """Base class for codec-specific exceptions."""


class CapacityError(CodecError):
    """Raised when a payload does not fit into the chosen cover."""


class FramingError(CodecError):
    """Raised when a steganographic buffer is too small to carry a header."""


class InvalidLengthError(FramingError):
    """Raised when the decoded length header is out of range."""


class ConfigurationError(LLMStegError):
    """Raised when the engine or registry is misconfigured."""


@dataclass(eq=False)
class HandlerError(LLMStegError):
    """Raised (and re-surfaced as an ``error`` event) when a handler fails."""

    event: str
    error: BaseException

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"handler for {self.event!r} failed: {self.error}"


__all__ = [
    "CapacityError",
    "CodecError",
    "ConfigurationError",
    "FramingError",
    "HandlerError",
    "InvalidLengthError",
    "LLMStegError",
]
