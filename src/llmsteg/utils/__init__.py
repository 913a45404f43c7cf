"""Utility helpers for llmsteg."""

from .bits import hamming_distance, high_bits_equal, lsb_changes, lsb_plane, popcount
from .logging import configure_logging

__all__ = [
    "configure_logging",
    "hamming_distance",
    "high_bits_equal",
    "lsb_changes",
    "lsb_plane",
    "popcount",
]
