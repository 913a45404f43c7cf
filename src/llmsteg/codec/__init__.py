"""Bit-level steganographic codecs."""

from .base import BytesLike, Codec
from .lsb import (
    HEADER_BITS,
    HEADER_BYTES,
    MAX_PAYLOAD_LENGTH,
    LSBCodec,
    create_lsb_codec,
    required_cover_size,
)
from .registry import (
    CodecEntry,
    available_codecs,
    create_codec,
    register_codec,
    unregister_codec,
)

__all__ = [
    "BytesLike",
    "Codec",
    "CodecEntry",
    "HEADER_BITS",
    "HEADER_BYTES",
    "LSBCodec",
    "MAX_PAYLOAD_LENGTH",
    "available_codecs",
    "create_codec",
    "create_lsb_codec",
    "register_codec",
    "required_cover_size",
    "unregister_codec",
]
