"""UTF-8 codec for the internal codepage and document file I/O."""

from .files import LoadResult, decode_document, load_document, save_document
from .utf8 import (
    CODEPOINT_TO_INTERNAL,
    ERROR_BYTE,
    INITIAL_STATE,
    INTERNAL_TO_CODEPOINT,
    REPLACEMENT_CODEPOINT,
    DecoderState,
    decode,
    decode_step,
    encode,
    encode_all,
    to_internal,
    to_unicode,
)

__all__ = [
    "CODEPOINT_TO_INTERNAL",
    "INTERNAL_TO_CODEPOINT",
    "ERROR_BYTE",
    "REPLACEMENT_CODEPOINT",
    "DecoderState",
    "INITIAL_STATE",
    "decode_step",
    "decode",
    "encode",
    "encode_all",
    "to_internal",
    "to_unicode",
    "LoadResult",
    "decode_document",
    "load_document",
    "save_document",
]
