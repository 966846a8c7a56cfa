"""UTF-8 <-> internal single-byte codepage conversion.

The internal representation is ISO-8859-1 with a handful of Windows-1252
characters folded into the 0x80-0x9F range. Anything else decodes to
``ERROR_BYTE``.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

REPLACEMENT_CODEPOINT = 0xFFFD
# ASCII NAK stands in for U+FFFD and for anything without an internal slot
ERROR_BYTE = 0x15

CODEPOINT_TO_INTERNAL: Mapping[int, int] = MappingProxyType(
    {
        0x2014: 0x97,  # em dash
        0x20AC: 0x80,  # euro sign
        0x0160: 0x8A,  # S with caron
        0x0161: 0x9A,  # s with caron
        0x017D: 0x8E,  # Z with caron
        0x017E: 0x9E,  # z with caron
        0x0152: 0x8C,  # OE ligature
        0x0153: 0x9C,  # oe ligature
        0x0178: 0x9F,  # Y with diaeresis
        0x2018: 0x91,  # left single quotation mark
        0x2019: 0x92,  # right single quotation mark
        0x201C: 0x93,  # left double quotation mark
        0x201D: 0x94,  # right double quotation mark
        0x2026: 0x85,  # ellipsis
        REPLACEMENT_CODEPOINT: ERROR_BYTE,
    }
)

INTERNAL_TO_CODEPOINT: Mapping[int, int] = MappingProxyType(
    {internal: codepoint for codepoint, internal in CODEPOINT_TO_INTERNAL.items()}
)

# leading byte mask, expected value, payload mask, continuation bytes to follow
_LEADERS: Tuple[Tuple[int, int, int, int], ...] = (
    (0x80, 0x00, 0x7F, 0),
    (0xE0, 0xC0, 0x1F, 1),
    (0xF0, 0xE0, 0x0F, 2),
    (0xF8, 0xF0, 0x07, 3),
)


@dataclass(frozen=True, slots=True)
class DecoderState:
    """Partial codepoint plus the number of continuation bytes still due."""

    pending: int = 0
    codepoint: int = 0

    @property
    def idle(self) -> bool:
        return self.pending == 0


INITIAL_STATE = DecoderState()


def to_internal(codepoint: int) -> int:
    """Map a complete codepoint to its internal byte."""

    mapped = CODEPOINT_TO_INTERNAL.get(codepoint, codepoint)
    if mapped > 0xFF:
        return ERROR_BYTE
    return mapped


def decode_step(state: DecoderState, byte: int) -> Tuple[DecoderState, Optional[int]]:
    """Feed one external byte; return the next state and a completed internal byte.

    Malformed input never raises: a bad leading byte, or a non-continuation
    byte arriving mid-sequence, resets the state and yields ``ERROR_BYTE``
    (the byte that broke the sequence is consumed).
    """

    byte &= 0xFF
    if state.idle:
        for mask, expected, payload, following in _LEADERS:
            if byte & mask == expected:
                codepoint = (byte & payload) << (6 * following)
                if following == 0:
                    return INITIAL_STATE, to_internal(codepoint)
                return DecoderState(pending=following, codepoint=codepoint), None
    elif byte & 0xC0 == 0x80:
        pending = state.pending - 1
        codepoint = state.codepoint | ((byte & 0x3F) << (6 * pending))
        if pending == 0:
            return INITIAL_STATE, to_internal(codepoint)
        return DecoderState(pending=pending, codepoint=codepoint), None

    return INITIAL_STATE, to_internal(REPLACEMENT_CODEPOINT)


def decode(
    data: Iterable[int], state: DecoderState = INITIAL_STATE
) -> Tuple[bytes, DecoderState]:
    """Decode a chunk of external bytes, carrying the state across chunks."""

    out = bytearray()
    for byte in data:
        state, internal = decode_step(state, byte)
        if internal is not None:
            out.append(internal)
    return bytes(out), state


def encode(internal: int) -> bytes:
    """Return the UTF-8 form of one internal byte (1 to 3 bytes long)."""

    return chr(INTERNAL_TO_CODEPOINT.get(internal, internal)).encode("utf-8")


def encode_all(data: Iterable[int]) -> bytes:
    return b"".join(encode(byte) for byte in data)


def to_unicode(data: Iterable[int]) -> str:
    """Render internal bytes as the characters they stand for."""

    return "".join(chr(INTERNAL_TO_CODEPOINT.get(byte, byte)) for byte in data)


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
]
