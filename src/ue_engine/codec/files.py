"""Loading and saving documents as UTF-8 files."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ue_engine.buffer import Document
from ue_engine.config import DATA_SIZE
from ue_engine.runtime import telemetry

from .utf8 import INITIAL_STATE, decode_step, encode_all

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(slots=True)
class LoadResult:
    document: Document
    is_new: bool = False
    too_large: bool = False


def decode_document(raw: bytes, *, capacity: int = DATA_SIZE) -> LoadResult:
    """Decode file bytes into a document, stopping once it holds ``capacity`` bytes.

    A document that fills the whole capacity is reported as too large, since
    editing needs at least one free byte.
    """

    decoded = bytearray()
    state = INITIAL_STATE
    for byte in raw:
        if len(decoded) >= capacity:
            break
        state, internal = decode_step(state, byte)
        if internal is not None:
            decoded.append(internal)

    document = Document.from_bytes(bytes(decoded), capacity=capacity)
    return LoadResult(document=document, too_large=len(decoded) >= capacity)


def load_document(path: PathLike, *, capacity: int = DATA_SIZE) -> LoadResult:
    """Read ``path`` into a document; a missing file gives an empty new one."""

    target = Path(path)
    with telemetry.span(
        "document::load", component="codec", metadata={"path": str(target)}
    ) as handle:
        try:
            raw = target.read_bytes()
        except FileNotFoundError:
            document = Document(capacity=capacity, is_new=True)
            handle.add_metadata("new_file", True)
            return LoadResult(document=document, is_new=True)

        result = decode_document(raw, capacity=capacity)
        handle.add_metadata("size", result.document.size)

    if result.too_large:
        telemetry.record_event(
            "document.too_large",
            level="error",
            data={"path": str(target), "capacity": capacity},
        )
    else:
        telemetry.record_event(
            "document.load",
            data={"path": str(target), "size": result.document.size},
        )
    return result


def save_document(path: PathLike, document: Document) -> int:
    """Write the document as UTF-8 and clear its modified flag.

    Returns the number of bytes written. ``OSError`` propagates and leaves
    the document flags untouched.
    """

    target = Path(path)
    payload = encode_all(document.text)
    with telemetry.span(
        "document::save", component="codec", metadata={"path": str(target)}
    ):
        target.write_bytes(payload)
    document.modified = False
    document.is_new = False
    telemetry.record_event(
        "document.save", data={"path": str(target), "bytes": len(payload)}
    )
    return len(payload)
