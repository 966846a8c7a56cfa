"""Document storage, selection marks, clipboard, and the undo ring."""

from .buffer import Buffer, BufferView, Transaction
from .document import BLANK, NEWLINE, Document
from .registers import Clipboard
from .state import Selection, Span
from .undo import UndoLog
from .validation import BufferValidationError, ensure_offset, ensure_span

__all__ = [
    "Buffer",
    "BufferView",
    "Transaction",
    "Document",
    "NEWLINE",
    "BLANK",
    "Clipboard",
    "Selection",
    "Span",
    "UndoLog",
    "BufferValidationError",
    "ensure_offset",
    "ensure_span",
]
