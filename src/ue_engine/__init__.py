"""Editing core for a minimal terminal text editor."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "codec",
    "config",
    "editor",
    "layout",
    "runtime",
]

__version__ = "0.1.0"
