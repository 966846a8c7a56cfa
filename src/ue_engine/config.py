"""Editor capacity limits and their environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "UE_ENGINE_"

DATA_SIZE = 32768
UNDO_LEVELS = 64
TAB_SIZE = 4

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 25


def _env_int(environ: Mapping[str, str], key: str, fallback: int) -> int:
    value = environ.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Fixed limits shared by a document, its undo log, and the clipboard."""

    data_size: int = DATA_SIZE
    undo_levels: int = UNDO_LEVELS
    tab_size: int = TAB_SIZE

    def __post_init__(self) -> None:
        if self.data_size < 2:
            raise ValueError("data_size must be at least 2")
        if self.undo_levels < 1:
            raise ValueError("undo_levels must be positive")
        if self.tab_size < 1:
            raise ValueError("tab_size must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        env = os.environ if environ is None else environ
        return cls(
            data_size=_env_int(env, "DATA_SIZE", DATA_SIZE),
            undo_levels=_env_int(env, "UNDO_LEVELS", UNDO_LEVELS),
            tab_size=_env_int(env, "TAB_SIZE", TAB_SIZE),
        )


__all__ = [
    "DATA_SIZE",
    "UNDO_LEVELS",
    "TAB_SIZE",
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
    "EditorConfig",
]
