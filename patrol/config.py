# patrol/config.py
from __future__ import annotations
from dataclasses import dataclass

from .errors import ConfigurationError

DEFAULT_SIZE = 40
DEFAULT_P_BLOCKED = 0.12
DEFAULT_CELL = 12


@dataclass(frozen=True)
class SearchConfig:
    """Knobs for the obstruction search."""

    workers: int = 1
    chunk_size: int = 64  # candidates per worker task

    def __post_init__(self) -> None:
        if self.workers < 1:
            raise ConfigurationError("workers must be >= 1")
        if self.chunk_size < 1:
            raise ConfigurationError("chunk_size must be >= 1")
