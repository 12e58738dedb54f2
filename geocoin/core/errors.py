"""Exceptions raised by the game core."""

from __future__ import annotations


class GameError(Exception):
    """Base class for all geocoin errors."""


class NoCacheError(GameError, LookupError):
    """Raised when a cell without a cache is opened."""

    def __init__(self, i: int, j: int) -> None:
        super().__init__(f"No cache at cell {i},{j}")
        self.i = i
        self.j = j
