"""Cache factory — decides where caches exist and what they start with."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from geocoin.core.models import Cache, Cell, Token

if TYPE_CHECKING:
    from geocoin.config import GameConfig
    from geocoin.core.board import Board
    from geocoin.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)

INITIAL_VALUE_TAG = "initialValue"


class CacheFactory:
    """Derives cache existence and initial contents from cell coordinates alone."""

    __slots__ = ("_config", "_board", "_rng")

    def __init__(self, config: GameConfig, board: Board, rng: DeterministicRNG) -> None:
        self._config = config
        self._board = board
        self._rng = rng

    def should_spawn(self, cell: Cell) -> bool:
        return self._rng.luck(cell.i, cell.j) < self._config.cache_probability

    def initial_token_count(self, cell: Cell) -> int:
        value = self._rng.luck(cell.i, cell.j, INITIAL_VALUE_TAG)
        return math.floor(value * self._config.initial_value_scale)

    def mint_tokens(self, cell: Cell, count: int) -> list[Token]:
        return [Token(cell.i, cell.j, serial) for serial in range(count)]

    def open_cache(self, cell: Cell) -> Cache:
        """Materialize a fresh cache holding the cell's full initial mint."""
        count = self.initial_token_count(cell)
        return Cache(cell=cell, contents=self.mint_tokens(cell, count), minted=count)

    def scan_region(self, anchor: Cell, area_size: int | None = None) -> list[Cell]:
        """Return canonical cells holding a cache in the square around *anchor*.

        Offsets run over [-area_size, area_size) on both axes, so the square
        is 2·area_size cells wide and not centered exactly on the anchor.
        """
        size = self._config.area_size if area_size is None else area_size
        spawned: list[Cell] = []
        for di in range(-size, size):
            for dj in range(-size, size):
                cell = self._board.cell_at(anchor.i + di, anchor.j + dj)
                if self.should_spawn(cell):
                    spawned.append(cell)
        logger.info(
            "Region scan around %s: %d caches in %d cells",
            anchor, len(spawned), (2 * size) ** 2,
        )
        return spawned
