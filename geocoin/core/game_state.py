"""Mutable authoritative game state — only mutated by the TokenLedger."""

from __future__ import annotations

from typing import TYPE_CHECKING

from geocoin.core.models import Cache, Cell, Player

if TYPE_CHECKING:
    from geocoin.core.board import Board


class GameState:
    """The single source of truth for one game session."""

    __slots__ = ("board", "player", "caches", "spawned", "_spawned_set")

    def __init__(self, board: Board, player: Player) -> None:
        self.board: Board = board
        self.player: Player = player
        self.caches: dict[Cell, Cache] = {}
        self.spawned: list[Cell] = []
        self._spawned_set: frozenset[Cell] = frozenset()

    # -- spawned cells --

    def set_spawned(self, cells: list[Cell]) -> None:
        self.spawned = list(cells)
        self._spawned_set = frozenset(cells)

    def is_spawned(self, cell: Cell) -> bool:
        return cell in self._spawned_set

    # -- cache bindings --

    def binding(self, cell: Cell) -> Cache | None:
        return self.caches.get(cell)

    def bind(self, cache: Cache) -> None:
        self.caches[cache.cell] = cache

    def drop_bindings(self, keep: frozenset[Cell] = frozenset()) -> int:
        """Drop every open cache whose cell is not in *keep*; return how many went."""
        stale = [cell for cell in self.caches if cell not in keep]
        for cell in stale:
            del self.caches[cell]
        return len(stale)
