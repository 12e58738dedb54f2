"""TokenLedger — owns the player and every open cache.

All mutation of game state goes through this class. Each operation runs
to completion under one lock and persists the player as its last step,
so no caller ever observes a half-applied transfer.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import TYPE_CHECKING, Protocol

from geocoin.core.board import Board
from geocoin.core.enums import DIRECTION_OFFSETS, CachePolicy, Direction, EventCategory, ScanAnchor
from geocoin.core.errors import NoCacheError
from geocoin.core.game_state import GameState
from geocoin.core.models import Cache, Cell, LatLng, Player, Token
from geocoin.engine.commands import Collect, Command, Deposit, Locate, Move, Reset, StateDelta, Step
from geocoin.storage.kv import open_store
from geocoin.storage.persistence import PlayerStore, hydrate
from geocoin.systems.cache_factory import CacheFactory
from geocoin.systems.rng import DeterministicRNG
from geocoin.utils.event_log import EventLog

if TYPE_CHECKING:
    from geocoin.config import GameConfig

logger = logging.getLogger(__name__)


class LuckSource(Protocol):
    def luck(self, *parts: object) -> float: ...


class TokenLedger:
    """Collect / deposit / locate / move over an explicit ``GameState``."""

    def __init__(
        self,
        config: GameConfig,
        store: PlayerStore,
        rng: LuckSource | None = None,
        event_log: EventLog | None = None,
    ) -> None:
        self._config = config
        self._store = store
        self._rng = rng if rng is not None else DeterministicRNG(config.world_seed)
        self._events = event_log if event_log is not None else EventLog(config.event_log_size)
        self._lock = threading.RLock()
        self._sensor_error_reported = False

        board = Board(config.tile_width, config.visibility_radius)
        self._factory = CacheFactory(config, board, self._rng)
        self._state = GameState(board, self._default_player())

        record = store.load()
        if not record.empty:
            hydrate(self._state.player, record)
            logger.info(
                "Restored player at %s with %d coins, %d history points",
                self._state.player.position,
                self._state.player.coin_count,
                len(self._state.player.history),
            )
        self.rebuild()

    # -- public properties --

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def board(self) -> Board:
        return self._state.board

    @property
    def events(self) -> EventLog:
        return self._events

    @property
    def player(self) -> Player:
        return self._state.player

    @property
    def origin(self) -> LatLng:
        return LatLng(self._config.origin_lat, self._config.origin_lng)

    def player_snapshot(self) -> Player:
        with self._lock:
            return self._state.player.copy()

    # -- cache set --

    def scan_anchor(self) -> Cell:
        if self._config.scan_anchor == ScanAnchor.PLAYER:
            return self.board.cell_of(self._state.player.position)
        return self.board.cell_of(self.origin)

    def rebuild(self) -> list[Cell]:
        """Re-run the region scan and apply the cache policy to open bindings."""
        with self._lock:
            spawned = self._factory.scan_region(self.scan_anchor())
            if self._config.cache_policy == CachePolicy.RETAIN:
                dropped = self._state.drop_bindings(keep=frozenset(spawned))
            else:
                dropped = self._state.drop_bindings()
            self._state.set_spawned(spawned)
            if dropped:
                logger.info("Rebuild dropped %d open caches (policy=%s)", dropped, self._config.cache_policy.value)
            self._events.record(EventCategory.SCAN.value, f"{len(spawned)} caches in range")
            return list(spawned)

    @property
    def spawned(self) -> list[Cell]:
        with self._lock:
            return list(self._state.spawned)

    def nearby_caches(self, radius: int | None = None) -> list[Cell]:
        """Spawned cells within *radius* cells of the player, row-major."""
        with self._lock:
            near = self.board.cells_near(self._state.player.position, radius)
            return [cell for cell in near if self._state.is_spawned(cell)]

    def has_cache(self, cell: Cell) -> bool:
        return self._factory.should_spawn(cell)

    def open(self, cell: Cell) -> Cache:
        """Return the live cache bound to *cell*, minting it on first open."""
        with self._lock:
            cell = self.board.cell_at(cell.i, cell.j)
            cache = self._state.binding(cell)
            if cache is not None:
                return cache
            if not self._factory.should_spawn(cell):
                raise NoCacheError(cell.i, cell.j)
            cache = self._factory.open_cache(cell)
            self._state.bind(cache)
            logger.debug("Opened cache %s with %d tokens", cell, cache.minted)
            return cache

    def peek(self, cell: Cell) -> Cache | None:
        """Return the bound cache for *cell* without opening it."""
        with self._lock:
            return self._state.binding(cell)

    def inspect(self, cell: Cell) -> Cache:
        """Open *cell* and return a detached copy of its cache."""
        with self._lock:
            cache = self.open(cell)
            return replace(cache, contents=list(cache.contents))

    # -- transfers --

    def collect(self, cell: Cell) -> Token | None:
        """Move the cache's last token onto the player's inventory.

        Returns None (no-op) when the cache is empty.
        """
        with self._lock:
            cache = self.open(cell)
            token = cache.take()
            if token is None:
                logger.debug("Collect from empty cache %s ignored", cache.cell)
                return None
            self._state.player.inventory.append(token)
            logger.debug("Collected %s from %s", token, cache.cell)
            self._events.record(EventCategory.COLLECT.value, f"Collected {token}", (cache.cell.i, cache.cell.j))
            self._persist()
            return token

    def deposit(self, cell: Cell) -> Token | None:
        """Move the player's last collected token into the cache.

        The token keeps its original (i, j, serial). Returns None (no-op)
        when the inventory is empty.
        """
        with self._lock:
            cache = self.open(cell)
            inventory = self._state.player.inventory
            if not inventory:
                logger.debug("Deposit into %s with empty inventory ignored", cache.cell)
                return None
            token = inventory.pop()
            cache.put(token)
            logger.debug("Deposited %s into %s", token, cache.cell)
            self._events.record(EventCategory.DEPOSIT.value, f"Deposited {token}", (cache.cell.i, cache.cell.j))
            self._persist()
            return token

    def locate(self, token: Token) -> Cell:
        """Return the cell that minted *token*."""
        return self.board.cell_at(token.i, token.j)

    # -- movement --

    def move_to(self, point: LatLng, category: EventCategory = EventCategory.MOVE) -> LatLng:
        """Move the player to *point*; a non-finite point raises ValueError and changes nothing."""
        with self._lock:
            player = self._state.player
            new_cell = self.board.cell_of(point)
            old_cell = self.board.cell_of(player.position)
            player.position = point
            player.history.append(point)
            self._events.record(category.value, f"Moved to {point}", (new_cell.i, new_cell.j))
            self._persist()
            if self._config.scan_anchor == ScanAnchor.PLAYER and new_cell is not old_cell:
                self.rebuild()
            return point

    def step(self, direction: Direction) -> LatLng:
        d_lat, d_lng = DIRECTION_OFFSETS[direction]
        w = self._config.tile_width
        with self._lock:
            target = self._state.player.position.offset(d_lat * w, d_lng * w)
            return self.move_to(target)

    def sensor_update(self, lat: float, lng: float) -> LatLng:
        """Apply one positional sample from the sensor feed as a move."""
        return self.move_to(LatLng(lat, lng), EventCategory.SENSOR)

    def sensor_unavailable(self, reason: str) -> str | None:
        """Report a sensor failure once; later failures return None."""
        with self._lock:
            if self._sensor_error_reported:
                return None
            self._sensor_error_reported = True
        message = f"Location sensor unavailable: {reason}"
        logger.warning("Location sensor unavailable: %s", reason)
        self._events.record(EventCategory.SENSOR.value, message)
        return message

    # -- lifecycle --

    def reset(self) -> None:
        """Erase persisted state and start over at the origin."""
        with self._lock:
            self._store.clear()
            self._state.player = self._default_player()
            self._state.drop_bindings()
            self._sensor_error_reported = False
            logger.info("Game state reset")
            self._events.record(EventCategory.RESET.value, "Game state reset")
            self.rebuild()

    def status_line(self) -> str:
        player = self._state.player
        return f"{player.points} points accumulated, {player.coin_count} coins collected"

    # -- command dispatch --

    def dispatch(self, command: Command) -> StateDelta:
        with self._lock:
            match command:
                case Collect(cell=cell):
                    token = self.collect(cell)
                    return self._delta(token is not None, token=token, cell=cell)
                case Deposit(cell=cell):
                    token = self.deposit(cell)
                    return self._delta(token is not None, token=token, cell=cell)
                case Locate(token=token):
                    return self._delta(False, token=token, cell=self.locate(token))
                case Move(point=point):
                    self.move_to(point)
                    return self._delta(True)
                case Step(direction=direction):
                    self.step(direction)
                    return self._delta(True)
                case Reset():
                    self.reset()
                    return self._delta(True)
            raise TypeError(f"Unknown command: {command!r}")

    # -- internals --

    def _default_player(self) -> Player:
        return Player(position=self.origin)

    def _delta(self, changed: bool, token: Token | None = None, cell: Cell | None = None) -> StateDelta:
        contents = None
        if cell is not None:
            cache = self._state.binding(self.board.cell_at(cell.i, cell.j))
            if cache is not None:
                contents = tuple(cache.contents)
        return StateDelta(
            changed=changed,
            coin_count=self._state.player.coin_count,
            position=self._state.player.position,
            status=self.status_line(),
            token=token,
            cell=cell,
            contents=contents,
        )

    def _persist(self) -> None:
        self._store.save(self._state.player)


def build_ledger(config: GameConfig, event_log: EventLog | None = None) -> TokenLedger:
    """Wire a ledger to the store named by ``config.storage_path``."""
    store = PlayerStore(open_store(config.storage_path))
    return TokenLedger(config, store, event_log=event_log)
