"""Player persistence — four JSON entries in a key-value store.

Layout (all four entries are written together as one store update on every save):

    playerPosition   {"lat": float, "lng": float}
    playerCoins      decimal string, e.g. "3"
    playerInventory  [{"i": int, "j": int, "serial": int}, ...]
    playerHistory    [{"lat": float, "lng": float}, ...]

Absent or unparseable entries load as ``None`` and the caller keeps its
default for that field.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from pydantic import BaseModel, TypeAdapter, ValidationError

from geocoin.core.models import LatLng, Player, Token
from geocoin.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)

POSITION_KEY = "playerPosition"
COINS_KEY = "playerCoins"
INVENTORY_KEY = "playerInventory"
HISTORY_KEY = "playerHistory"

ALL_KEYS = (POSITION_KEY, COINS_KEY, INVENTORY_KEY, HISTORY_KEY)


class _PointEntry(BaseModel):
    lat: float
    lng: float


class _TokenEntry(BaseModel):
    i: int
    j: int
    serial: int


_point_adapter = TypeAdapter(_PointEntry)
_points_adapter = TypeAdapter(list[_PointEntry])
_tokens_adapter = TypeAdapter(list[_TokenEntry])


@dataclass(slots=True)
class PlayerRecord:
    """Partial player state read back from the store; ``None`` means absent."""

    position: LatLng | None = None
    coin_count: int | None = None
    inventory: list[Token] | None = None
    history: list[LatLng] | None = None

    @property
    def empty(self) -> bool:
        return (
            self.position is None
            and self.coin_count is None
            and self.inventory is None
            and self.history is None
        )


class PlayerStore:
    """Serializes player state to, and restores it from, a key-value store."""

    __slots__ = ("_store",)

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def save(self, player: Player) -> None:
        pos = player.position
        self._store.update({
            POSITION_KEY: json.dumps({"lat": pos.lat, "lng": pos.lng}),
            COINS_KEY: str(player.coin_count),
            INVENTORY_KEY: json.dumps([{"i": t.i, "j": t.j, "serial": t.serial} for t in player.inventory]),
            HISTORY_KEY: json.dumps([{"lat": p.lat, "lng": p.lng} for p in player.history]),
        })

    def load(self) -> PlayerRecord:
        record = PlayerRecord()

        raw = self._store.get(POSITION_KEY)
        if raw is not None:
            try:
                entry = _point_adapter.validate_json(raw)
                record.position = LatLng(entry.lat, entry.lng)
            except ValidationError as exc:
                logger.warning("Discarding malformed %s: %s", POSITION_KEY, exc.errors()[:1])

        raw = self._store.get(COINS_KEY)
        if raw is not None:
            try:
                record.coin_count = int(raw)
            except ValueError:
                logger.warning("Discarding malformed %s: %r", COINS_KEY, raw)

        raw = self._store.get(INVENTORY_KEY)
        if raw is not None:
            try:
                entries = _tokens_adapter.validate_json(raw)
                record.inventory = [Token(e.i, e.j, e.serial) for e in entries]
            except ValidationError as exc:
                logger.warning("Discarding malformed %s: %s", INVENTORY_KEY, exc.errors()[:1])

        raw = self._store.get(HISTORY_KEY)
        if raw is not None:
            try:
                entries = _points_adapter.validate_json(raw)
                record.history = [LatLng(e.lat, e.lng) for e in entries]
            except ValidationError as exc:
                logger.warning("Discarding malformed %s: %s", HISTORY_KEY, exc.errors()[:1])

        return record

    def clear(self) -> None:
        self._store.discard(ALL_KEYS)


def hydrate(player: Player, record: PlayerRecord) -> Player:
    """Apply the present fields of *record* onto *player* and return it.

    The inventory is authoritative for the coin count; a stored count that
    disagrees with the stored inventory is reported and dropped.
    """
    if record.position is not None:
        player.position = record.position
    if record.inventory is not None:
        player.inventory = list(record.inventory)
    if record.history is not None:
        player.history = list(record.history)
    if record.coin_count is not None and record.coin_count != player.coin_count:
        logger.warning(
            "Stored coin count %d disagrees with inventory of %d; using inventory",
            record.coin_count, player.coin_count,
        )
    return player
