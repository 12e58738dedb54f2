"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class Direction(IntEnum):
    """Cardinal movement directions, one tile per step."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3


# (d_lat, d_lng) in tiles
DIRECTION_OFFSETS: dict[int, tuple[int, int]] = {
    Direction.NORTH: (1, 0),
    Direction.EAST: (0, 1),
    Direction.SOUTH: (-1, 0),
    Direction.WEST: (0, -1),
}


@unique
class CachePolicy(str, Enum):
    """What happens to opened caches when the cache set is rebuilt.

    REGENERATE drops every live binding, so the next open re-mints the
    cell's full contents from the seed. RETAIN keeps bindings for cells
    that are still part of the rebuilt set.
    """

    REGENERATE = "regenerate"
    RETAIN = "retain"


@unique
class ScanAnchor(str, Enum):
    """Which cell the region scan is centered on."""

    ORIGIN = "origin"
    PLAYER = "player"


@unique
class EventCategory(str, Enum):
    COLLECT = "collect"
    DEPOSIT = "deposit"
    MOVE = "move"
    SCAN = "scan"
    RESET = "reset"
    SENSOR = "sensor"
