"""Core data models and grid representation."""

from geocoin.core.enums import CachePolicy, Direction, EventCategory, ScanAnchor
from geocoin.core.errors import GameError, NoCacheError
from geocoin.core.models import Bounds, Cache, Cell, LatLng, Player, Token
from geocoin.core.board import Board
from geocoin.core.game_state import GameState

__all__ = [
    "Board",
    "Bounds",
    "Cache",
    "CachePolicy",
    "Cell",
    "Direction",
    "EventCategory",
    "GameError",
    "GameState",
    "LatLng",
    "NoCacheError",
    "Player",
    "ScanAnchor",
    "Token",
]
