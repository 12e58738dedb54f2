"""Commands accepted by the ledger and the deltas it returns."""

from __future__ import annotations

from dataclasses import dataclass

from geocoin.core.enums import Direction
from geocoin.core.models import Cell, LatLng, Token


@dataclass(frozen=True, slots=True)
class Collect:
    cell: Cell


@dataclass(frozen=True, slots=True)
class Deposit:
    cell: Cell


@dataclass(frozen=True, slots=True)
class Locate:
    token: Token


@dataclass(frozen=True, slots=True)
class Move:
    point: LatLng


@dataclass(frozen=True, slots=True)
class Step:
    direction: Direction


@dataclass(frozen=True, slots=True)
class Reset:
    pass


Command = Collect | Deposit | Locate | Move | Step | Reset


@dataclass(frozen=True, slots=True)
class StateDelta:
    """What the presentation layer needs to re-render after a command.

    ``changed`` is False for no-op transfers (empty cache, empty inventory)
    and for read-only commands such as Locate.
    """

    changed: bool
    coin_count: int
    position: LatLng
    status: str
    token: Token | None = None
    cell: Cell | None = None
    contents: tuple[Token, ...] | None = None
