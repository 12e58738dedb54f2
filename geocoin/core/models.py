"""Core data models: LatLng, Cell, Token, Cache, Player."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class LatLng:
    """Immutable continuous coordinate."""

    lat: float = 0.0
    lng: float = 0.0

    def offset(self, d_lat: float, d_lng: float) -> LatLng:
        return LatLng(self.lat + d_lat, self.lng + d_lng)

    def __repr__(self) -> str:
        return f"({self.lat:.6f}, {self.lng:.6f})"


@dataclass(frozen=True, slots=True)
class Cell:
    """Discrete grid square. Obtain instances through ``Board`` to share identity."""

    i: int
    j: int

    def __repr__(self) -> str:
        return f"Cell({self.i}, {self.j})"


@dataclass(frozen=True, slots=True)
class Bounds:
    top_left: LatLng
    bottom_right: LatLng


@dataclass(frozen=True, slots=True)
class Token:
    """A coin minted by cell (i, j). Identity never changes across transfers."""

    i: int
    j: int
    serial: int

    def __str__(self) -> str:
        return f"{self.i}:{self.j}#{self.serial}"


@dataclass(slots=True)
class Cache:
    """Live token container bound to a cell for as long as the binding exists."""

    cell: Cell
    contents: list[Token] = field(default_factory=list)
    minted: int = 0
    deposited: int = 0

    @property
    def active_count(self) -> int:
        return len(self.contents)

    def take(self) -> Token | None:
        if not self.contents:
            return None
        return self.contents.pop()

    def put(self, token: Token) -> None:
        self.contents.append(token)
        self.deposited += 1


@dataclass(slots=True)
class Player:
    """Mutable player state. ``coin_count`` always mirrors the inventory."""

    position: LatLng
    points: int = 0
    inventory: list[Token] = field(default_factory=list)
    history: list[LatLng] = field(default_factory=list)

    @property
    def coin_count(self) -> int:
        return len(self.inventory)

    def copy(self) -> Player:
        return Player(
            position=self.position,
            points=self.points,
            inventory=list(self.inventory),
            history=list(self.history),
        )
