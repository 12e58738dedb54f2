"""Conversions from core models to API schemas."""

from __future__ import annotations

from typing import TYPE_CHECKING

from geocoin.api.schemas import (
    BoundsSchema,
    CellSchema,
    DeltaResponse,
    PlayerResponse,
    PointSchema,
    TokenSchema,
)
from geocoin.core.models import Bounds, Cell, LatLng, Player, Token

if TYPE_CHECKING:
    from geocoin.engine.commands import StateDelta


def point(p: LatLng) -> PointSchema:
    return PointSchema(lat=p.lat, lng=p.lng)


def cell(c: Cell) -> CellSchema:
    return CellSchema(i=c.i, j=c.j)


def bounds(b: Bounds) -> BoundsSchema:
    return BoundsSchema(top_left=point(b.top_left), bottom_right=point(b.bottom_right))


def token(t: Token) -> TokenSchema:
    return TokenSchema(i=t.i, j=t.j, serial=t.serial, label=str(t))


def player(p: Player, status: str) -> PlayerResponse:
    return PlayerResponse(
        position=point(p.position),
        points=p.points,
        coin_count=p.coin_count,
        inventory=[token(t) for t in p.inventory],
        history=[point(h) for h in p.history],
        status=status,
    )


def delta(d: StateDelta) -> DeltaResponse:
    return DeltaResponse(
        changed=d.changed,
        coin_count=d.coin_count,
        position=point(d.position),
        status=d.status,
        token=token(d.token) if d.token is not None else None,
        cell=cell(d.cell) if d.cell is not None else None,
        contents=[token(t) for t in d.contents] if d.contents is not None else None,
    )
