"""GET /api/v1/board — coordinate-to-cell queries for placing markers."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from geocoin.api import serializers
from geocoin.api.dependencies import get_ledger
from geocoin.api.schemas import CellInfoResponse, NearbyCellsResponse
from geocoin.core.models import LatLng
from geocoin.engine.ledger import TokenLedger

router = APIRouter()


@router.get("/board/cell", response_model=CellInfoResponse)
def get_cell(
    lat: float = Query(..., ge=-90.0, le=90.0, allow_inf_nan=False),
    lng: float = Query(..., ge=-180.0, le=180.0, allow_inf_nan=False),
    ledger: TokenLedger = Depends(get_ledger),
) -> CellInfoResponse:
    cell = ledger.board.cell_of(LatLng(lat, lng))
    return CellInfoResponse(
        cell=serializers.cell(cell),
        bounds=serializers.bounds(ledger.board.bounds_of(cell)),
        center=serializers.point(ledger.board.center_of(cell)),
        has_cache=ledger.has_cache(cell),
    )


@router.get("/board/near", response_model=NearbyCellsResponse)
def get_cells_near(
    lat: float | None = Query(None, ge=-90.0, le=90.0, allow_inf_nan=False, description="Defaults to the player's position"),
    lng: float | None = Query(None, ge=-180.0, le=180.0, allow_inf_nan=False),
    radius: int | None = Query(None, ge=0, le=32, description="Defaults to the visibility radius"),
    ledger: TokenLedger = Depends(get_ledger),
) -> NearbyCellsResponse:
    if lat is None or lng is None:
        center = ledger.player_snapshot().position
    else:
        center = LatLng(lat, lng)
    r = ledger.config.visibility_radius if radius is None else radius
    cells = ledger.board.cells_near(center, r)
    return NearbyCellsResponse(
        center=serializers.cell(ledger.board.cell_of(center)),
        radius=r,
        cells=[serializers.cell(c) for c in cells],
    )
