"""GET /api/v1/config — expose game configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from geocoin.api.dependencies import get_ledger
from geocoin.api.schemas import GameConfigResponse, PointSchema
from geocoin.engine.ledger import TokenLedger

router = APIRouter()


@router.get("/config", response_model=GameConfigResponse)
def get_config(ledger: TokenLedger = Depends(get_ledger)) -> GameConfigResponse:
    cfg = ledger.config
    return GameConfigResponse(
        world_seed=cfg.world_seed,
        origin=PointSchema(lat=cfg.origin_lat, lng=cfg.origin_lng),
        tile_width=cfg.tile_width,
        visibility_radius=cfg.visibility_radius,
        area_size=cfg.area_size,
        cache_probability=cfg.cache_probability,
        cache_policy=cfg.cache_policy.value,
        scan_anchor=cfg.scan_anchor.value,
    )
