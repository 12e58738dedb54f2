"""Player state, movement and the positional sensor feed."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends

from geocoin.api import serializers
from geocoin.api.dependencies import get_ledger
from geocoin.api.schemas import (
    DeltaResponse,
    PlayerResponse,
    PositionRequest,
    SensorErrorRequest,
    SensorErrorResponse,
)
from geocoin.core.enums import Direction
from geocoin.core.models import LatLng
from geocoin.engine.commands import Move, Step
from geocoin.engine.ledger import TokenLedger

router = APIRouter()


class StepDirection(str, Enum):
    north = "north"
    east = "east"
    south = "south"
    west = "west"


@router.get("/player", response_model=PlayerResponse)
def get_player(ledger: TokenLedger = Depends(get_ledger)) -> PlayerResponse:
    return serializers.player(ledger.player_snapshot(), ledger.status_line())


@router.post("/player/move", response_model=DeltaResponse)
def move(body: PositionRequest, ledger: TokenLedger = Depends(get_ledger)) -> DeltaResponse:
    return serializers.delta(ledger.dispatch(Move(LatLng(body.lat, body.lng))))


@router.post("/player/step/{direction}", response_model=DeltaResponse)
def step(direction: StepDirection, ledger: TokenLedger = Depends(get_ledger)) -> DeltaResponse:
    return serializers.delta(ledger.dispatch(Step(Direction[direction.name.upper()])))


@router.post("/player/sensor", response_model=PlayerResponse)
def sensor_sample(body: PositionRequest, ledger: TokenLedger = Depends(get_ledger)) -> PlayerResponse:
    ledger.sensor_update(body.lat, body.lng)
    return serializers.player(ledger.player_snapshot(), ledger.status_line())


@router.post("/player/sensor/error", response_model=SensorErrorResponse)
def sensor_error(body: SensorErrorRequest, ledger: TokenLedger = Depends(get_ledger)) -> SensorErrorResponse:
    message = ledger.sensor_unavailable(body.reason)
    return SensorErrorResponse(reported=message is not None, message=message)
