"""POST /api/v1/control/{action} — game lifecycle controls."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, Query

from geocoin.api.dependencies import get_ledger
from geocoin.api.schemas import ControlResponse
from geocoin.engine.ledger import TokenLedger

router = APIRouter()


class ControlAction(str, Enum):
    reset = "reset"
    rebuild = "rebuild"


@router.post("/control/{action}", response_model=ControlResponse)
def control(
    action: ControlAction,
    confirm: bool = Query(False, description="Required for destructive actions"),
    ledger: TokenLedger = Depends(get_ledger),
) -> ControlResponse:
    match action:
        case ControlAction.reset:
            if not confirm:
                return ControlResponse(status="noop", message="Reset requires confirm=true.")
            ledger.reset()
            return ControlResponse(status="ok", message="Game state erased.")

        case ControlAction.rebuild:
            spawned = ledger.rebuild()
            return ControlResponse(status="ok", message=f"Cache set rebuilt ({len(spawned)} caches).")
