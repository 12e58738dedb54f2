"""GET /api/v1/events — recent game events (polled by UI)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from geocoin.api.dependencies import get_ledger
from geocoin.api.schemas import CellSchema, EventSchema, EventsResponse
from geocoin.engine.ledger import TokenLedger

router = APIRouter()


@router.get("/events", response_model=EventsResponse)
def get_events(
    since: int | None = Query(None, ge=0, description="Return events with seq >= since"),
    limit: int = Query(50, ge=1, le=500),
    ledger: TokenLedger = Depends(get_ledger),
) -> EventsResponse:
    log = ledger.events
    events = log.since(since)[-limit:] if since is not None else log.latest(limit)
    return EventsResponse(
        events=[
            EventSchema(
                seq=e.seq,
                category=e.category,
                message=e.message,
                cell=CellSchema(i=e.cell[0], j=e.cell[1]) if e.cell is not None else None,
            )
            for e in events
        ]
    )
