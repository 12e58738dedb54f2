"""Cache listing, inspection and coin transfers."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from geocoin.api import serializers
from geocoin.api.dependencies import get_ledger
from geocoin.api.schemas import (
    CacheDetailResponse,
    CacheListResponse,
    CacheSummarySchema,
    DeltaResponse,
)
from geocoin.core.errors import NoCacheError
from geocoin.core.models import Cell, Token
from geocoin.engine.commands import Collect, Command, Deposit, Locate
from geocoin.engine.ledger import TokenLedger

router = APIRouter()


def _dispatch(ledger: TokenLedger, command: Command) -> DeltaResponse:
    try:
        return serializers.delta(ledger.dispatch(command))
    except NoCacheError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.get("/caches", response_model=CacheListResponse)
def list_caches(
    nearby: bool = Query(False, description="Only caches within the player's visibility radius"),
    ledger: TokenLedger = Depends(get_ledger),
) -> CacheListResponse:
    cells = ledger.nearby_caches() if nearby else ledger.spawned
    return CacheListResponse(
        anchor=serializers.cell(ledger.scan_anchor()),
        caches=[
            CacheSummarySchema(
                cell=serializers.cell(c),
                bounds=serializers.bounds(ledger.board.bounds_of(c)),
                opened=ledger.peek(c) is not None,
            )
            for c in cells
        ],
    )


@router.get("/caches/{i}/{j}", response_model=CacheDetailResponse)
def open_cache(i: int, j: int, ledger: TokenLedger = Depends(get_ledger)) -> CacheDetailResponse:
    try:
        cache = ledger.inspect(Cell(i, j))
    except NoCacheError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return CacheDetailResponse(
        cell=serializers.cell(cache.cell),
        active_count=cache.active_count,
        minted=cache.minted,
        deposited=cache.deposited,
        contents=[serializers.token(t) for t in cache.contents],
    )


@router.post("/caches/{i}/{j}/collect", response_model=DeltaResponse)
def collect(i: int, j: int, ledger: TokenLedger = Depends(get_ledger)) -> DeltaResponse:
    return _dispatch(ledger, Collect(Cell(i, j)))


@router.post("/caches/{i}/{j}/deposit", response_model=DeltaResponse)
def deposit(i: int, j: int, ledger: TokenLedger = Depends(get_ledger)) -> DeltaResponse:
    return _dispatch(ledger, Deposit(Cell(i, j)))


@router.get("/tokens/locate", response_model=DeltaResponse)
def locate(
    i: int,
    j: int,
    serial: int = Query(..., ge=0),
    ledger: TokenLedger = Depends(get_ledger),
) -> DeltaResponse:
    return _dispatch(ledger, Locate(Token(i, j, serial)))
