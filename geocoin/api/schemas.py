"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Geometry ---

class PointSchema(BaseModel):
    lat: float
    lng: float


class PositionRequest(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0, allow_inf_nan=False)
    lng: float = Field(..., ge=-180.0, le=180.0, allow_inf_nan=False)


class CellSchema(BaseModel):
    i: int
    j: int


class BoundsSchema(BaseModel):
    top_left: PointSchema
    bottom_right: PointSchema


class CellInfoResponse(BaseModel):
    cell: CellSchema
    bounds: BoundsSchema
    center: PointSchema
    has_cache: bool


class NearbyCellsResponse(BaseModel):
    center: CellSchema
    radius: int
    cells: list[CellSchema]


# --- Tokens & caches ---

class TokenSchema(BaseModel):
    i: int
    j: int
    serial: int
    label: str = Field("", description="Display form i:j#serial")


class CacheSummarySchema(BaseModel):
    cell: CellSchema
    bounds: BoundsSchema
    opened: bool = False


class CacheListResponse(BaseModel):
    anchor: CellSchema
    caches: list[CacheSummarySchema]


class CacheDetailResponse(BaseModel):
    cell: CellSchema
    active_count: int
    minted: int
    deposited: int
    contents: list[TokenSchema]


# --- Player ---

class PlayerResponse(BaseModel):
    position: PointSchema
    points: int = 0
    coin_count: int = 0
    inventory: list[TokenSchema] = Field(default_factory=list)
    history: list[PointSchema] = Field(default_factory=list)
    status: str = ""


class SensorErrorRequest(BaseModel):
    reason: str = "unknown"


class SensorErrorResponse(BaseModel):
    reported: bool
    message: str | None = None


# --- Commands ---

class DeltaResponse(BaseModel):
    changed: bool
    coin_count: int
    position: PointSchema
    status: str
    token: TokenSchema | None = None
    cell: CellSchema | None = None
    contents: list[TokenSchema] | None = None


class ControlResponse(BaseModel):
    status: str
    message: str


# --- Events ---

class EventSchema(BaseModel):
    seq: int
    category: str
    message: str
    cell: CellSchema | None = None


class EventsResponse(BaseModel):
    events: list[EventSchema]


# --- Config ---

class GameConfigResponse(BaseModel):
    world_seed: int
    origin: PointSchema
    tile_width: float
    visibility_radius: int
    area_size: int
    cache_probability: float
    cache_policy: str
    scan_anchor: str
