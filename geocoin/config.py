"""Game configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass

from geocoin.core.enums import CachePolicy, ScanAnchor


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration for a game session."""

    # World
    world_seed: int = 0
    origin_lat: float = 36.98949379578401     # classroom location
    origin_lng: float = -122.06277128548504

    # Grid
    tile_width: float = 1e-4
    visibility_radius: int = 8

    # Caches
    area_size: int = 8
    cache_probability: float = 0.1
    initial_value_scale: int = 10
    cache_policy: CachePolicy = CachePolicy.REGENERATE
    scan_anchor: ScanAnchor = ScanAnchor.ORIGIN

    # Persistence (None -> in-memory store)
    storage_path: str | None = None

    # Event log
    event_log_size: int = 500

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None
