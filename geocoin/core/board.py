"""Board — maps continuous coordinates onto canonical grid cells."""

from __future__ import annotations

import math

from geocoin.core.models import Bounds, Cell, LatLng


class Board:
    """Tile grid over the (lat, lng) plane.

    Every cell handed out is the single canonical instance for its (i, j),
    so callers may use identity as well as equality. The arena is never
    evicted; it grows with the area the player explores.
    """

    __slots__ = ("tile_width", "tile_visibility_radius", "_known_cells")

    def __init__(self, tile_width: float, tile_visibility_radius: int) -> None:
        if tile_width <= 0:
            raise ValueError(f"tile_width must be positive, got {tile_width}")
        self.tile_width = tile_width
        self.tile_visibility_radius = tile_visibility_radius
        self._known_cells: dict[str, Cell] = {}

    # -- canonical cells --

    def cell_at(self, i: int, j: int) -> Cell:
        key = f"{i},{j}"
        cell = self._known_cells.get(key)
        if cell is None:
            cell = Cell(i, j)
            self._known_cells[key] = cell
        return cell

    @property
    def known_cells(self) -> int:
        return len(self._known_cells)

    # -- coordinate math --

    def cell_of(self, point: LatLng) -> Cell:
        if not (math.isfinite(point.lat) and math.isfinite(point.lng)):
            raise ValueError(f"point must be finite, got {point!r}")
        return self.cell_at(
            math.floor(point.lat / self.tile_width),
            math.floor(point.lng / self.tile_width),
        )

    def bounds_of(self, cell: Cell) -> Bounds:
        w = self.tile_width
        return Bounds(
            top_left=LatLng(cell.i * w, cell.j * w),
            bottom_right=LatLng((cell.i + 1) * w, (cell.j + 1) * w),
        )

    def center_of(self, cell: Cell) -> LatLng:
        w = self.tile_width
        return LatLng((cell.i + 0.5) * w, (cell.j + 0.5) * w)

    def cells_near(self, point: LatLng, radius: int | None = None) -> list[Cell]:
        """Return the (2r+1)² cells around *point*, i ascending then j ascending."""
        r = self.tile_visibility_radius if radius is None else radius
        if r < 0:
            raise ValueError(f"radius must be >= 0, got {r}")
        origin = self.cell_of(point)
        return [
            self.cell_at(i, j)
            for i in range(origin.i - r, origin.i + r + 1)
            for j in range(origin.j - r, origin.j + r + 1)
        ]
