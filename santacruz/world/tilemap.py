"""
TileMap: read-only collision and tile queries over a finished grid.

None of these methods raise for numeric input: fractional coordinates are
floored, and anything non-finite or off the map reads as VOID (not walkable,
not a building).
"""
import math
from typing import NamedTuple
import numpy as np
from santacruz.world.tiles import TileType, WALKABLE_TILES, BUILDING_TILES

DEFAULT_HALF_EXTENT = 0.3

# footprint insets: front-facing edges hug the wall, back-facing edges leave
# room so sprites can tuck in behind building fronts
FRONT_INSET = 0.05
BACK_INSET = 0.45


class Dimensions(NamedTuple):
    width: int
    height: int


class TileMap:
    def __init__(self, cells: np.ndarray):
        self._cells = cells
        self.height, self.width = cells.shape

    def get_tile(self, x: float, y: float) -> TileType:
        try:
            if not (math.isfinite(x) and math.isfinite(y)):
                return TileType.VOID
        except (TypeError, OverflowError):  # non-numbers, ints too large for a float
            return TileType.VOID
        ix = math.floor(x)
        iy = math.floor(y)
        if ix < 0 or ix >= self.width or iy < 0 or iy >= self.height:
            return TileType.VOID
        return TileType(int(self._cells[iy, ix]))

    def is_walkable(self, x: float, y: float) -> bool:
        return self.get_tile(x, y) in WALKABLE_TILES

    def is_building(self, x: float, y: float) -> bool:
        return self.get_tile(x, y) in BUILDING_TILES

    def is_area_walkable(self, cx: float, cy: float,
                         half_w: float = DEFAULT_HALF_EXTENT,
                         half_h: float = DEFAULT_HALF_EXTENT) -> bool:
        """All four corners of the box (cx +/- half_w, cy +/- half_h) are walkable."""
        return self._corners_walkable(cx, cy, half_h, half_w, half_h, half_w)

    def is_footprint_walkable(self, cx: float, cy: float,
                              pad_north: float = FRONT_INSET, pad_west: float = FRONT_INSET,
                              pad_south: float = BACK_INSET, pad_east: float = BACK_INSET) -> bool:
        """Asymmetric version of is_area_walkable used by moving entities."""
        return self._corners_walkable(cx, cy, pad_north, pad_west, pad_south, pad_east)

    def _corners_walkable(self, cx, cy, north, west, south, east) -> bool:
        try:
            left, right = cx - west, cx + east
            top, bottom = cy - north, cy + south
        except (TypeError, OverflowError):
            return False
        return (
            self.is_walkable(left, top) and
            self.is_walkable(right, top) and
            self.is_walkable(left, bottom) and
            self.is_walkable(right, bottom)
        )

    def is_npc_walkable(self, cx: float, cy: float,
                        half_w: float = DEFAULT_HALF_EXTENT,
                        half_h: float = DEFAULT_HALF_EXTENT) -> bool:
        """
        Stricter walkability for autonomous NPCs.

        Same corner test as is_area_walkable, and the centre tile may not be
        an ENTRANCE: those are scripted transitions NPCs never wander into.
        """
        if not self.is_area_walkable(cx, cy, half_w, half_h):
            return False
        return self.get_tile(cx, cy) != TileType.ENTRANCE

    def get_dimensions(self) -> Dimensions:
        return Dimensions(self.width, self.height)

    def get_data(self) -> np.ndarray:
        """Read-only view of the underlying (height, width) array."""
        view = self._cells.view()
        view.setflags(write=False)
        return view
