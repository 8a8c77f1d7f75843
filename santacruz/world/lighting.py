"""
Static light-source derivation.

One deterministic scan over the finished grid emits light records from tile
types, neighbour shape and distance to the nearest urban hub, then appends
the fixed landmark overlays from the layout. The scan never touches an RNG:
the only randomness is the per-tile hash noise, so the same grid always
yields the same catalog.

Distance bands (Manhattan distance to the nearest hub):
    core       < 45
    middle     < 90
    periphery  everything else
"""
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple
import numpy as np
from santacruz.config import get_world_logger
from santacruz.world.layout import CityLayout
from santacruz.world.tiles import TileType, LightCategory, ROAD_TILES, PHYSICAL_LIGHTS
from santacruz.world.utils import manhattan_distance_field, tile_mask, tile_noise

logger = get_world_logger()

CORE_RADIUS = 45
MIDDLE_RADIUS = 90

STREETGLOW_STRIDES = (5, 7, 10)  # core, middle, periphery
SIDEWALK_STRIDE = 6
ALLEY_STRIDE = 12
PLAZA_STRIDE = 9
WINDOW_STRIDE = 4
SHOPPING_STRIDE = 4

WINDOW_THRESHOLD = 0.2

# minimum Chebyshev spacing between physical lamps
CORNER_SPACING = 2
EDGE_SPACING = 3
ALLEY_SPACING = 2
PLAZA_SPACING = 6


@dataclass(frozen=True)
class LightSource:
    x: int
    y: int
    category: LightCategory


class _LampSpacing:
    """Occupancy mask for physical lamps placed so far in one scan."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.mask = np.zeros((height, width), dtype=bool)

    def is_free(self, x: int, y: int, spacing: int) -> bool:
        lo_x, hi_x = max(x - spacing, 0), min(x + spacing, self.width - 1)
        lo_y, hi_y = max(y - spacing, 0), min(y + spacing, self.height - 1)
        return not self.mask[lo_y:hi_y + 1, lo_x:hi_x + 1].any()

    def mark(self, x: int, y: int):
        self.mask[y, x] = True


def _band(dist: int) -> int:
    if dist < CORE_RADIUS:
        return 0
    if dist < MIDDLE_RADIUS:
        return 1
    return 2


def _sidewalk_spacing(x: int, y: int, band: int, corner: bool) -> int:
    """
    Spacing the lamp at (x, y) must respect, or 0 when this tile gets no lamp.

    Corners win over straight edges in every band; the periphery drops the
    stride and keeps roughly one straight-edge tile in ten.
    """
    noise = tile_noise(x, y)
    on_stride = x % SIDEWALK_STRIDE == 0 or y % SIDEWALK_STRIDE == 0
    if band == 0:
        if corner or on_stride:
            return CORNER_SPACING
    elif band == 1:
        if corner and noise > 0.1:
            return CORNER_SPACING
        if on_stride and noise > 0.3:
            return EDGE_SPACING
    else:
        if corner and noise > 0.2:
            return CORNER_SPACING
        if noise > 0.9:
            return EDGE_SPACING
    return 0


def derive_lights(cells: np.ndarray, layout: CityLayout) -> Tuple[LightSource, ...]:
    """
    Scan a finished grid and build the static light catalog.

    Args:
        cells: (height, width) tile array; not modified
        layout: City layout providing hubs and landmark overlays

    Returns:
        Tuple of LightSource in scan order followed by overlay order.
    """
    height, width = cells.shape
    dist = manhattan_distance_field(width, height, layout.hubs)
    road = tile_mask(cells, ROAD_TILES)

    # cardinal road neighbours, padded so edge tiles see "no road" outside
    padded = np.pad(road, 1, constant_values=False)
    adj_n = padded[:-2, 1:-1]
    adj_s = padded[2:, 1:-1]
    adj_w = padded[1:-1, :-2]
    adj_e = padded[1:-1, 2:]

    lamps = _LampSpacing(width, height)
    lights: List[LightSource] = []

    for y in range(height):
        row = cells[y].tolist()
        dist_row = dist[y].tolist()
        for x in range(width):
            tile = row[x]
            band = _band(dist_row[x])

            if tile == TileType.STREET:
                if (x + y) % STREETGLOW_STRIDES[band] == 0:
                    lights.append(LightSource(x, y, LightCategory.STREETGLOW))

            elif tile == TileType.SIDEWALK:
                vertical = adj_n[y, x] or adj_s[y, x]
                horizontal = adj_e[y, x] or adj_w[y, x]
                if not (vertical or horizontal):
                    continue
                spacing = _sidewalk_spacing(x, y, band, vertical and horizontal)
                if spacing and lamps.is_free(x, y, spacing):
                    lights.append(LightSource(x, y, LightCategory.STREET))
                    lamps.mark(x, y)

            elif tile == TileType.ALLEY:
                if (x + y) % ALLEY_STRIDE == 0 and lamps.is_free(x, y, ALLEY_SPACING):
                    lights.append(LightSource(x, y, LightCategory.ALLEY))
                    lamps.mark(x, y)

            elif tile == TileType.PLAZA:
                if x % PLAZA_STRIDE == 0 and y % PLAZA_STRIDE == 0 and lamps.is_free(x, y, PLAZA_SPACING):
                    lights.append(LightSource(x, y, LightCategory.PLAZA))
                    lamps.mark(x, y)

            elif tile == TileType.BUILDING_LOW or tile == TileType.BUILDING_TALL:
                if (x % WINDOW_STRIDE == 0 and y % WINDOW_STRIDE == 0
                        and tile_noise(x * 3, y * 7) > WINDOW_THRESHOLD):
                    lights.append(LightSource(x, y, LightCategory.RESIDENTIAL))

            elif tile == TileType.SHOPPING:
                if x % SHOPPING_STRIDE == 0 and y % SHOPPING_STRIDE == 0:
                    lights.append(LightSource(x, y, LightCategory.SHOPPING))

            elif tile == TileType.ENTRANCE:
                lights.append(LightSource(x, y, LightCategory.ALLEY))

    scanned = len(lights)
    for overlay in layout.light_overlays:
        for px, py in overlay.points():
            lights.append(LightSource(px, py, overlay.category))

    logger.debug(f"Light scan: {scanned} derived, {len(lights) - scanned} landmark overlay lights")
    return tuple(lights)


def lamppost_positions(lights: Iterable[LightSource]) -> List[Tuple[int, int]]:
    """Positions of lights that stand on a physical pole (no road-centre glow)."""
    return [(light.x, light.y) for light in lights if light.category in PHYSICAL_LIGHTS]


def count_by_category(lights: Sequence[LightSource]) -> dict:
    counts = {category.value: 0 for category in LightCategory}
    for light in lights:
        counts[light.category.value] += 1
    return counts
