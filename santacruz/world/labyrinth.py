"""
Recursive favela labyrinth generator.

Recursive rectangle bisection: every split lays a corridor (street or alley)
across the whole parent rectangle, so the two halves are always joined
end-to-end, then recurses into each half. Regions thinner than the minimum
size bottom out in a dense micro-fill of 1-2 cell shacks with the leftover
background turned into alleys.

The split coordinate is drawn from the centred band that keeps each child at
most half the parent's extent. That bounds the recursion depth (root = 0) by
2 * ceil(log2(max(w, h) / min_size)) + 1.
"""
import math
from typing import Dict
from santacruz.config import get_world_logger
from santacruz.world.grid import TileGrid
from santacruz.world.tiles import TileType

logger = get_world_logger()


def depth_bound(width: int, height: int, min_size: int) -> int:
    """Upper bound on LabyrinthGenerator.max_depth for a (width, height) extent."""
    longest = max(width, height)
    if longest < min_size or min(width, height) < min_size:
        return 0
    return 2 * math.ceil(math.log2(longest / min_size)) + 1


class LabyrinthGenerator:
    """
    Generates favela districts into an existing grid.

    Only background cells are written, so arterials and landmarks already on
    the grid survive and corridors simply butt up against them.

    Attributes:
        calls: Total number of generate() invocations
        leaves: Number of micro-filled leaf regions
        max_depth: Deepest recursion level reached (root = 0)
        corridors: Counts of corridors laid, keyed by tile name
    """

    def __init__(self, grid: TileGrid, rng, min_size: int = 10,
                 fill_chance: float = 0.8, tall_chance: float = 0.2,
                 street_chance: float = 0.3, punch_chance: float = 0.5,
                 wide_footprint_chance: float = 0.7):
        self.grid = grid
        self.rng = rng
        self.min_size = min_size
        self.fill_chance = fill_chance
        self.tall_chance = tall_chance
        self.street_chance = street_chance
        self.punch_chance = punch_chance
        self.wide_footprint_chance = wide_footprint_chance
        self.reset_stats()

    def reset_stats(self):
        self.calls = 0
        self.leaves = 0
        self.max_depth = 0
        self.corridors: Dict[str, int] = {'STREET': 0, 'ALLEY': 0}

    # -------------------------
    # Entry point
    # -------------------------
    def generate(self, x1: int, y1: int, x2: int, y2: int, depth: int = 0):
        """Fill the inclusive rectangle (x1, y1)-(x2, y2) with labyrinth."""
        self.calls += 1
        self.max_depth = max(self.max_depth, depth)

        w = x2 - x1
        h = y2 - y1

        if w < self.min_size or h < self.min_size:
            self._micro_fill(x1, y1, x2, y2)
            self.leaves += 1
            return

        if w == h:
            split_rows = self.rng.random() > 0.5
        else:
            split_rows = h > w

        corridor = TileType.STREET if self.rng.random() < self.street_chance else TileType.ALLEY
        cw = 1 if corridor == TileType.STREET else 0  # extra corridor width beyond 1
        self.corridors[corridor.name] += 1

        if split_rows:
            split = self._split_coord(y1, h, cw)
            # corridor spans the full parent width
            self.grid.safe_fill(x1, split, x2, split + cw, corridor)
            self._punch_through(x1, x2, split, cw, w, along_x=True)
            self.generate(x1, y1, x2, split - 1, depth + 1)
            self.generate(x1, split + cw + 1, x2, y2, depth + 1)
        else:
            split = self._split_coord(x1, w, cw)
            self.grid.safe_fill(split, y1, split + cw, y2, corridor)
            self._punch_through(y1, y2, split, cw, h, along_x=False)
            self.generate(x1, y1, split - 1, y2, depth + 1)
            self.generate(split + cw + 1, y1, x2, y2, depth + 1)

    # -------------------------
    # Helpers
    # -------------------------
    def _split_coord(self, lo: int, extent: int, cw: int) -> int:
        """
        Split coordinate leaving each child at most extent // 2 and at least
        one cell wide.
        """
        low = max(lo + (extent + 1) // 2 - 1 - cw, lo + 1)
        high = min(lo + extent // 2 + 1, lo + extent - 1 - cw)
        return self.rng.randint(low, high)

    def _punch_through(self, lo: int, hi: int, split: int, cw: int, extent: int, along_x: bool):
        """
        With punch_chance per side, open a short perpendicular alley stub off
        the corridor at a random point along it.
        """
        length = 2 if extent > 20 else 1
        for side in (-1, 1):
            if self.rng.random() >= self.punch_chance:
                continue
            at = self.rng.randint(lo, hi)
            if side < 0:
                a, b = split - length, split - 1
            else:
                a, b = split + cw + 1, split + cw + length
            if along_x:
                self.grid.safe_fill(at, a, at, b, TileType.ALLEY)
            else:
                self.grid.safe_fill(a, at, b, at, TileType.ALLEY)

    def _micro_fill(self, x1: int, y1: int, x2: int, y2: int):
        """Dense 2-stride shack fill, then leftover background becomes ALLEY."""
        grid = self.grid
        for y in range(y1, y2 + 1, 2):
            for x in range(x1, x2 + 1, 2):
                if not grid.is_background(x, y):
                    continue
                if self.rng.random() >= self.fill_chance:
                    continue
                tile = TileType.BUILDING_TALL if self.rng.random() < self.tall_chance else TileType.BUILDING_LOW
                bw = 2 if self.rng.random() < self.wide_footprint_chance else 1
                bh = 2 if self.rng.random() < self.wide_footprint_chance else 1
                if x + bw > x2 + 1 or y + bh > y2 + 1:
                    continue
                if all(grid.is_background(x + bx, y + by) for by in range(bh) for bx in range(bw)):
                    grid.safe_fill_rect(x, y, bw, bh, tile)

        grid.replace(x1, y1, x2, y2, TileType.GRASS, TileType.ALLEY)
        grid.replace(x1, y1, x2, y2, TileType.VOID, TileType.ALLEY)

    def stats(self) -> Dict:
        return {
            'calls': self.calls,
            'leaves': self.leaves,
            'max_depth': self.max_depth,
            'street_corridors': self.corridors['STREET'],
            'alley_corridors': self.corridors['ALLEY'],
        }
