"""
Global connectivity leak pass.

A heuristic repair, not a proof: random street/sidewalk cells punch a short
diagonal run of alleys into whatever solid mass sits next to them. It makes
isolated pockets less likely but guarantees nothing; the generator reports
the remaining reachability afterwards.
"""
from typing import Sequence
from santacruz.config import get_world_logger
from santacruz.world.grid import TileGrid
from santacruz.world.layout import Rect
from santacruz.world.tiles import TileType, SOLID_TILES, LEAK_SOURCE_TILES

logger = get_world_logger()


def leak_pass(grid: TileGrid, rng, iterations: int = 500, margin: int = 30,
              depth: int = 2, protected: Sequence[Rect] = ()) -> int:
    """
    Punch diagonal alley leaks out of streets and sidewalks.

    Args:
        grid: Grid to modify in place
        rng: random.Random instance
        iterations: Number of samples
        margin: Interior margin kept clear of the sampling area (clamped so
            small grids still have at least one sample row/column)
        depth: How many cells along the diagonal are converted
        protected: Rectangles whose cells are never converted (enclosed
            landmarks keep their exact entrance count)

    Returns:
        Number of cells converted to ALLEY.
    """
    mx = max(0, min(margin, (grid.width - 1) // 2))
    my = max(0, min(margin, (grid.height - 1) // 2))
    span_x = grid.width - 2 * mx
    span_y = grid.height - 2 * my

    converted = 0
    for _ in range(iterations):
        x = mx + int(rng.random() * span_x)
        y = my + int(rng.random() * span_y)
        if grid.get(x, y) not in LEAK_SOURCE_TILES:
            continue

        dx = 1 if rng.random() > 0.5 else -1
        dy = 1 if rng.random() > 0.5 else -1
        for d in range(1, depth + 1):
            tx, ty = x + dx * d, y + dy * d
            if any(r.contains(tx, ty) for r in protected):
                continue
            if grid.carve(tx, ty, TileType.ALLEY, SOLID_TILES):
                converted += 1

    logger.debug(f"Leak pass: {iterations} samples, {converted} cells opened")
    return converted
