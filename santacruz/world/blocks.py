"""
Regular block filler.

Ordered city blocks are built on a fixed stride: a 2x2 building footprint
plus an implicit one-cell alley gap per step. Leftover background becomes
ALLEY, and short slots are punched through each edge so the built perimeter
never seals the block off.
"""
from santacruz.config import get_world_logger
from santacruz.world.grid import TileGrid
from santacruz.world.tiles import TileType, RESIDENTIAL_BUILDINGS

logger = get_world_logger()

FOOTPRINT = 2
SLOT_DEPTH = 2


def fill_block(grid: TileGrid, rng, x1: int, y1: int, x2: int, y2: int,
               density: float = 0.85, tall_chance: float = 0.3,
               stride: int = 3, alley_chance: float = 0.3,
               slots_per_side: int = 4) -> dict:
    """
    Fill a block with stride-stepped buildings separated by alleys.

    Args:
        grid: Grid to write into (only background cells are built on)
        rng: random.Random instance
        x1, y1, x2, y2: Inclusive block rectangle
        density: Probability an anchor gets a building
        tall_chance: Probability a building is BUILDING_TALL
        stride: Anchor spacing
        alley_chance: Residual probability of a lone ALLEY at an empty anchor
        slots_per_side: Punch-through slots carved on each edge

    Returns:
        Dict with 'buildings', 'gap_alleys' and 'slots' counts.
    """
    buildings = 0
    for y in range(y1, y2 + 1, stride):
        for x in range(x1, x2 + 1, stride):
            if rng.random() < density:
                tile = TileType.BUILDING_TALL if rng.random() < tall_chance else TileType.BUILDING_LOW
                if x + FOOTPRINT <= x2 and y + FOOTPRINT <= y2:
                    grid.safe_fill_rect(x, y, FOOTPRINT, FOOTPRINT, tile)
                    buildings += 1
            elif rng.random() < alley_chance:
                grid.safe_set(x, y, TileType.ALLEY)

    # no background may survive inside the block
    gap_alleys = grid.replace(x1, y1, x2, y2, TileType.GRASS, TileType.ALLEY)
    gap_alleys += grid.replace(x1, y1, x2, y2, TileType.VOID, TileType.ALLEY)

    slots = 0
    span_x = max(x2 - x1, 1)
    span_y = max(y2 - y1, 1)
    for _ in range(slots_per_side):
        slots += _slot(grid, x1 + rng.randrange(span_x), y1, 0, 1)   # top
        slots += _slot(grid, x1 + rng.randrange(span_x), y2, 0, -1)  # bottom
        slots += _slot(grid, x1, y1 + rng.randrange(span_y), 1, 0)   # left
        slots += _slot(grid, x2, y1 + rng.randrange(span_y), -1, 0)  # right

    logger.debug(
        f"Block ({x1},{y1})-({x2},{y2}): {buildings} buildings, "
        f"{gap_alleys} gap alleys, {slots} slot cells"
    )
    return {'buildings': buildings, 'gap_alleys': gap_alleys, 'slots': slots}


def _slot(grid: TileGrid, sx: int, sy: int, dx: int, dy: int) -> int:
    """Cut a SLOT_DEPTH-deep alley inward from an edge cell through buildings."""
    carved = 0
    for d in range(SLOT_DEPTH):
        if grid.carve(sx + dx * d, sy + dy * d, TileType.ALLEY, RESIDENTIAL_BUILDINGS):
            carved += 1
    return carved
