"""
Landmark zone placer.

A landmark is a filled rectangle, optionally enclosed by a WALL perimeter
with an explicit list of gaps. Gap cells are never written by the enclosure,
so they keep the interior fill and act as the zone's only entrances.
Decorations are point writes applied after the enclosure.
"""
from typing import Iterable, Sequence, Tuple
from santacruz.config import get_world_logger
from santacruz.world.grid import TileGrid
from santacruz.world.layout import Fixture, LandmarkZone, Rect
from santacruz.world.tiles import TileType

logger = get_world_logger()


def enclose(grid: TileGrid, x1: int, y1: int, x2: int, y2: int,
            gaps: Sequence[Tuple[int, int]] = ()) -> int:
    """
    Write WALL along the four border lines of the rectangle except at `gaps`.

    Returns the number of wall cells written.
    """
    gap_set = set(gaps)
    walls = 0
    for x, y in Rect(x1, y1, x2, y2).border():
        if (x, y) in gap_set or not grid.in_bounds(x, y):
            continue
        grid.set(x, y, TileType.WALL)
        walls += 1
    return walls


def apply_fixtures(grid: TileGrid, fixtures: Iterable[Fixture]):
    for fixture in fixtures:
        grid.set(fixture.x, fixture.y, fixture.tile)


def carve_passages(grid: TileGrid, rng, rect: Rect, inset: int = 2) -> Tuple[int, int]:
    """
    Cut one full-height and one full-width ALLEY passage through `rect`.

    The passage coordinates are drawn from the interior, `inset` cells away
    from the edges. Returns (passage_x, passage_y).
    """
    lo_x, hi_x = rect.x1 + inset, max(rect.x1 + inset, rect.x2 - inset)
    lo_y, hi_y = rect.y1 + inset, max(rect.y1 + inset, rect.y2 - inset)
    px = rng.randint(lo_x, hi_x)
    py = rng.randint(lo_y, hi_y)
    grid.fill(px, rect.y1, px, rect.y2, TileType.ALLEY)
    grid.fill(rect.x1, py, rect.x2, py, TileType.ALLEY)
    return px, py


def place_landmark(grid: TileGrid, zone: LandmarkZone, rng=None):
    """
    Place one landmark: fill, sub-fills, passages, enclosure, fixtures.

    Args:
        grid: Grid to write into
        zone: Landmark descriptor
        rng: Random source, only needed when zone.random_passages is set
    """
    r = zone.rect
    grid.fill(r.x1, r.y1, r.x2, r.y2, zone.fill)

    for sub in zone.sub_fills:
        grid.fill(sub.rect.x1, sub.rect.y1, sub.rect.x2, sub.rect.y2, sub.tile)

    if zone.random_passages:
        if rng is None:
            raise ValueError(f"Landmark '{zone.name}' needs an rng for its passages")
        px, py = carve_passages(grid, rng, r, zone.passage_inset)
        logger.debug(f"Landmark '{zone.name}': passages at x={px}, y={py}")

    if zone.enclosed:
        walls = enclose(grid, r.x1, r.y1, r.x2, r.y2, zone.gaps)
        logger.debug(f"Landmark '{zone.name}': {walls} wall cells, {len(zone.gaps)} entrance(s)")

    apply_fixtures(grid, zone.fixtures)


def place_landmarks(grid: TileGrid, zones: Iterable[LandmarkZone], rng=None) -> int:
    placed = 0
    for zone in zones:
        place_landmark(grid, zone, rng)
        placed += 1
    return placed
