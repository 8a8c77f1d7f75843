"""
Arterial road painter and secondary street overlay.

Arterials are stamped first with a fixed cross-section across their span and
written unconditionally. The overlay runs after blocks and labyrinths and may
cut through them: named multi-segment streets, subdivision avenues (painted
with the same cross-section machinery), random residential connectors that
snap onto main arteries, and finally the re-stamp of protected roads.
"""
from typing import Iterable, Sequence, Tuple
from santacruz.config import get_world_logger
from santacruz.world.grid import TileGrid
from santacruz.world.layout import ArterialRoad, Rect, SecondaryStreet, SnapRule, TileFill
from santacruz.world.tiles import TileType

logger = get_world_logger()


# ============================================================================
# ARTERIALS
# ============================================================================

def _in_gap(coord: int, gaps: Sequence[Tuple[int, int]]) -> bool:
    return any(lo <= coord <= hi for lo, hi in gaps)


def paint_arterial(grid: TileGrid, road: ArterialRoad) -> int:
    """
    Stamp one road's cross-section along its span.

    Returns the number of running positions painted (gaps excluded).
    """
    span = grid.width if road.axis == 'h' else grid.height
    start = 0 if road.start is None else max(road.start, 0)
    end = span if road.end is None else min(road.end, span)

    painted = 0
    for run in range(start, end):
        if _in_gap(run, road.gaps):
            continue
        for lane in road.lanes:
            tile = lane.tile
            if lane.tree_every and run % lane.tree_every == 0:
                tile = TileType.TREE
            across = road.position + lane.offset
            if road.axis == 'h':
                grid.set(run, across, tile)
            else:
                grid.set(across, run, tile)
        painted += 1
    return painted


def paint_arterials(grid: TileGrid, roads: Iterable[ArterialRoad]) -> int:
    """Paint every road in order; later roads win at intersections."""
    total = 0
    for road in roads:
        painted = paint_arterial(grid, road)
        logger.debug(f"Arterial '{road.name}' ({road.axis}={road.position}): {painted} cells along span")
        total += painted
    return total


# ============================================================================
# SECONDARY OVERLAY
# ============================================================================

def apply_fills(grid: TileGrid, fills: Iterable[TileFill]):
    for f in fills:
        grid.fill(f.rect.x1, f.rect.y1, f.rect.x2, f.rect.y2, f.tile)


def carve_secondary_streets(grid: TileGrid, streets: Iterable[SecondaryStreet]) -> int:
    """Unconditionally carve each named street; returns segments carved."""
    segments = 0
    for street in streets:
        apply_fills(grid, street.segments)
        segments += len(street.segments)
        logger.debug(f"Secondary street '{street.name}': {len(street.segments)} segment(s)")
    return segments


def _snap(start: int, end: int, axis: str, rules: Sequence[SnapRule]) -> Tuple[int, int]:
    for rule in rules:
        if rule.axis != axis:
            continue
        if rule.side == 'end' and start < rule.bound and end >= rule.reach:
            end = rule.target
        elif rule.side == 'start' and rule.bound < start <= rule.reach:
            start = rule.target
    return start, end


def carve_residential_connectors(grid: TileGrid, rng, zones: Sequence[Rect],
                                 snaps: Sequence[SnapRule], count: int,
                                 max_length: int = 35, snap_chance: float = 0.9,
                                 protected: Sequence[Rect] = ()) -> int:
    """
    Carve `count` straight 1-tile streets inside random residential zones.

    Each connector starts at a random point of its zone and runs up to
    max_length cells east or south, clipped to the zone; with probability
    snap_chance it is stretched onto a nearby main artery. Cells inside
    `protected` rectangles are left alone.

    Returns:
        Number of cells written.
    """
    if not zones:
        return 0

    written = 0
    for _ in range(count):
        zone = zones[rng.randrange(len(zones))]
        horizontal = rng.random() > 0.5
        x1 = zone.x1 + int(rng.random() * (zone.x2 - zone.x1))
        y1 = zone.y1 + int(rng.random() * (zone.y2 - zone.y1))
        snap = rng.random() < snap_chance

        if horizontal:
            start, end = x1, min(x1 + max_length, zone.x2)
            if snap:
                start, end = _snap(start, end, 'h', snaps)
            cells = ((x, y1) for x in range(start, end + 1))
        else:
            start, end = y1, min(y1 + max_length, zone.y2)
            if snap:
                start, end = _snap(start, end, 'v', snaps)
            cells = ((x1, y) for y in range(start, end + 1))

        for x, y in cells:
            if not grid.in_bounds(x, y) or any(r.contains(x, y) for r in protected):
                continue
            grid.set(x, y, TileType.STREET)
            written += 1

    logger.debug(f"Residential connectors: {count} carved, {written} cells written")
    return written
