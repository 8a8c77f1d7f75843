"""
Utility functions for world generation (NumPy-accelerated where it pays).

Grid neighbourhoods, distance fields, reachability and the deterministic
per-tile noise used by the light scan. Functions operate on plain NumPy
arrays so they can be reused on frozen grids after generation.
"""

from collections import deque
from typing import Iterable, Iterator, Sequence, Tuple
import numpy as np


# ============================================================================
# DIRECTION DEFINITIONS
# ============================================================================

DIRECTIONS_4 = [
    ('north', 0, -1), ('south', 0, 1),
    ('east', 1, 0), ('west', -1, 0)
]


# ============================================================================
# GRID OPERATIONS
# ============================================================================

def valid_pos(x: int, y: int, width: int, height: int) -> bool:
    """Check if position is within grid bounds."""
    return 0 <= x < width and 0 <= y < height


def neighbors_4(x: int, y: int, width: int, height: int) -> Iterator[Tuple[int, int, str]]:
    """Yield cardinal neighbors (nx, ny, direction) within bounds."""
    for direction, dx, dy in DIRECTIONS_4:
        nx, ny = x + dx, y + dy
        if valid_pos(nx, ny, width, height):
            yield (nx, ny, direction)


def tile_mask(cells: np.ndarray, tiles: Iterable[int]) -> np.ndarray:
    """Boolean mask of cells whose value is one of `tiles`."""
    return np.isin(cells, np.array(sorted(int(t) for t in tiles), dtype=cells.dtype))


# ============================================================================
# DISTANCE CALCULATIONS
# ============================================================================

def manhattan_distance_field(width: int, height: int,
                             points: Sequence[Tuple[int, int]]) -> np.ndarray:
    """
    Distance from every cell to the nearest of `points` (L1 metric).

    Returns an int array of shape (height, width). With no points every cell
    is "infinitely" far away (a large sentinel), which puts the whole map in
    the sparsest lighting band.
    """
    ys, xs = np.indices((height, width))
    if not points:
        return np.full((height, width), np.iinfo(np.int32).max, dtype=np.int32)
    field = np.stack([np.abs(xs - px) + np.abs(ys - py) for px, py in points])
    return field.min(axis=0).astype(np.int32)


# ============================================================================
# REACHABILITY
# ============================================================================

def bfs_reachable(passable: np.ndarray, start: Tuple[int, int]) -> np.ndarray:
    """
    Breadth-first flood fill over a boolean passability mask (4-connected).

    Args:
        passable: bool array (height, width)
        start: (x, y) seed position

    Returns:
        bool array marking every cell reachable from start (all False when the
        start itself is blocked or outside the grid)
    """
    height, width = passable.shape
    reached = np.zeros_like(passable, dtype=bool)
    sx, sy = start
    if not valid_pos(sx, sy, width, height) or not passable[sy, sx]:
        return reached

    reached[sy, sx] = True
    queue = deque([(sx, sy)])

    while queue:
        x, y = queue.popleft()
        for nx, ny, _ in neighbors_4(x, y, width, height):
            if reached[ny, nx] or not passable[ny, nx]:
                continue
            reached[ny, nx] = True
            queue.append((nx, ny))

    return reached


def connectivity_ratio(passable: np.ndarray, start: Tuple[int, int]) -> float:
    """Share of passable cells reachable from start (1.0 for an empty mask)."""
    total = int(np.count_nonzero(passable))
    if total == 0:
        return 1.0
    return int(np.count_nonzero(bfs_reachable(passable, start))) / total


# ============================================================================
# NOISE
# ============================================================================

def tile_noise(x: int, y: int) -> float:
    """
    Deterministic per-tile pseudo-random value in [0, 1).

    Integer avalanche hash of the coordinates; independent of any RNG state,
    so the light scan gives the same answer for the same grid every time.
    """
    h = (x * 374761393 + y * 668265263) & 0xFFFFFFFF
    h = ((h ^ (h >> 13)) * 1274126177) & 0xFFFFFFFF
    h ^= h >> 16
    return h / 4294967296.0
