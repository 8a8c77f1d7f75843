"""
Tile grid storage.

The grid is a (height x width) NumPy uint8 array indexed [y][x]. Every write
helper clips to the grid bounds and silently ignores anything outside it, so
generation passes can stamp shapes that hang off the map edge without
special-casing.
"""
from typing import Iterable, Optional, Tuple
import numpy as np
from santacruz.world.tiles import TileType, BACKGROUND_TILES

_BACKGROUND_VALUES = np.array(sorted(int(t) for t in BACKGROUND_TILES), dtype=np.uint8)


class TileGrid:
    """
    Mutable tile grid used during generation.

    fill/set write unconditionally; the safe_* variants only overwrite
    background (GRASS or VOID) cells, which protects roads and landmarks
    laid down by earlier passes.
    """

    def __init__(self, width: int, height: int, fill: TileType = TileType.GRASS):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.cells = np.full((height, width), int(fill), dtype=np.uint8)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> TileType:
        """Tile at (x, y), VOID outside the grid."""
        if not self.in_bounds(x, y):
            return TileType.VOID
        return TileType(int(self.cells[y, x]))

    def is_background(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.cells[y, x] in _BACKGROUND_VALUES

    def count(self, tile: TileType, rect: Optional[Tuple[int, int, int, int]] = None) -> int:
        """Number of cells holding `tile`, optionally restricted to an inclusive rect."""
        view = self.cells if rect is None else self._view(*rect)
        if view is None:
            return 0
        return int(np.count_nonzero(view == int(tile)))

    def region(self, x1: int, y1: int, x2: int, y2: int) -> np.ndarray:
        """Read-only copy of the clipped inclusive rectangle."""
        view = self._view(x1, y1, x2, y2)
        if view is None:
            return np.zeros((0, 0), dtype=np.uint8)
        return view.copy()

    def tobytes(self) -> bytes:
        return self.cells.tobytes()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def set(self, x: int, y: int, tile: TileType):
        if self.in_bounds(x, y):
            self.cells[y, x] = int(tile)

    def fill(self, x1: int, y1: int, x2: int, y2: int, tile: TileType):
        """Unconditional fill of the inclusive rectangle (x1, y1)-(x2, y2)."""
        view = self._view(x1, y1, x2, y2)
        if view is not None:
            view[...] = int(tile)

    def fill_rect(self, x: int, y: int, w: int, h: int, tile: TileType):
        self.fill(x, y, x + w - 1, y + h - 1, tile)

    def safe_set(self, x: int, y: int, tile: TileType):
        if self.is_background(x, y):
            self.cells[y, x] = int(tile)

    def safe_fill(self, x1: int, y1: int, x2: int, y2: int, tile: TileType):
        """Fill only the background cells of the inclusive rectangle."""
        view = self._view(x1, y1, x2, y2)
        if view is not None:
            view[np.isin(view, _BACKGROUND_VALUES)] = int(tile)

    def safe_fill_rect(self, x: int, y: int, w: int, h: int, tile: TileType):
        self.safe_fill(x, y, x + w - 1, y + h - 1, tile)

    def carve(self, x: int, y: int, tile: TileType, through: Iterable[TileType]) -> bool:
        """
        Overwrite (x, y) with `tile` only if it currently holds one of `through`.

        Returns True when the cell changed.
        """
        if not self.in_bounds(x, y):
            return False
        if TileType(int(self.cells[y, x])) in through:
            self.cells[y, x] = int(tile)
            return True
        return False

    def replace(self, x1: int, y1: int, x2: int, y2: int, old: TileType, new: TileType) -> int:
        """Replace every `old` cell in the rectangle with `new`; returns the count."""
        view = self._view(x1, y1, x2, y2)
        if view is None:
            return 0
        mask = view == int(old)
        view[mask] = int(new)
        return int(np.count_nonzero(mask))

    def freeze(self) -> np.ndarray:
        """Make the backing array read-only and return it."""
        self.cells.setflags(write=False)
        return self.cells

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _view(self, x1: int, y1: int, x2: int, y2: int) -> Optional[np.ndarray]:
        """Writable view of the clipped inclusive rectangle, None when empty."""
        lo_x, hi_x = max(x1, 0), min(x2, self.width - 1)
        lo_y, hi_y = max(y1, 0), min(y2, self.height - 1)
        if lo_x > hi_x or lo_y > hi_y:
            return None
        return self.cells[lo_y:hi_y + 1, lo_x:hi_x + 1]

    def __repr__(self):
        return f"TileGrid({self.width}x{self.height})"
