"""
Top-down preview rendering of a finished World with pygame.

This is an offline debugging aid (and what the minimap prerender does in
game): one flat colour per tile, optionally with the light catalog drawn as
dots on top. It never needs a display; everything happens on off-screen
surfaces.
"""
from pathlib import Path
import numpy as np
import pygame
from santacruz.config import PREVIEW_SCALE, get_logger
from santacruz.world.tiles import TileType, LightCategory

logger = get_logger(__name__)

FALLBACK_COLOR = (5, 5, 8)

TILE_COLORS = {
    TileType.VOID: (5, 5, 8),
    TileType.STREET: (58, 58, 68),
    TileType.SIDEWALK: (74, 74, 85),
    TileType.ALLEY: (26, 26, 34),
    TileType.BUILDING_LOW: (90, 74, 58),
    TileType.BUILDING_TALL: (74, 74, 90),
    TileType.PLAZA: (90, 90, 102),
    TileType.GRASS: (26, 58, 24),
    TileType.CHURCH: (120, 110, 90),
    TileType.SHOPPING: (106, 80, 120),
    TileType.WALL: (90, 80, 80),
    TileType.STAIRS_UP: (106, 106, 106),
    TileType.STAIRS_DOWN: (90, 90, 106),
    TileType.ENTRANCE: (58, 90, 122),
    TileType.FENCE: (74, 74, 58),
    TileType.TREE: (42, 90, 34),
}

LIGHT_COLORS = {
    LightCategory.STREET: (255, 187, 68),
    LightCategory.STREETGLOW: (255, 170, 51),
    LightCategory.RESIDENTIAL: (255, 204, 102),
    LightCategory.PLAZA: (255, 240, 208),
    LightCategory.SHOPPING: (221, 238, 255),
    LightCategory.ALLEY: (255, 153, 51),
}


def palette() -> np.ndarray:
    """(len(TileType), 3) uint8 lookup table indexed by tile value."""
    table = np.array([FALLBACK_COLOR] * len(TileType), dtype=np.uint8)
    for tile, color in TILE_COLORS.items():
        table[int(tile)] = color
    return table


def render_surface(world, scale: int = PREVIEW_SCALE, lights: bool = True) -> pygame.Surface:
    """
    Render the world to an off-screen surface of (width*scale, height*scale).

    Args:
        world: Finished World
        scale: Pixels per tile (>= 1)
        lights: Draw the light catalog as dots on top of the tiles
    """
    scale = max(1, int(scale))
    rgb = palette()[world.cells]  # (height, width, 3)
    # surfarray is indexed [x][y]
    base = pygame.surfarray.make_surface(np.ascontiguousarray(rgb.transpose(1, 0, 2)))
    width, height = world.get_dimensions()
    surface = pygame.transform.scale(base, (width * scale, height * scale))

    if lights:
        radius = max(1, scale // 2)
        for light in world.lights:
            if not (0 <= light.x < width and 0 <= light.y < height):
                continue
            center = (light.x * scale + scale // 2, light.y * scale + scale // 2)
            pygame.draw.circle(surface, LIGHT_COLORS[light.category], center, radius)

    return surface


def save_preview(world, path, scale: int = PREVIEW_SCALE, lights: bool = True) -> Path:
    """Render and write the preview image; the format follows the file suffix."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    surface = render_surface(world, scale=scale, lights=lights)
    pygame.image.save(surface, str(path))
    logger.info(f"Preview written: {path} ({surface.get_width()}x{surface.get_height()})")
    return path
