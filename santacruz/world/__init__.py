"""
World Package - Santa Cruz Procedural City Generation

This package generates the static tile grid of the exploration map and the
two read-only layers derived from it: collision queries and the static
light catalog.

MODULES:
--------
tiles.py
    TileType / LightCategory enums and the tile classification sets.

grid.py
    TileGrid: NumPy-backed storage with clipping set/fill and the
    background-only safe_set/safe_fill variants.

layout.py
    Frozen layout descriptors and the hand-authored SANTA_CRUZ city.

config.py
    WorldConfig dataclass with every tunable of the pipeline.

roads.py
    Arterial cross-section painter and the secondary street overlay.

landmarks.py
    Landmark zones, wall enclosures with explicit entrance gaps.

blocks.py
    Stride-stepped regular block filler with edge punch-throughs.

labyrinth.py
    Recursive favela labyrinth generator (bisection + corridors).

leak.py
    Heuristic diagonal leak pass that opens pockets next to streets.

lighting.py
    Deterministic light scan plus landmark light overlays.

tilemap.py
    TileMap: walkability / building / footprint queries.

generator.py
    WorldGenerator orchestrating the pipeline; generate() / build_world().

preview.py
    pygame off-screen preview rendering.

USAGE:
------
```python
from santacruz.world import WorldConfig, generate, build_world

world = generate(seed=1808)
world.get_tile(130, 152)          # TileType.SIDEWALK
world.is_walkable(130.5, 152.2)   # True
lights = world.get_lights()

# memoized per config
same = build_world(WorldConfig(seed=1808))
```

PIPELINE:
---------
1. **Grid**: W x H of GRASS
2. **Arterials**: full-span primary roads with fixed cross-sections
3. **Landmarks**: shopping, station, plazas, church; walled plazas keep an
   exact entrance count
4. **Blocks**: ordered districts on a 3-cell stride
5. **Labyrinths**: recursive favela districts, connected by construction
6. **Overlay**: named streets, subdivision avenues, residential connectors
7. **Leak pass**: randomized diagonal openings next to streets
8. **Queries / lights**: read-only passes over the frozen grid
"""

from santacruz.world.tiles import (
    TileType, LightCategory,
    WALKABLE_TILES, BUILDING_TILES, SOLID_TILES, BACKGROUND_TILES,
)
from santacruz.world.grid import TileGrid
from santacruz.world.layout import (
    CityLayout, Rect, LandmarkZone, ArterialRoad, Lane, BlockSpec,
    SecondaryStreet, TileFill, Fixture, SANTA_CRUZ, EMPTY_LAYOUT,
)
from santacruz.world.config import WorldConfig
from santacruz.world.tilemap import TileMap, Dimensions
from santacruz.world.lighting import LightSource, derive_lights, lamppost_positions
from santacruz.world.generator import World, WorldGenerator, generate, build_world

__all__ = [
    # Tiles
    'TileType',
    'LightCategory',
    'WALKABLE_TILES',
    'BUILDING_TILES',
    'SOLID_TILES',
    'BACKGROUND_TILES',

    # Grid
    'TileGrid',

    # Layout
    'CityLayout',
    'Rect',
    'LandmarkZone',
    'ArterialRoad',
    'Lane',
    'BlockSpec',
    'SecondaryStreet',
    'TileFill',
    'Fixture',
    'SANTA_CRUZ',
    'EMPTY_LAYOUT',

    # Configuration
    'WorldConfig',

    # Queries
    'TileMap',
    'Dimensions',

    # Lighting
    'LightSource',
    'derive_lights',
    'lamppost_positions',

    # Generator
    'World',
    'WorldGenerator',
    'generate',
    'build_world',
]
