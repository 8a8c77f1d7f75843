"""
Tile taxonomy for the Santa Cruz grid.

Values are fixed: the grid is stored as raw bytes, so renumbering a member
changes every serialized world.
"""
from enum import Enum, IntEnum


class TileType(IntEnum):
    VOID = 0
    STREET = 1
    SIDEWALK = 2
    ALLEY = 3
    BUILDING_LOW = 4
    BUILDING_TALL = 5
    PLAZA = 6
    GRASS = 7  # open background
    CHURCH = 8
    SHOPPING = 9
    LAMPPOST = 10
    WALL = 11
    STAIRS_UP = 12
    STAIRS_DOWN = 13
    ENTRANCE = 14  # scripted transition (casino doors)
    FENCE = 15
    TREE = 16
    BENCH = 17
    FOUNTAIN = 18
    DOMINO_TABLE = 19
    MONUMENT = 20
    DECORATIVE_ENTRANCE = 21
    INFORMATION_BOOTH = 22


class LightCategory(str, Enum):
    STREET = 'street'
    STREETGLOW = 'streetglow'
    RESIDENTIAL = 'residential'
    PLAZA = 'plaza'
    SHOPPING = 'shopping'
    ALLEY = 'alley'


# cells that additive passes (safe_set / safe_fill) may overwrite
BACKGROUND_TILES = frozenset({TileType.GRASS, TileType.VOID})

WALKABLE_TILES = frozenset({
    TileType.STREET, TileType.SIDEWALK, TileType.ALLEY, TileType.PLAZA,
    TileType.GRASS, TileType.STAIRS_UP, TileType.STAIRS_DOWN,
    TileType.ENTRANCE, TileType.DECORATIVE_ENTRANCE,
})

BUILDING_TILES = frozenset({
    TileType.BUILDING_LOW, TileType.BUILDING_TALL, TileType.SHOPPING,
    TileType.INFORMATION_BOOTH,
})

# what the leak pass and block punch-throughs are allowed to cut through
SOLID_TILES = frozenset({TileType.BUILDING_LOW, TileType.BUILDING_TALL, TileType.WALL})

RESIDENTIAL_BUILDINGS = frozenset({TileType.BUILDING_LOW, TileType.BUILDING_TALL})

ROAD_TILES = frozenset({TileType.STREET, TileType.ALLEY})

LEAK_SOURCE_TILES = frozenset({TileType.STREET, TileType.SIDEWALK})

# lights that stand on a physical pole (road-centre glow excluded)
PHYSICAL_LIGHTS = frozenset({LightCategory.STREET, LightCategory.PLAZA, LightCategory.ALLEY})
