"""
World generation configuration.

WorldConfig gathers every tunable of the pipeline in one frozen (and
therefore hashable) dataclass, so a config doubles as a cache key for
generated worlds. The hand-authored city itself is the `layout` field.
"""
from dataclasses import dataclass, replace
from typing import Optional
from santacruz.config import MAP_WIDTH, MAP_HEIGHT, get_logger
from santacruz.world.layout import CityLayout, SANTA_CRUZ

logger = get_logger(__name__)

_PROBABILITIES = (
    'labyrinth_fill_chance', 'labyrinth_tall_chance', 'labyrinth_street_chance',
    'labyrinth_punch_chance', 'block_alley_chance', 'connectivity_threshold',
)


@dataclass(frozen=True)
class WorldConfig:
    """
    Complete world generation configuration.

    Attributes:
        width, height: Grid dimensions in tiles
        seed: PRNG seed; None draws a fresh one (non-reproducible)
        layout: Hand-authored city description

        labyrinth_min_size: Extent below which a favela region is micro-filled
        labyrinth_fill_chance: Probability a micro-fill anchor gets a shack
        labyrinth_tall_chance: Probability a shack is BUILDING_TALL
        labyrinth_street_chance: Probability a split corridor is a STREET
        labyrinth_punch_chance: Per-side probability of a corridor stub

        block_stride: Anchor spacing of regular blocks
        block_alley_chance: Residual lone-alley probability at empty anchors
        block_slots_per_side: Punch-through slots per block edge

        connector_count: Random residential connector streets
        leak_iterations: Samples of the leak pass
        leak_margin: Interior margin of the leak sampling area
        leak_depth: Cells opened along each leak diagonal

        connectivity_threshold: Reachable share below which a warning is logged
    """
    width: int = MAP_WIDTH
    height: int = MAP_HEIGHT
    seed: Optional[int] = None
    layout: CityLayout = SANTA_CRUZ

    labyrinth_min_size: int = 10
    labyrinth_fill_chance: float = 0.8
    labyrinth_tall_chance: float = 0.2
    labyrinth_street_chance: float = 0.3
    labyrinth_punch_chance: float = 0.5

    block_stride: int = 3
    block_alley_chance: float = 0.3
    block_slots_per_side: int = 4

    connector_count: int = 140
    leak_iterations: int = 500
    leak_margin: int = 30
    leak_depth: int = 2

    connectivity_threshold: float = 0.9

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            logger.error(f"Invalid world dimensions: {self.width}x{self.height}")
            raise ValueError("World width and height must be positive")
        if self.labyrinth_min_size < 4:
            logger.error(f"labyrinth_min_size too small: {self.labyrinth_min_size}")
            raise ValueError("labyrinth_min_size must be at least 4")
        if self.block_stride < 1:
            raise ValueError("block_stride must be at least 1")
        for name in _PROBABILITIES:
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                logger.error(f"{name}={value} outside [0, 1]")
                raise ValueError(f"{name} must be within [0, 1]")
        for name in ('connector_count', 'leak_iterations', 'leak_margin', 'leak_depth'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")

    @property
    def area(self) -> int:
        return self.width * self.height

    def with_seed(self, seed: Optional[int]) -> 'WorldConfig':
        return replace(self, seed=seed)
