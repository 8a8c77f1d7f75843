"""
World generator: runs the full pipeline and returns an immutable World.

This module implements WorldGenerator which exposes:
    config = WorldConfig(seed=...)
    world = WorldGenerator(config).generate()
    stats = world.stats

and two conveniences:
    generate(width, height, seed, config)  -> fresh World
    build_world(config)                    -> World memoized by config
"""
import random
from dataclasses import replace
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, List, Optional, Tuple
import numpy as np
from santacruz.config import DEFAULT_SEED, PerformanceTimer, get_world_logger
from santacruz.world.blocks import fill_block
from santacruz.world.config import WorldConfig
from santacruz.world.grid import TileGrid
from santacruz.world.labyrinth import LabyrinthGenerator
from santacruz.world.landmarks import apply_fixtures, place_landmarks
from santacruz.world.layout import CityLayout
from santacruz.world.leak import leak_pass
from santacruz.world.lighting import LightSource, count_by_category, derive_lights, lamppost_positions
from santacruz.world.roads import (
    apply_fills, carve_residential_connectors, carve_secondary_streets, paint_arterials
)
from santacruz.world.tilemap import Dimensions, TileMap
from santacruz.world.tiles import TileType, WALKABLE_TILES
from santacruz.world.utils import bfs_reachable, tile_mask


def _read_only(stats: Dict) -> MappingProxyType:
    """Read-only view of a statistics dict, nested dicts included."""
    return MappingProxyType({
        key: _read_only(value) if isinstance(value, dict) else value
        for key, value in stats.items()
    })


class World:
    """
    A finished, read-only world.

    Holds the frozen tile array, the light catalog, the config it was built
    from and generation statistics. Query methods delegate to TileMap.
    """

    def __init__(self, config: WorldConfig, cells: np.ndarray,
                 lights: Tuple[LightSource, ...], stats: Dict):
        self.config = config
        self.cells = cells
        self.lights = lights
        # worlds are shared through build_world's cache
        self.stats = _read_only(stats)
        self.tilemap = TileMap(cells)

    @property
    def layout(self) -> CityLayout:
        return self.config.layout

    @property
    def seed(self) -> int:
        return self.stats['seed']

    # query interface
    def get_tile(self, x: float, y: float) -> TileType:
        return self.tilemap.get_tile(x, y)

    def is_walkable(self, x: float, y: float) -> bool:
        return self.tilemap.is_walkable(x, y)

    def is_building(self, x: float, y: float) -> bool:
        return self.tilemap.is_building(x, y)

    def is_area_walkable(self, cx: float, cy: float, half_w: float = 0.3, half_h: float = 0.3) -> bool:
        return self.tilemap.is_area_walkable(cx, cy, half_w, half_h)

    def is_npc_walkable(self, cx: float, cy: float, half_w: float = 0.3, half_h: float = 0.3) -> bool:
        return self.tilemap.is_npc_walkable(cx, cy, half_w, half_h)

    def get_lights(self) -> Tuple[LightSource, ...]:
        return self.lights

    def get_dimensions(self) -> Dimensions:
        return self.tilemap.get_dimensions()

    def find_safe_spawn(self) -> Tuple[int, int]:
        return self.layout.spawn

    def lamppost_positions(self) -> List[Tuple[int, int]]:
        return lamppost_positions(self.lights)

    def tobytes(self) -> bytes:
        return self.cells.tobytes()

    def __repr__(self):
        return f"World({self.config.width}x{self.config.height}, seed={self.seed}, lights={len(self.lights)})"


class WorldGenerator:
    """
    World generator class.

    - Uses WorldConfig for all configurable parameters.
    - Uses one deterministic RNG (config.seed) threaded through every stage.
    - Public method `generate()` returns a frozen World.
    """

    def __init__(self, config: WorldConfig = None):
        self.config = config or WorldConfig()
        self.logger = get_world_logger()

        if self.config.seed is not None:
            self.seed = self.config.seed
            self.logger.info(f"Generator initialized with seed: {self.seed}")
        else:
            self.seed = random.SystemRandom().randrange(2 ** 31)
            self.logger.info(f"Generator initialized with random seed: {self.seed}")
        self.rng = random.Random(self.seed)

        self.grid: Optional[TileGrid] = None
        self.timings: Dict[str, float] = {}
        self.stage_stats: Dict[str, object] = {}

    # -------------------------
    # Entry point
    # -------------------------
    def generate(self) -> World:
        """
        Run the full generation pipeline and return the finished World.

        Major stages (each writes into the same grid before the next runs):
          - arterial roads
          - landmark zones
          - regular blocks
          - favela labyrinths
          - secondary street overlay
          - leak pass
          - finishing placements
        followed by the read-only light scan and connectivity report.
        """
        cfg = self.config
        layout = cfg.layout
        self.logger.info(f"Generating {cfg.width}×{cfg.height} world '{layout.name}'")

        # Phase 1: fresh grid, open background everywhere
        self.grid = TileGrid(cfg.width, cfg.height, TileType.GRASS)
        self.rng = random.Random(self.seed)
        self.timings = {}
        self.stage_stats = {}

        self._run_stage('arterials', self._paint_arterials)
        self._run_stage('landmarks', self._place_landmarks)
        self._run_stage('blocks', self._fill_blocks)
        self._run_stage('labyrinths', self._generate_labyrinths)
        self._run_stage('overlay', self._overlay_streets)
        self._run_stage('leak', self._leak)
        self._run_stage('finishing', self._finish)

        cells = self.grid.freeze()
        lights = self._run_stage('lights', lambda: derive_lights(cells, layout))
        ratio = self._run_stage('connectivity', lambda: self._connectivity_report(cells))

        stats = self._statistics(cells, lights, ratio)
        self.logger.info(
            f"World complete: seed={self.seed}, lights={len(lights)}, "
            f"reachable={ratio:.2%}, total={sum(self.timings.values()):.3f}s"
        )
        return World(cfg, cells, lights, stats)

    def _run_stage(self, name: str, stage):
        with PerformanceTimer(self.logger, f"stage '{name}'") as timer:
            result = stage()
        self.timings[name] = timer.elapsed
        return result

    # -------------------------
    # Stages
    # -------------------------
    def _paint_arterials(self):
        self.stage_stats['arterials'] = len(self.config.layout.arterials)
        paint_arterials(self.grid, self.config.layout.arterials)

    def _place_landmarks(self):
        self.stage_stats['landmarks'] = place_landmarks(self.grid, self.config.layout.landmarks, self.rng)

    def _fill_blocks(self):
        cfg = self.config
        buildings = 0
        for block in cfg.layout.blocks:
            r = block.rect
            result = fill_block(
                self.grid, self.rng, r.x1, r.y1, r.x2, r.y2,
                density=block.density, tall_chance=block.tall_chance,
                stride=cfg.block_stride, alley_chance=cfg.block_alley_chance,
                slots_per_side=cfg.block_slots_per_side,
            )
            buildings += result['buildings']
        self.stage_stats['block_buildings'] = buildings

    def _generate_labyrinths(self):
        cfg = self.config
        labyrinth = LabyrinthGenerator(
            self.grid, self.rng,
            min_size=cfg.labyrinth_min_size,
            fill_chance=cfg.labyrinth_fill_chance,
            tall_chance=cfg.labyrinth_tall_chance,
            street_chance=cfg.labyrinth_street_chance,
            punch_chance=cfg.labyrinth_punch_chance,
        )
        for r in cfg.layout.labyrinths:
            labyrinth.generate(r.x1, r.y1, r.x2, r.y2)
        self.stage_stats['labyrinth'] = labyrinth.stats()
        self.logger.debug(f"Labyrinths: {labyrinth.stats()}")

    def _overlay_streets(self):
        cfg = self.config
        layout = cfg.layout
        carve_secondary_streets(self.grid, layout.secondary_streets)
        paint_arterials(self.grid, layout.subdivision_avenues)
        self.stage_stats['connector_cells'] = carve_residential_connectors(
            self.grid, self.rng, layout.residential_zones, layout.connector_snaps,
            cfg.connector_count, max_length=layout.connector_max_length,
            snap_chance=layout.connector_snap_chance, protected=layout.enclosed_rects,
        )
        # roads and footprints that must read cleanly whatever was carved above
        paint_arterials(self.grid, layout.protected_arterials)
        apply_fills(self.grid, layout.protected_fills)
        apply_fills(self.grid, layout.veins)

    def _leak(self):
        cfg = self.config
        self.stage_stats['leaked_cells'] = leak_pass(
            self.grid, self.rng, iterations=cfg.leak_iterations,
            margin=cfg.leak_margin, depth=cfg.leak_depth,
            protected=cfg.layout.enclosed_rects,
        )

    def _finish(self):
        apply_fills(self.grid, self.config.layout.finishing_fills)
        apply_fixtures(self.grid, self.config.layout.finishing_fixtures)

    # -------------------------
    # Validation & statistics
    # -------------------------
    def _connectivity_report(self, cells: np.ndarray) -> float:
        """
        Flood-fill from the spawn over walkable tiles and log the reachable share.

        Only reports: a low ratio is logged as a warning, nothing is patched.
        """
        passable = tile_mask(cells, WALKABLE_TILES)
        total = int(np.count_nonzero(passable))
        reached = int(np.count_nonzero(bfs_reachable(passable, self.config.layout.spawn)))
        ratio = reached / total if total else 1.0
        if ratio < self.config.connectivity_threshold:
            self.logger.warning(
                f"Connectivity check: only {reached}/{total} walkable tiles "
                f"({ratio:.2%}) reachable from spawn {self.config.layout.spawn}"
            )
        else:
            self.logger.debug(f"Connectivity check: {reached}/{total} reachable ({ratio:.2%})")
        return ratio

    def _statistics(self, cells: np.ndarray, lights, ratio: float) -> Dict:
        counts = np.bincount(cells.ravel(), minlength=len(TileType))
        stats = {
            'width': self.config.width,
            'height': self.config.height,
            'area': self.config.area,
            'seed': self.seed,
            'tiles': {t.name.lower(): int(counts[t]) for t in TileType},
            'lights': count_by_category(lights),
            'connectivity': ratio,
            'timings': dict(self.timings),
        }
        stats.update(self.stage_stats)
        return stats


# ============================================================================
# FACTORIES
# ============================================================================

def generate(width: Optional[int] = None, height: Optional[int] = None,
             seed: Optional[int] = None, config: Optional[WorldConfig] = None) -> World:
    """
    Build a fresh World.

    Explicit width/height/seed override the matching config fields; omitted
    ones come from `config` (or the defaults).
    """
    base = config or WorldConfig()
    overrides = {}
    if width is not None:
        overrides['width'] = width
    if height is not None:
        overrides['height'] = height
    if seed is not None:
        overrides['seed'] = seed
    return WorldGenerator(replace(base, **overrides)).generate()


@lru_cache(maxsize=4)
def _cached_world(config: WorldConfig) -> World:
    return WorldGenerator(config).generate()


def build_world(config: Optional[WorldConfig] = None) -> World:
    """
    World for `config`, memoized per config.

    Defaults to the standard city with DEFAULT_SEED. Unseeded configs are
    never cached since every call should produce a new world.
    """
    config = config or WorldConfig(seed=DEFAULT_SEED)
    if config.seed is None:
        return WorldGenerator(config).generate()
    return _cached_world(config)
