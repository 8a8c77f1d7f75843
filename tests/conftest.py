"""Shared fixtures: the seeded reference city is generated once per session."""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pytest

from santacruz.config import DEFAULT_SEED
from santacruz.world import TileGrid, TileType, WorldConfig, build_world


@pytest.fixture(scope="session")
def world():
    return build_world(WorldConfig(seed=DEFAULT_SEED))


@pytest.fixture
def grid() -> TileGrid:
    return TileGrid(40, 30, TileType.GRASS)
