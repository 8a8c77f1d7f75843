"""
Tests for the static light scan.
"""

from itertools import combinations

from santacruz.world import EMPTY_LAYOUT, TileGrid, TileType
from santacruz.world.layout import CityLayout, LightGrid, LightRing
from santacruz.world.lighting import (
    CORE_RADIUS,
    MIDDLE_RADIUS,
    LightSource,
    count_by_category,
    derive_lights,
    lamppost_positions,
)
from santacruz.world.tiles import LightCategory, PHYSICAL_LIGHTS
from santacruz.world.utils import tile_noise


def _lights(grid: TileGrid, layout: CityLayout = EMPTY_LAYOUT):
    return derive_lights(grid.freeze(), layout)


class TestScanRules:
    def test_grass_emits_nothing(self) -> None:
        assert _lights(TileGrid(30, 30)) == ()

    def test_peripheral_streetglow_stride(self) -> None:
        grid = TileGrid(25, 1, TileType.STREET)
        lights = _lights(grid)
        assert lights == tuple(LightSource(x, 0, LightCategory.STREETGLOW) for x in (0, 10, 20))

    def test_core_streetglow_is_denser(self) -> None:
        grid = TileGrid(25, 1, TileType.STREET)
        lights = _lights(grid, CityLayout(name='hub', hubs=((12, 0),)))
        assert [light.x for light in lights] == [0, 5, 10, 15, 20]

    def test_entrances_always_glow(self) -> None:
        grid = TileGrid(5, 5)
        grid.set(1, 1, TileType.ENTRANCE)
        grid.set(2, 1, TileType.ENTRANCE)
        assert _lights(grid) == (
            LightSource(1, 1, LightCategory.ALLEY),
            LightSource(2, 1, LightCategory.ALLEY),
        )

    def test_shopping_stride(self) -> None:
        grid = TileGrid(9, 9, TileType.SHOPPING)
        lights = _lights(grid)
        assert {(l.x, l.y) for l in lights} == {(x, y) for x in (0, 4, 8) for y in (0, 4, 8)}
        assert {l.category for l in lights} == {LightCategory.SHOPPING}

    def test_plaza_stride(self) -> None:
        grid = TileGrid(20, 20, TileType.PLAZA)
        lights = _lights(grid)
        assert {(l.x, l.y) for l in lights} == {(x, y) for x in (0, 9, 18) for y in (0, 9, 18)}

    def test_alley_diagonal_stride(self) -> None:
        grid = TileGrid(30, 1, TileType.ALLEY)
        assert [l.x for l in _lights(grid)] == [0, 12, 24]

    def test_windows_sit_on_the_stride(self) -> None:
        grid = TileGrid(40, 40, TileType.BUILDING_LOW)
        lights = _lights(grid)
        assert lights
        assert len(lights) < 100
        assert all(l.x % 4 == 0 and l.y % 4 == 0 for l in lights)
        assert {l.category for l in lights} == {LightCategory.RESIDENTIAL}

    def test_sidewalk_needs_a_road_neighbour(self) -> None:
        grid = TileGrid(20, 20, TileType.SIDEWALK)
        assert _lights(grid, CityLayout(name='hub', hubs=((10, 10),))) == ()

    def test_core_sidewalk_lamps(self) -> None:
        grid = TileGrid(30, 9)
        grid.fill(0, 4, 29, 4, TileType.STREET)
        grid.fill(0, 3, 29, 3, TileType.SIDEWALK)
        grid.fill(0, 5, 29, 5, TileType.SIDEWALK)
        lights = _lights(grid, CityLayout(name='hub', hubs=((15, 4),)))
        lamps = [l for l in lights if l.category == LightCategory.STREET]
        assert lamps
        assert all(l.y in (3, 5) for l in lamps)

    def test_physical_lamps_keep_their_distance(self) -> None:
        grid = TileGrid(60, 60)
        for y in range(0, 60, 6):
            grid.fill(0, y, 59, y, TileType.STREET)
            grid.fill(0, y + 1, 59, y + 1, TileType.SIDEWALK)
        for x in range(0, 60, 6):
            grid.fill(x, 0, x, 59, TileType.ALLEY)
        lights = _lights(grid, CityLayout(name='hub', hubs=((30, 30),)))
        posts = [l for l in lights if l.category in PHYSICAL_LIGHTS]
        assert len(posts) > 10
        for a, b in combinations(posts, 2):
            assert max(abs(a.x - b.x), abs(a.y - b.y)) > 2


class TestDistanceBands:
    def test_corner_lamps_per_band(self) -> None:
        # isolated corners: sidewalk with a street to the east and to the south
        grid = TileGrid(200, 200)
        corners = [(x, y) for x in range(2, 190, 10) for y in range(2, 190, 10)]
        for x, y in corners:
            grid.set(x, y, TileType.SIDEWALK)
            grid.set(x + 1, y, TileType.STREET)
            grid.set(x, y + 1, TileType.STREET)
        lights = _lights(grid, CityLayout(name='hub', hubs=((0, 0),)))
        lit = {(l.x, l.y) for l in lights if l.category == LightCategory.STREET}

        def expected(x, y):
            dist = x + y
            if dist < CORE_RADIUS:
                return True
            if dist < MIDDLE_RADIUS:
                return tile_noise(x, y) > 0.1
            return tile_noise(x, y) > 0.2

        assert lit == {c for c in corners if expected(*c)}
        assert any(not expected(*c) for c in corners)

    def test_middle_band_straight_edges(self) -> None:
        grid = TileGrid(38, 3)
        grid.fill(0, 1, 37, 1, TileType.SIDEWALK)
        grid.fill(0, 2, 37, 2, TileType.STREET)
        # hub west of the map: every tile sits 50..88 away
        lights = _lights(grid, CityLayout(name='hub', hubs=((-50, 1),)))

        lamps = {l.x for l in lights if l.category == LightCategory.STREET}
        assert lamps == {x for x in range(38) if x % 6 == 0 and tile_noise(x, 1) > 0.3}

        glow = [l.x for l in lights if l.category == LightCategory.STREETGLOW]
        assert glow == [x for x in range(38) if (x + 2) % 7 == 0]

    def test_peripheral_straight_edges_are_sparse(self) -> None:
        width = 3000
        grid = TileGrid(width, 2)
        grid.fill(0, 0, width - 1, 0, TileType.SIDEWALK)
        grid.fill(0, 1, width - 1, 1, TileType.STREET)
        lamps = [l.x for l in _lights(grid) if l.category == LightCategory.STREET]

        candidates = [x for x in range(width) if tile_noise(x, 0) > 0.9]
        assert set(lamps) <= set(candidates)
        # a skipped candidate lost to a neighbouring lamp
        for x in set(candidates) - set(lamps):
            assert any(abs(x - lamp) <= 3 for lamp in lamps)
        assert 0.03 < len(lamps) / width < 0.15


class TestOverlays:
    def test_overlays_follow_the_scan(self) -> None:
        grid = TileGrid(10, 10, TileType.SHOPPING)
        layout = CityLayout(
            name='overlays',
            light_overlays=(
                LightRing('ring', 5, 5, ((0, -2), (2, 0))),
                LightGrid('grid', 1, 1, 2, 2, 3, 4),
            ),
        )
        lights = _lights(grid, layout)
        overlay = lights[-6:]
        assert [(l.x, l.y) for l in overlay] == [(5, 3), (7, 5), (1, 1), (1, 5), (4, 1), (4, 5)]
        assert all(l.category == LightCategory.PLAZA for l in overlay)

    def test_overlays_are_not_clipped(self) -> None:
        layout = CityLayout(name='edge', light_overlays=(LightRing('ring', 0, 0, ((-3, 0),)),))
        assert _lights(TileGrid(4, 4), layout) == (LightSource(-3, 0, LightCategory.PLAZA),)


class TestCatalogHelpers:
    def test_lamppost_positions_skip_glow(self) -> None:
        lights = (
            LightSource(1, 1, LightCategory.STREETGLOW),
            LightSource(2, 2, LightCategory.STREET),
            LightSource(3, 3, LightCategory.RESIDENTIAL),
            LightSource(4, 4, LightCategory.PLAZA),
            LightSource(5, 5, LightCategory.ALLEY),
        )
        assert lamppost_positions(lights) == [(2, 2), (4, 4), (5, 5)]

    def test_count_by_category_lists_every_category(self) -> None:
        counts = count_by_category((LightSource(0, 0, LightCategory.SHOPPING),))
        assert set(counts) == {c.value for c in LightCategory}
        assert counts['shopping'] == 1
        assert counts['street'] == 0
