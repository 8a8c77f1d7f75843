"""
Tests for arterial painting, landmark placement and the street overlay.
"""

import random

import pytest

from santacruz.world import ArterialRoad, Lane, LandmarkZone, Rect, TileGrid, TileType
from santacruz.world.landmarks import carve_passages, enclose, place_landmark
from santacruz.world.layout import MARQUES_DE_HERVAL, STATION, SnapRule
from santacruz.world.roads import (
    _snap,
    carve_residential_connectors,
    paint_arterial,
)

FIVE_LANE = (
    Lane(-2, TileType.SIDEWALK), Lane(-1, TileType.STREET),
    Lane(0, TileType.STREET, tree_every=10), Lane(1, TileType.STREET),
    Lane(2, TileType.SIDEWALK),
)

# =============================================================================
# Arterials
# =============================================================================


class TestPaintArterial:
    def test_five_lane_cross_section(self) -> None:
        grid = TileGrid(30, 20)
        painted = paint_arterial(grid, ArterialRoad('avenue', 'h', 10, FIVE_LANE))
        assert painted == 30
        for x in range(30):
            assert grid.get(x, 8) == TileType.SIDEWALK
            assert grid.get(x, 9) == TileType.STREET
            assert grid.get(x, 11) == TileType.STREET
            assert grid.get(x, 12) == TileType.SIDEWALK
            expected = TileType.TREE if x % 10 == 0 else TileType.STREET
            assert grid.get(x, 10) == expected
        assert grid.get(0, 7) == TileType.GRASS
        assert grid.get(0, 13) == TileType.GRASS

    def test_gaps_are_left_untouched(self) -> None:
        grid = TileGrid(30, 5)
        road = ArterialRoad('gapped', 'h', 2, (Lane(0, TileType.STREET),), gaps=((5, 7),))
        assert paint_arterial(grid, road) == 27
        assert [grid.get(x, 2) for x in range(5, 8)] == [TileType.GRASS] * 3
        assert grid.get(4, 2) == TileType.STREET
        assert grid.get(8, 2) == TileType.STREET

    def test_vertical_span_start_inclusive_end_exclusive(self) -> None:
        grid = TileGrid(10, 20)
        road = ArterialRoad('lane', 'v', 3, (Lane(0, TileType.STREET),), start=5, end=10)
        paint_arterial(grid, road)
        assert grid.count(TileType.STREET) == 5
        assert grid.get(3, 5) == TileType.STREET
        assert grid.get(3, 9) == TileType.STREET
        assert grid.get(3, 10) == TileType.GRASS

    def test_lanes_off_the_map_are_clipped(self) -> None:
        grid = TileGrid(10, 10)
        paint_arterial(grid, ArterialRoad('edge', 'h', 0, FIVE_LANE))
        assert grid.get(0, 0) == TileType.TREE
        assert grid.get(1, 2) == TileType.SIDEWALK


# =============================================================================
# Landmarks
# =============================================================================


class TestEnclosure:
    def test_marques_de_herval_gaps(self) -> None:
        grid = TileGrid(200, 200)
        place_landmark(grid, MARQUES_DE_HERVAL)
        rect = MARQUES_DE_HERVAL.rect
        gaps = set(MARQUES_DE_HERVAL.gaps)
        walkable = []
        for x, y in rect.border():
            if (x, y) in gaps:
                assert grid.get(x, y) == TileType.PLAZA
                walkable.append((x, y))
            else:
                assert grid.get(x, y) == TileType.WALL
        assert sorted(walkable) == sorted(gaps)

    def test_enclose_returns_wall_count(self, grid) -> None:
        walls = enclose(grid, 0, 0, 4, 4, gaps=[(2, 0)])
        assert walls == 16 - 1
        assert grid.get(2, 0) == TileType.GRASS
        assert grid.get(2, 2) == TileType.GRASS

    def test_enclose_clips_at_map_edge(self, grid) -> None:
        walls = enclose(grid, -1, -1, 2, 2)
        assert walls == 5
        assert grid.count(TileType.WALL) == 5

    def test_fixtures_land_after_enclosure(self) -> None:
        grid = TileGrid(200, 200)
        place_landmark(grid, MARQUES_DE_HERVAL)
        assert grid.get(158, 175) == TileType.FOUNTAIN
        assert grid.get(152, 165) == TileType.DOMINO_TABLE
        assert grid.get(157, 174) == TileType.GRASS

    def test_unenclosed_zone_has_no_walls(self, grid) -> None:
        place_landmark(grid, LandmarkZone('square', Rect(5, 5, 10, 10), TileType.PLAZA))
        assert grid.count(TileType.WALL) == 0
        assert grid.count(TileType.PLAZA) == 36


class TestPassages:
    def test_passages_need_an_rng(self) -> None:
        grid = TileGrid(300, 300)
        with pytest.raises(ValueError):
            place_landmark(grid, STATION)

    def test_passages_cross_the_whole_rect(self) -> None:
        grid = TileGrid(300, 300)
        place_landmark(grid, STATION, random.Random(3))
        rect = STATION.rect
        # fixtures may sit on at most one cell of a passage
        columns = [x for x in range(rect.x1, rect.x2 + 1)
                   if grid.count(TileType.ALLEY, (x, rect.y1, x, rect.y2)) >= rect.height - 1]
        rows = [y for y in range(rect.y1, rect.y2 + 1)
                if grid.count(TileType.ALLEY, (rect.x1, y, rect.x2, y)) >= rect.width - 1]
        assert len(columns) == 1
        assert len(rows) == 1

    def test_passage_coordinates_respect_inset(self) -> None:
        rng = random.Random(11)
        rect = Rect(0, 0, 20, 10)
        for _ in range(50):
            px, py = carve_passages(TileGrid(25, 15), rng, rect, inset=2)
            assert 2 <= px <= 18
            assert 2 <= py <= 8


# =============================================================================
# Residential connectors
# =============================================================================


class TestConnectors:
    def test_snap_end_onto_artery(self) -> None:
        rules = (SnapRule('h', 'end', 100, 95, 100),)
        assert _snap(80, 96, 'h', rules) == (80, 100)
        assert _snap(80, 90, 'h', rules) == (80, 90)
        assert _snap(80, 96, 'v', rules) == (80, 96)

    def test_snap_start_onto_artery(self) -> None:
        rules = (SnapRule('h', 'start', 215, 225, 220),)
        assert _snap(222, 250, 'h', rules) == (220, 250)
        assert _snap(230, 250, 'h', rules) == (230, 250)

    def test_protected_rects_are_untouched(self) -> None:
        grid = TileGrid(60, 60)
        protected = Rect(20, 20, 40, 40)
        written = carve_residential_connectors(
            grid, random.Random(5), [Rect(0, 0, 59, 59)], (), count=200,
            protected=(protected,),
        )
        assert written > 0
        assert grid.count(TileType.STREET, (20, 20, 40, 40)) == 0
        assert grid.count(TileType.STREET) > 0

    def test_no_zones_writes_nothing(self) -> None:
        grid = TileGrid(10, 10)
        assert carve_residential_connectors(grid, random.Random(0), (), (), count=10) == 0
        assert grid.count(TileType.GRASS) == 100
