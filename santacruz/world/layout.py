"""
City layout descriptors and the default Santa Cruz layout.

Everything hand-authored about the city lives here as plain frozen data:
arterial cross-sections, landmark zones, block and labyrinth regions, named
secondary streets, lighting hubs and overlays. The generation passes only
interpret these records, so a different city is a different CityLayout.

Coordinates are inclusive tile rectangles (x1, y1, x2, y2) unless a field
says otherwise.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple
from santacruz.world.tiles import TileType, LightCategory

S = TileType.STREET
W = TileType.SIDEWALK
A = TileType.ALLEY
PZ = TileType.PLAZA
G = TileType.GRASS
TR = TileType.TREE
BN = TileType.BENCH
DT = TileType.DOMINO_TABLE


# ============================================================================
# DESCRIPTORS
# ============================================================================

@dataclass(frozen=True)
class Rect:
    x1: int
    y1: int
    x2: int
    y2: int

    @property
    def width(self) -> int:
        return self.x2 - self.x1 + 1

    @property
    def height(self) -> int:
        return self.y2 - self.y1 + 1

    def contains(self, x: int, y: int) -> bool:
        return self.x1 <= x <= self.x2 and self.y1 <= y <= self.y2

    def on_border(self, x: int, y: int) -> bool:
        return self.contains(x, y) and (x in (self.x1, self.x2) or y in (self.y1, self.y2))

    def border(self):
        """Yield every border cell once, clockwise from the top-left corner."""
        for x in range(self.x1, self.x2 + 1):
            yield x, self.y1
        for y in range(self.y1 + 1, self.y2 + 1):
            yield self.x2, y
        if self.y2 > self.y1:
            for x in range(self.x2 - 1, self.x1 - 1, -1):
                yield x, self.y2
        if self.x2 > self.x1:
            for y in range(self.y2 - 1, self.y1, -1):
                yield self.x1, y


@dataclass(frozen=True)
class TileFill:
    rect: Rect
    tile: TileType


@dataclass(frozen=True)
class Fixture:
    """Single-cell point write (decorations, doors, booths)."""
    x: int
    y: int
    tile: TileType


@dataclass(frozen=True)
class Lane:
    """One line of an arterial cross-section, `offset` cells from the road axis."""
    offset: int
    tile: TileType
    tree_every: int = 0  # plant a TREE where the running coordinate % tree_every == 0


@dataclass(frozen=True)
class ArterialRoad:
    """
    A straight road stamped with a fixed cross-section.

    axis 'h' runs along x at row `position`; axis 'v' runs along y at column
    `position`. start is inclusive, end exclusive; None means the grid edge.
    gaps are inclusive running-coordinate ranges left untouched.
    """
    name: str
    axis: str
    position: int
    lanes: Tuple[Lane, ...]
    start: Optional[int] = None
    end: Optional[int] = None
    gaps: Tuple[Tuple[int, int], ...] = ()


@dataclass(frozen=True)
class LandmarkZone:
    """
    A named rectangular landmark.

    Placement order: fill, sub_fills, random passages (if any), enclosure
    (when gaps is non-empty), fixtures.
    """
    name: str
    rect: Rect
    fill: TileType
    gaps: Tuple[Tuple[int, int], ...] = ()
    sub_fills: Tuple[TileFill, ...] = ()
    fixtures: Tuple[Fixture, ...] = ()
    random_passages: bool = False
    passage_inset: int = 2

    @property
    def enclosed(self) -> bool:
        return bool(self.gaps)


@dataclass(frozen=True)
class BlockSpec:
    """An ordered city block filled on a fixed stride."""
    rect: Rect
    density: float = 0.85
    tall_chance: float = 0.3


@dataclass(frozen=True)
class SecondaryStreet:
    """Named street carved as a series of unconditional rectangle fills."""
    name: str
    segments: Tuple[TileFill, ...]


@dataclass(frozen=True)
class SnapRule:
    """
    Pulls a residential connector onto a main artery.

    side 'end':   if start < bound and end >= reach, end becomes target.
    side 'start': if start > bound and start <= reach, start becomes target.
    """
    axis: str
    side: str
    bound: int
    reach: int
    target: int


@dataclass(frozen=True)
class LightRing:
    """Fixed offsets around a landmark centre."""
    name: str
    cx: int
    cy: int
    offsets: Tuple[Tuple[int, int], ...]
    category: LightCategory = LightCategory.PLAZA

    def points(self):
        return [(self.cx + dx, self.cy + dy) for dx, dy in self.offsets]


@dataclass(frozen=True)
class LightGrid:
    """Regular cols x rows sub-grid of lights starting at (x, y)."""
    name: str
    x: int
    y: int
    cols: int
    rows: int
    step_x: int
    step_y: int
    category: LightCategory = LightCategory.PLAZA

    def points(self):
        return [(self.x + ox * self.step_x, self.y + oy * self.step_y)
                for ox in range(self.cols) for oy in range(self.rows)]


@dataclass(frozen=True)
class MapLabel:
    x: int
    y: int
    name: str
    kind: str  # 'neighborhood' | 'shopping'


@dataclass(frozen=True)
class StreetSign:
    x: int
    y: int
    name: str
    direction: str  # 'h' | 'v'


@dataclass(frozen=True)
class PointOfInterest:
    x: int
    y: int
    kind: str
    name: str


@dataclass(frozen=True)
class CityLayout:
    """Complete hand-authored description of a city, consumed by the generator."""
    name: str
    arterials: Tuple[ArterialRoad, ...] = ()
    landmarks: Tuple[LandmarkZone, ...] = ()
    blocks: Tuple[BlockSpec, ...] = ()
    labyrinths: Tuple[Rect, ...] = ()
    secondary_streets: Tuple[SecondaryStreet, ...] = ()
    subdivision_avenues: Tuple[ArterialRoad, ...] = ()
    residential_zones: Tuple[Rect, ...] = ()
    connector_snaps: Tuple[SnapRule, ...] = ()
    connector_max_length: int = 35
    connector_snap_chance: float = 0.9
    protected_arterials: Tuple[ArterialRoad, ...] = ()
    protected_fills: Tuple[TileFill, ...] = ()
    veins: Tuple[TileFill, ...] = ()
    finishing_fills: Tuple[TileFill, ...] = ()
    finishing_fixtures: Tuple[Fixture, ...] = ()
    hubs: Tuple[Tuple[int, int], ...] = ()
    light_overlays: Tuple = ()
    spawn: Tuple[int, int] = (0, 0)
    labels: Tuple[MapLabel, ...] = ()
    street_signs: Tuple[StreetSign, ...] = ()
    crosswalks: Tuple[StreetSign, ...] = ()
    points_of_interest: Tuple[PointOfInterest, ...] = field(default=())

    def landmark(self, name: str) -> LandmarkZone:
        for zone in self.landmarks:
            if zone.name == name:
                return zone
        raise KeyError(name)

    @property
    def enclosed_rects(self) -> Tuple[Rect, ...]:
        return tuple(zone.rect for zone in self.landmarks if zone.enclosed)


EMPTY_LAYOUT = CityLayout(name='empty')


# ============================================================================
# SANTA CRUZ
# ============================================================================

def _rect_fill(x1, y1, x2, y2, tile) -> TileFill:
    return TileFill(Rect(x1, y1, x2, y2), tile)


def _simple(name, axis, position, start=None, end=None, gaps=()):
    """Sidewalk - street - sidewalk."""
    return ArterialRoad(name, axis, position, (Lane(-1, W), Lane(0, S), Lane(1, W)),
                        start=start, end=end, gaps=gaps)


def _bare(name, axis, position, start=None, end=None, gaps=()):
    """Favela-style street without sidewalks."""
    return ArterialRoad(name, axis, position, (Lane(0, S),), start=start, end=end, gaps=gaps)


FELIPE_CARDOSO = ArterialRoad(
    'Rua Felipe Cardoso', 'h', 150,
    (Lane(-2, W), Lane(-1, S), Lane(0, S, tree_every=10), Lane(1, S), Lane(2, W)),
)
BARAO_DE_LAGUNA = _simple('Rua Barão de Laguna', 'v', 100)
LUCINDO_PASSOS = ArterialRoad(
    'Rua Lucindo Passos', 'h', 200,
    (Lane(-1, W), Lane(0, S), Lane(1, S), Lane(2, W)),
)
GENERAL_OLIMPIO = _simple('Rua General Olímpio', 'h', 80)
FERNANDA = _simple('Rua Fernanda', 'v', 40)
SEVERIANO = _simple('Rua Severiano das Chagas', 'v', 220)

_ARTERIALS = (
    FELIPE_CARDOSO,
    BARAO_DE_LAGUNA,
    LUCINDO_PASSOS,
    GENERAL_OLIMPIO,
    FERNANDA,
    SEVERIANO,
    _bare('Rua Lemos', 'v', 160, start=151),
    _bare('Rua Doze de Fevereiro', 'h', 30),
    _bare('Rua Senador Camará', 'h', 115, start=45, end=215, gaps=((117, 143),)),
    _bare('Rua Lopes de Moura', 'v', 110, start=80, end=150),
    _bare('Rua General Canabarro', 'v', 190, start=80, end=150),
)


def _marques_de_herval_fixtures():
    fixtures = []
    for y in range(162, 189, 4):
        for x in range(150, 167, 4):
            if (x, y) != (158, 175):
                fixtures.append(Fixture(x, y, TR))
    fixtures += [
        Fixture(156, 175, BN), Fixture(160, 175, BN),
        Fixture(158, 173, BN), Fixture(158, 177, BN),
        Fixture(158, 175, TileType.FOUNTAIN),
    ]
    for x, y in MARQUES_DE_HERVAL_TABLES:
        fixtures.append(Fixture(x, y, DT))
    return tuple(fixtures)


MARCO_IMPERIAL_TABLES = ((229, 135), (229, 141), (241, 135), (241, 141), (235, 132))
MARQUES_DE_HERVAL_TABLES = (
    (152, 165), (152, 175), (152, 185),
    (164, 165), (164, 175), (164, 185),
    (158, 165), (158, 185),
)

SHOPPING = LandmarkZone(
    'Santa Cruz Shopping', Rect(117, 112, 143, 143), TileType.SHOPPING,
    sub_fills=(
        _rect_fill(127, 144, 133, 146, PZ),  # forecourt facing Felipe Cardoso
        _rect_fill(110, 120, 113, 120, A),  # approach to the back door
    ),
    fixtures=(
        Fixture(130, 143, TileType.DECORATIVE_ENTRANCE),
        Fixture(114, 120, TileType.ENTRANCE),  # clandestine casino
    ),
)

STATION = LandmarkZone(
    'Estação Santa Cruz', Rect(225, 155, 260, 175), TileType.BUILDING_TALL,
    sub_fills=(_rect_fill(225, 176, 260, 178, TileType.FENCE),),
    fixtures=(
        Fixture(226, 176, W), Fixture(226, 177, W), Fixture(226, 178, W),
        Fixture(226, 175, TileType.ENTRANCE),  # station casino
        Fixture(242, 155, TileType.DECORATIVE_ENTRANCE),
    ),
    random_passages=True,
)

MARCO_IMPERIAL = LandmarkZone(
    'Marco Imperial Onze', Rect(225, 130, 245, 146), PZ,
    gaps=((225, 138), (235, 146)),
    fixtures=(
        Fixture(226, 131, TR), Fixture(244, 131, TR),
        Fixture(226, 145, TR), Fixture(244, 145, TR),
        Fixture(232, 138, BN), Fixture(238, 138, BN),
        Fixture(235, 134, BN), Fixture(235, 142, BN),
        Fixture(235, 138, TileType.MONUMENT),
    ) + tuple(Fixture(x, y, DT) for x, y in MARCO_IMPERIAL_TABLES),
)

CHURCH = LandmarkZone(
    'Igreja N.S. da Conceição', Rect(125, 86, 135, 98), TileType.CHURCH,
    sub_fills=(_rect_fill(125, 81, 135, 85, PZ),),
)

MARQUES_DE_HERVAL = LandmarkZone(
    'Praça Marques de Herval', Rect(148, 160, 168, 190), PZ,
    gaps=((158, 160), (158, 190), (148, 175), (168, 175)),
    sub_fills=(_rect_fill(156, 173, 160, 177, G),),
    fixtures=_marques_de_herval_fixtures(),
)

_RESIDENTIAL_ZONES = (
    Rect(10, 10, 35, 290),    # far west favela
    Rect(45, 10, 95, 145),    # west residential
    Rect(165, 10, 215, 145),  # east residential
    Rect(225, 10, 290, 290),  # far east favela
    Rect(45, 205, 215, 290),  # south loop
)

_CONNECTOR_SNAPS = (
    SnapRule('h', 'end', 100, 95, 100),     # Barão de Laguna
    SnapRule('h', 'start', 215, 225, 220),  # Severiano das Chagas
    SnapRule('h', 'end', 45, 35, 40),       # Rua Fernanda
    SnapRule('v', 'end', 155, 145, 150),    # Felipe Cardoso
    SnapRule('v', 'end', 245, 235, 240),    # Avenida Antares
    SnapRule('v', 'end', 85, 75, 80),       # General Olímpio
)

_CHURCH_RING = LightRing(
    'Igreja N.S. da Conceição', 130, 88,
    ((0, -9), (7, -6), (9, 0), (7, 6), (0, 9), (-7, 6), (-9, 0), (-7, -6)),
)

SANTA_CRUZ = CityLayout(
    name='Santa Cruz',
    arterials=_ARTERIALS,
    landmarks=(SHOPPING, STATION, MARCO_IMPERIAL, CHURCH, MARQUES_DE_HERVAL),
    blocks=(
        BlockSpec(Rect(45, 35, 95, 75), 0.95, 0.6),    # commercial, Barão de Laguna
        BlockSpec(Rect(45, 85, 95, 145), 0.95, 0.7),
        BlockSpec(Rect(165, 35, 215, 75), 0.9, 0.4),   # central residential
        BlockSpec(Rect(165, 85, 215, 145), 0.9, 0.5),
    ),
    labyrinths=(
        Rect(10, 10, 35, 290),
        Rect(225, 10, 290, 290),
        Rect(45, 205, 215, 280),
    ),
    secondary_streets=(
        SecondaryStreet('Rua do Império', (
            _rect_fill(180, 59, 220, 61, S),
            _rect_fill(179, 60, 181, 80, S),
        )),
        SecondaryStreet('Rua Álvaro Alberto', (_rect_fill(160, 109, 220, 111, S),)),
        SecondaryStreet('Beco do Matadouro', (
            _rect_fill(60, 220, 120, 222, S),
            _rect_fill(80, 205, 82, 260, S),
            _rect_fill(80, 260, 150, 262, S),
        )),
        SecondaryStreet('Travessa das Flores', (
            _rect_fill(165, 45, 215, 45, S),
            _rect_fill(165, 130, 215, 130, S),
        )),
    ),
    subdivision_avenues=(
        _simple('Rua São Benedito', 'v', 70, start=35, end=280),
        ArterialRoad('Avenida Antares', 'h', 240,
                     (Lane(-2, W), Lane(-1, S), Lane(0, S), Lane(1, W)), start=10, end=290),
    ),
    residential_zones=_RESIDENTIAL_ZONES,
    connector_snaps=_CONNECTOR_SNAPS,
    protected_arterials=(
        _bare('Rua Barão de Laguna', 'v', 100),
        _bare('Rua Fernanda', 'v', 40),
        _bare('Rua Severiano das Chagas', 'v', 220),
        FELIPE_CARDOSO,
    ),
    protected_fills=(TileFill(SHOPPING.rect, TileType.SHOPPING),),
    veins=(
        _rect_fill(10, 99, 45, 101, A), _rect_fill(10, 179, 45, 181, A),
        _rect_fill(215, 60, 230, 60, A), _rect_fill(215, 109, 230, 111, A),
        _rect_fill(215, 219, 240, 221, A),
        _rect_fill(40, 240, 220, 241, S),
        _rect_fill(225, 176, 227, 178, W),  # path through the station fence
        _rect_fill(225, 173, 227, 175, A),  # alcove in front of the casino door
    ),
    finishing_fills=(
        _rect_fill(235, 153, 250, 161, PZ),  # station entrance forecourt
    ),
    finishing_fixtures=(
        Fixture(130, 143, TileType.DECORATIVE_ENTRANCE),
        Fixture(242, 155, TileType.INFORMATION_BOOTH),
        Fixture(226, 175, TileType.ENTRANCE),
    ),
    hubs=((130, 125), (242, 165)),
    light_overlays=(
        _CHURCH_RING,
        LightGrid('Estação Santa Cruz', 232, 161, 4, 2, 9, 10),
        LightGrid('Marco Imperial Onze', 228, 132, 2, 2, 10, 10),
        LightGrid('Praça Marques de Herval', 151, 165, 2, 3, 10, 10),
    ),
    spawn=(130, 152),
    labels=(
        MapLabel(130, 125, 'SANTA CRUZ\nSHOPPING', 'shopping'),
        MapLabel(242, 165, 'ESTAÇÃO\nSANTA CRUZ', 'shopping'),
        MapLabel(235, 135, 'MARCO IMPERIAL\nONZE', 'neighborhood'),
        MapLabel(158, 170, 'PRAÇA MARQUES\nDE HERVAL', 'neighborhood'),
        MapLabel(130, 83, 'IGREJA N.S.\nDA CONCEIÇÃO', 'neighborhood'),
    ),
    street_signs=(
        StreetSign(130, 155, 'R. Felipe Cardoso', 'h'),
        StreetSign(100, 130, 'R. Barão de Laguna', 'v'),
        StreetSign(130, 205, 'R. Lucindo Passos', 'h'),
        StreetSign(112, 120, '???', 'h'),
        StreetSign(226, 180, '???', 'v'),
        StreetSign(200, 62, 'R. do Império', 'h'),
        StreetSign(190, 112, 'R. Álvaro Alberto', 'h'),
        StreetSign(90, 224, 'Beco do Matadouro', 'h'),
        StreetSign(74, 100, 'R. São Benedito', 'v'),
        StreetSign(150, 236, 'Av. Antares', 'h'),
        StreetSign(170, 48, 'Tv. das Flores', 'h'),
        StreetSign(112, 100, 'R. Lopes de Moura', 'v'),
        StreetSign(188, 100, 'R. Gen. Canabarro', 'v'),
        StreetSign(165, 113, 'R. Sen. Camará', 'h'),
    ),
    crosswalks=(
        StreetSign(130, 150, '', 'v'),
        StreetSign(100, 150, '', 'v'),
    ),
    points_of_interest=(
        PointOfInterest(128, 147, 'pedinte', 'Zumbi do Shopping'),
        PointOfInterest(114, 121, 'npc_casino_promoter', 'Leão do Norte'),
    ) + tuple(
        PointOfInterest(x, y, 'domino_table', name)
        for (x, y), name in zip(MARCO_IMPERIAL_TABLES,
                                ('Geraldo', 'Seu Jorge', 'Manoel', 'Tião', 'Vicente'))
    ) + tuple(
        PointOfInterest(x, y, 'domino_table', name)
        for (x, y), name in zip(MARQUES_DE_HERVAL_TABLES,
                                ('Ademir', 'Valdir', 'Nelsinho', 'Jair', 'Osmar',
                                 'Delson', 'Zezé', 'Carlinhos'))
    ) + (
        PointOfInterest(130, 75, 'purrinha', 'do Norte'),
        PointOfInterest(125, 78, 'purrinha', 'da Praça'),
        PointOfInterest(135, 78, 'purrinha', 'Antigo'),
        PointOfInterest(60, 235, 'dice', 'do Beco'),
        PointOfInterest(62, 245, 'dice', 'da Sorte'),
        PointOfInterest(55, 240, 'dice', 'Viciado'),
        PointOfInterest(235, 160, 'ronda', 'da Estação'),
        PointOfInterest(250, 165, 'ronda', 'do Trem'),
        PointOfInterest(240, 170, 'ronda', 'Estratega'),
        PointOfInterest(230, 162, 'pedinte', 'Cego da Estação'),
        PointOfInterest(245, 158, 'pedinte', 'Velho do Trem'),
        PointOfInterest(255, 168, 'pedinte', 'Manco'),
    ),
)
