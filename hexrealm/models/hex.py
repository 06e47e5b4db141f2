"""Map primitives: coordinates, terrain, settlements, units and hexes."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class TerrainType(str, Enum):
    """Terrain tag carried by every hex."""

    PLAINS = "plains"
    MOUNTAINS = "mountains"
    FOREST = "forest"
    DESERT = "desert"
    COAST = "coast"
    SEA = "sea"
    RIVER = "river"


# Fixed iteration order for terrain sampling (determinism depends on it)
ALL_TERRAINS: tuple[TerrainType, ...] = tuple(TerrainType)


class SettlementType(str, Enum):
    CAPITAL = "capital"
    CITY = "city"
    TOWN = "town"
    OUTPOST = "outpost"


@dataclass(frozen=True)
class HexCoord:
    """Cell position in an odd-row offset hex grid."""

    col: int
    row: int


@dataclass(frozen=True)
class ResourceDeposit:
    resource_id: str
    amount: int


@dataclass(frozen=True)
class Settlement:
    """A settlement occupying exactly one hex.

    Settlements are placed from the theme's anchors during map generation.
    Ids are unique within a game.
    """

    id: str
    name: str
    type: SettlementType
    population: int
    stability: int
    buildings: list[str] = field(default_factory=list)  # Building definition ids
    is_capital: bool = False

    def __post_init__(self):
        """Validate settlement data after initialization."""
        if not self.id:
            raise ValueError("Settlement id cannot be empty")
        if self.population < 0:
            raise ValueError(f"Invalid population: {self.population} (must be >= 0)")


@dataclass(frozen=True)
class Unit:
    """A military unit belonging to one civilization.

    A unit's location is the hex whose ``units`` list holds it.
    """

    id: str
    definition_id: str  # UnitDefinition id from the theme
    civilization_id: str
    strength: int
    morale: int
    moves_remaining: int
    is_garrisoned: bool = False

    def __post_init__(self):
        """Validate unit data after initialization."""
        if self.moves_remaining < 0:
            raise ValueError(
                f"Invalid moves_remaining: {self.moves_remaining} (must be >= 0)"
            )


@dataclass(frozen=True)
class Hex:
    """One cell of the map grid."""

    coord: HexCoord
    terrain: TerrainType
    settlement: Optional[Settlement] = None
    controlled_by: Optional[str] = None  # Civilization id
    units: list[Unit] = field(default_factory=list)
    resources: list[ResourceDeposit] = field(default_factory=list)
    explored_by: list[str] = field(default_factory=list)  # Civilization ids
