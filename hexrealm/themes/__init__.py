"""Theme packages: validated ruleset definitions."""

from .loader import load_theme, load_theme_file, load_theme_from_json
from .schema import (
    BoundsShape,
    BuildingDefinition,
    CivilizationDefinition,
    DefeatCondition,
    EventDefinition,
    ExplicitShape,
    GridCoord,
    MapConfig,
    MapZone,
    SettlementAnchor,
    TechDefinition,
    ThemePackage,
    UnitDefinition,
    VictoryCondition,
)

__all__ = [
    "load_theme",
    "load_theme_file",
    "load_theme_from_json",
    "BoundsShape",
    "BuildingDefinition",
    "CivilizationDefinition",
    "DefeatCondition",
    "EventDefinition",
    "ExplicitShape",
    "GridCoord",
    "MapConfig",
    "MapZone",
    "SettlementAnchor",
    "TechDefinition",
    "ThemePackage",
    "UnitDefinition",
    "VictoryCondition",
]
