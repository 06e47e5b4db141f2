"""Pydantic models describing a theme package (one ruleset / setting).

A theme is static data shipped as JSON with camelCase keys. Every model
accepts both the camelCase aliases and the snake_case field names.
Tagged unions (zone shapes, tech effects, event triggers and effects,
victory and defeat conditions) are discriminated on ``kind``.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..models.civilization import RelationshipState
from ..models.hex import SettlementType


class ThemeModel(BaseModel):
    """Base for theme models: camelCase aliases, frozen instances."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class GridCoord(ThemeModel):
    col: int
    row: int


# ========== Map ==========


class SettlementAnchor(ThemeModel):
    """Designer-placed settlement with an approximate position."""

    id: str
    name: str
    type: SettlementType
    approx_col: float
    approx_row: float
    civilization_id: str
    is_capital: bool = False
    starting_population: int = Field(ge=0)
    starting_stability: int
    starting_buildings: list[str] = []


class BoundsShape(ThemeModel):
    kind: Literal["bounds"] = "bounds"
    min_col: int
    max_col: int
    min_row: int
    max_row: int


class ExplicitShape(ThemeModel):
    kind: Literal["explicit"] = "explicit"
    hexes: list[GridCoord] = []


MapZoneShape = Annotated[Union[BoundsShape, ExplicitShape], Field(discriminator="kind")]


class MapZone(ThemeModel):
    """Named region with terrain-weight overrides and an optional controller."""

    id: str
    name: str
    shape: MapZoneShape
    terrain_weights: dict[str, float] = {}
    initial_controlled_by: str | None = None


class MapConfig(ThemeModel):
    """Declarative input to the map generator."""

    cols: int = Field(gt=0)
    rows: int = Field(gt=0)
    settlement_anchors: list[SettlementAnchor] = []
    zones: list[MapZone] = []
    default_terrain_weights: dict[str, float] = {}
    sea_edge: bool = False


# ========== Civilizations and resources ==========


class CivilizationDefinition(ThemeModel):
    id: str
    name: str
    description: str = ""
    color: str = ""
    religion: str | None = None
    starting_resources: dict[str, int] = {}
    starting_techs: list[str] = []
    unique_units: list[str] = []
    unique_buildings: list[str] = []
    special_abilities: list[str] = []
    flavor: str = ""


class ResourceDefinition(ThemeModel):
    id: str
    name: str
    description: str = ""
    base_yield: float = 0
    terrain_yields: dict[str, float] = {}


# ========== Tech tree ==========


class UnlockUnitEffect(ThemeModel):
    kind: Literal["unlock_unit"] = "unlock_unit"
    unit_definition_id: str


class UnlockBuildingEffect(ThemeModel):
    kind: Literal["unlock_building"] = "unlock_building"
    building_definition_id: str


class ResourceModifierEffect(ThemeModel):
    kind: Literal["resource_modifier"] = "resource_modifier"
    resource_id: str
    multiplier: float


class CombatModifierEffect(ThemeModel):
    kind: Literal["combat_modifier"] = "combat_modifier"
    value: float


class StabilityModifierEffect(ThemeModel):
    kind: Literal["stability_modifier"] = "stability_modifier"
    value: float


class CustomTechEffect(ThemeModel):
    kind: Literal["custom"] = "custom"
    key: str
    value: Any = None


TechEffect = Annotated[
    Union[
        UnlockUnitEffect,
        UnlockBuildingEffect,
        ResourceModifierEffect,
        CombatModifierEffect,
        StabilityModifierEffect,
        CustomTechEffect,
    ],
    Field(discriminator="kind"),
]


class TechDefinition(ThemeModel):
    id: str
    name: str
    description: str = ""
    cost: int = Field(ge=0)
    prerequisites: list[str] = []
    effects: list[TechEffect] = []
    era: str = ""


# ========== Buildings and units ==========


class BuildingEffect(ThemeModel):
    resource_id: str
    delta: float


class BuildingDefinition(ThemeModel):
    id: str
    name: str
    description: str = ""
    cost: int = Field(ge=0)
    upkeep: int = 0
    effects: list[BuildingEffect] = []
    prerequisite_tech: str | None = None
    max_per_settlement: int = 1


class UnitDefinition(ThemeModel):
    id: str
    name: str
    description: str = ""
    cost: int = Field(ge=0)
    upkeep: int = 0
    strength: int
    morale: int
    moves: int = Field(ge=0)
    prerequisite_tech: str | None = None
    can_garrison: bool = True
    flavor: str = ""


# ========== Events ==========


class TurnNumberTrigger(ThemeModel):
    kind: Literal["turn_number"] = "turn_number"
    turn: int


class TurnRangeTrigger(ThemeModel):
    kind: Literal["turn_range"] = "turn_range"
    min_turn: int
    max_turn: int


class ResourceBelowTrigger(ThemeModel):
    kind: Literal["resource_below"] = "resource_below"
    resource_id: str
    threshold: float


class StabilityBelowTrigger(ThemeModel):
    kind: Literal["stability_below"] = "stability_below"
    threshold: float


class TensionAboveTrigger(ThemeModel):
    kind: Literal["tension_above"] = "tension_above"
    axis: str
    threshold: float


class TechCompletedTrigger(ThemeModel):
    kind: Literal["tech_completed"] = "tech_completed"
    tech_id: str


class WarDeclaredTrigger(ThemeModel):
    kind: Literal["war_declared"] = "war_declared"


class AlwaysTrigger(ThemeModel):
    kind: Literal["always"] = "always"


EventTrigger = Annotated[
    Union[
        TurnNumberTrigger,
        TurnRangeTrigger,
        ResourceBelowTrigger,
        StabilityBelowTrigger,
        TensionAboveTrigger,
        TechCompletedTrigger,
        WarDeclaredTrigger,
        AlwaysTrigger,
    ],
    Field(discriminator="kind"),
]


class ResourceDeltaEffect(ThemeModel):
    kind: Literal["resource_delta"] = "resource_delta"
    resource_id: str
    delta: float


class StabilityDeltaEffect(ThemeModel):
    kind: Literal["stability_delta"] = "stability_delta"
    delta: float


class TensionDeltaEffect(ThemeModel):
    kind: Literal["tension_delta"] = "tension_delta"
    axis: str
    delta: float


class SpawnUnitEffect(ThemeModel):
    kind: Literal["spawn_unit"] = "spawn_unit"
    unit_definition_id: str
    coord: GridCoord


class DestroySettlementEffect(ThemeModel):
    kind: Literal["destroy_settlement"] = "destroy_settlement"
    settlement_id: str


class ForceWarEffect(ThemeModel):
    kind: Literal["force_war"] = "force_war"
    civ_id1: str
    civ_id2: str


class NarrativeEffect(ThemeModel):
    kind: Literal["narrative"] = "narrative"
    text: str


class CustomEventEffect(ThemeModel):
    kind: Literal["custom"] = "custom"
    key: str
    value: Any = None


EventEffect = Annotated[
    Union[
        ResourceDeltaEffect,
        StabilityDeltaEffect,
        TensionDeltaEffect,
        SpawnUnitEffect,
        DestroySettlementEffect,
        ForceWarEffect,
        NarrativeEffect,
        CustomEventEffect,
    ],
    Field(discriminator="kind"),
]


class EventChoice(ThemeModel):
    id: str
    label: str
    effects: list[EventEffect] = []


class EventDefinition(ThemeModel):
    """A theme event: when it fires, who it targets, and the choices offered."""

    id: str
    name: str
    description: str = ""
    flavour_text: str = ""
    trigger: EventTrigger
    target_civs: Union[Literal["all", "random_one"], list[str]] = "all"
    choices: list[EventChoice] = []
    default_choice_id: str
    is_repeatable: bool = False
    weight: float = 1


# ========== Diplomacy, victory and defeat ==========


class DiplomacyOption(ThemeModel):
    action_type: str
    allowed_states: list[RelationshipState] = []
    description: str = ""


class EliminateAllVictory(ThemeModel):
    kind: Literal["eliminate_all"] = "eliminate_all"


class ControlHexesVictory(ThemeModel):
    kind: Literal["control_hexes"] = "control_hexes"
    count: int


class TechAdvanceVictory(ThemeModel):
    kind: Literal["tech_advance"] = "tech_advance"
    tech_id: str


class SurviveTurnsVictory(ThemeModel):
    kind: Literal["survive_turns"] = "survive_turns"
    turns: int


class ResourceAccumulateVictory(ThemeModel):
    kind: Literal["resource_accumulate"] = "resource_accumulate"
    resource_id: str
    amount: float


class CustomCondition(ThemeModel):
    kind: Literal["custom"] = "custom"
    key: str
    params: dict[str, Any] = {}


VictoryCondition = Annotated[
    Union[
        EliminateAllVictory,
        ControlHexesVictory,
        TechAdvanceVictory,
        SurviveTurnsVictory,
        ResourceAccumulateVictory,
        CustomCondition,
    ],
    Field(discriminator="kind"),
]


class CapitalLostDefeat(ThemeModel):
    kind: Literal["capital_lost"] = "capital_lost"


class StabilityZeroDefeat(ThemeModel):
    """Stability at or below zero eliminates the civilization.

    ``turns_at_zero`` is accepted for forward compatibility but not yet
    enforced: elimination happens on the first turn stability hits zero.
    """

    kind: Literal["stability_zero"] = "stability_zero"
    turns_at_zero: int = 1


class EliminatedByCombatDefeat(ThemeModel):
    kind: Literal["eliminated_by_combat"] = "eliminated_by_combat"


DefeatCondition = Annotated[
    Union[CapitalLostDefeat, StabilityZeroDefeat, EliminatedByCombatDefeat, CustomCondition],
    Field(discriminator="kind"),
]


# ========== Mechanics and flavor ==========


class TensionAxis(ThemeModel):
    id: str
    name: str
    description: str = ""
    min_value: float
    max_value: float


class ResourceInteraction(ThemeModel):
    source_id: str
    target_id: str
    multiplier: float


class TurnCycleEffect(ThemeModel):
    phase: str
    resource_modifiers: dict[str, float] = {}
    combat_modifier: float = 0
    stability_modifier: float = 0


class MechanicModifiers(ThemeModel):
    tension_axes: list[TensionAxis] = []
    combat_modifiers: dict[str, float] = {}
    resource_interactions: list[ResourceInteraction] = []
    turn_cycle_length: int = 0
    turn_cycle_names: list[str] = []
    turn_cycle_effects: list[TurnCycleEffect] = []


class ThemeFlavor(ThemeModel):
    turn_name: str = "Turn"
    currency_name: str = ""
    era_names: list[str] = []
    setting_description: str = ""


class ThemePackage(ThemeModel):
    """Top-level theme: map, factions, content and rules for one game setting."""

    id: str
    name: str
    description: str = ""
    source: str = ""
    civilizations: list[CivilizationDefinition]
    map: MapConfig
    resources: list[ResourceDefinition] = []
    tech_tree: list[TechDefinition] = []
    buildings: list[BuildingDefinition] = []
    units: list[UnitDefinition] = []
    events: list[EventDefinition] = []
    diplomacy_options: list[DiplomacyOption] = []
    victory_conditions: list[VictoryCondition] = []
    defeat_conditions: list[DefeatCondition] = []
    mechanics: MechanicModifiers = MechanicModifiers()
    flavor: ThemeFlavor = ThemeFlavor()

    def unit_definition(self, unit_definition_id: str) -> UnitDefinition | None:
        for unit_def in self.units:
            if unit_def.id == unit_definition_id:
                return unit_def
        return None

    def tech_ids(self) -> set[str]:
        return {tech.id for tech in self.tech_tree}

    def building_ids(self) -> set[str]:
        return {building.id for building in self.buildings}
