"""Game state data models."""

from .civilization import CivilizationState, RelationshipState
from .game import ActiveEvent, GameConfig, GamePhase, GameState
from .hex import (
    ALL_TERRAINS,
    Hex,
    HexCoord,
    ResourceDeposit,
    Settlement,
    SettlementType,
    TerrainType,
    Unit,
)
from .order import (
    AnyOrder,
    ConstructionOrder,
    DiplomaticAction,
    DiplomaticActionType,
    EventResponse,
    MoveOrder,
    PlayerOrders,
    ResearchOrder,
    ResourceAllocationOrder,
)
from .turn import (
    CombatOutcome,
    CombatResultSummary,
    ResolutionLog,
    ResolutionPhase,
    TurnSummary,
    TurnSummaryEntry,
)

__all__ = [
    "CivilizationState",
    "RelationshipState",
    "ActiveEvent",
    "GameConfig",
    "GamePhase",
    "GameState",
    "ALL_TERRAINS",
    "Hex",
    "HexCoord",
    "ResourceDeposit",
    "Settlement",
    "SettlementType",
    "TerrainType",
    "Unit",
    "AnyOrder",
    "ConstructionOrder",
    "DiplomaticAction",
    "DiplomaticActionType",
    "EventResponse",
    "MoveOrder",
    "PlayerOrders",
    "ResearchOrder",
    "ResourceAllocationOrder",
    "CombatOutcome",
    "CombatResultSummary",
    "ResolutionLog",
    "ResolutionPhase",
    "TurnSummary",
    "TurnSummaryEntry",
]
