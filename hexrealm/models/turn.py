"""Turn resolution records: phase logs and turn summaries."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .hex import HexCoord


class ResolutionPhase(str, Enum):
    """Tag identifying which pipeline phase produced a log."""

    ORDERS = "orders"  # AI backfill of missing bundles
    DIPLOMACY = "diplomacy"
    VALIDATION = "validation"
    MOVEMENT = "movement"
    COMBAT = "combat"
    ECONOMY = "economy"
    CONSTRUCTION = "construction"
    RESEARCH = "research"
    EVENTS = "events"
    ATTRITION = "attrition"
    VICTORY_DEFEAT = "victory_defeat"
    SUMMARY = "summary"


@dataclass(frozen=True)
class ResolutionLog:
    phase: ResolutionPhase
    messages: list[str] = field(default_factory=list)


class CombatOutcome(str, Enum):
    ATTACKER_WINS = "attacker_wins"
    DEFENDER_WINS = "defender_wins"
    DRAW = "draw"


@dataclass(frozen=True)
class CombatResultSummary:
    """One resolved battle, as reported in a turn summary."""

    attacker_civ_id: str
    defender_civ_id: str
    coord: HexCoord
    attacker_strength_lost: int
    defender_strength_lost: int
    outcome: CombatOutcome


@dataclass(frozen=True)
class TurnSummaryEntry:
    """What happened to one civilization during one turn."""

    civ_id: str
    narrative_lines: list[str] = field(default_factory=list)
    resource_deltas: dict[str, int] = field(default_factory=dict)
    events_activated: list[str] = field(default_factory=list)  # Event definition ids
    combat_results: list[CombatResultSummary] = field(default_factory=list)
    tech_completed: Optional[str] = None
    eliminated: bool = False


@dataclass(frozen=True)
class TurnSummary:
    """Immutable audit record appended to ``GameState.turn_history``."""

    turn_number: int
    resolved_at: str
    entries: list[TurnSummaryEntry] = field(default_factory=list)

    def entry_for(self, civ_id: str) -> Optional[TurnSummaryEntry]:
        for entry in self.entries:
            if entry.civ_id == civ_id:
                return entry
        return None
