"""Civilization runtime state."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class RelationshipState(str, Enum):
    """Diplomatic relationship between two civilizations (always symmetric)."""

    PEACE = "peace"
    ALLIANCE = "alliance"
    WAR = "war"
    TRUCE = "truce"
    VASSAL = "vassal"


@dataclass(frozen=True)
class CivilizationState:
    """Per-faction state for one playable civilization.

    Relationship maps are kept symmetric by the diplomacy resolver: if A
    records B as an ally, B records A as an ally. ``turns_missing_orders``
    counts consecutive turns with no submitted bundle and is read by the
    AI takeover policy outside the core.
    """

    id: str
    player_id: Optional[str] = None  # None for AI-governed civs
    resources: dict[str, int] = field(default_factory=dict)  # resource id -> amount
    tech_progress: dict[str, int] = field(default_factory=dict)  # tech id -> points
    completed_techs: list[str] = field(default_factory=list)
    cultural_influence: int = 0
    stability: int = 0
    diplomatic_relations: dict[str, RelationshipState] = field(default_factory=dict)
    tension_axes: dict[str, float] = field(default_factory=dict)  # axis id -> value
    is_eliminated: bool = False
    turns_missing_orders: int = 0

    def __post_init__(self):
        """Validate civilization data after initialization."""
        if not self.id:
            raise ValueError("Civilization id cannot be empty")
        if self.turns_missing_orders < 0:
            raise ValueError(
                f"Invalid turns_missing_orders: {self.turns_missing_orders} (must be >= 0)"
            )

    def relation_to(self, other_civ_id: str) -> Optional[RelationshipState]:
        """Return this civ's recorded relationship with another civ, if any."""
        return self.diplomatic_relations.get(other_civ_id)
