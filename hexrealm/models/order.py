"""Player order data models.

Orders are submitted once per civilization per turn as a ``PlayerOrders``
bundle. Each order is one of a closed set of variants, distinguished by
its ``kind`` tag:

- ``move``: walk a unit along a path of adjacent hexes
- ``construction``: add a building to a settlement
- ``research``: allocate points toward a tech
- ``diplomatic``: change or communicate about a relationship
- ``event_response``: answer an active event
- ``resource_allocation``: split resources between uses
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Union

from .hex import HexCoord


class DiplomaticActionType(str, Enum):
    PROPOSE_PEACE = "propose_peace"
    PROPOSE_ALLIANCE = "propose_alliance"
    DECLARE_WAR = "declare_war"
    PROPOSE_TRUCE = "propose_truce"
    PROPOSE_VASSALAGE = "propose_vassalage"
    SEND_MESSAGE = "send_message"
    OFFER_TRADE = "offer_trade"
    BREAK_ALLIANCE = "break_alliance"


_ACTION_VALUES = frozenset(action.value for action in DiplomaticActionType)


@dataclass(frozen=True)
class MoveOrder:
    """Move a unit along ``path`` (start hex excluded, destination last)."""

    kind: ClassVar[str] = "move"

    unit_id: str
    path: list[HexCoord] = field(default_factory=list)


@dataclass(frozen=True)
class ConstructionOrder:
    kind: ClassVar[str] = "construction"

    settlement_id: str
    building_definition_id: str


@dataclass(frozen=True)
class ResearchOrder:
    kind: ClassVar[str] = "research"

    tech_id: str
    points_allocated: int


@dataclass(frozen=True)
class DiplomaticAction:
    """A diplomatic action aimed at another civilization.

    ``action_type`` is normally a ``DiplomaticActionType``. Unrecognized
    action strings are kept as-is so the turn pipeline can log and skip
    them instead of rejecting the whole bundle.
    """

    kind: ClassVar[str] = "diplomatic"

    action_type: Union[DiplomaticActionType, str]
    target_civ_id: str
    payload: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Normalize known action strings to the enum."""
        if (
            not isinstance(self.action_type, DiplomaticActionType)
            and self.action_type in _ACTION_VALUES
        ):
            object.__setattr__(self, "action_type", DiplomaticActionType(self.action_type))


@dataclass(frozen=True)
class EventResponse:
    kind: ClassVar[str] = "event_response"

    event_instance_id: str
    choice_id: str


@dataclass(frozen=True)
class ResourceAllocationOrder:
    kind: ClassVar[str] = "resource_allocation"

    allocations: dict[str, int] = field(default_factory=dict)


AnyOrder = Union[
    MoveOrder,
    ConstructionOrder,
    ResearchOrder,
    DiplomaticAction,
    EventResponse,
    ResourceAllocationOrder,
]


@dataclass(frozen=True)
class PlayerOrders:
    """One civilization's order bundle for one turn.

    Created client-side, consumed exactly once by the turn pipeline for
    ``turn_number``, then archived by the caller.
    """

    player_id: str
    civilization_id: str
    turn_number: int
    orders: list[AnyOrder] = field(default_factory=list)
    submitted_at: str = ""

    def __post_init__(self):
        """Validate order bundle after initialization."""
        if not self.civilization_id:
            raise ValueError("civilization_id cannot be empty")
        if self.turn_number < 0:
            raise ValueError(f"Invalid turn_number: {self.turn_number} (must be >= 0)")
