"""Game state container."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator, Optional

from ..utils.constants import DEFAULT_DIFFICULTY_MODIFIER, DEFAULT_TURN_DEADLINE_DAYS
from ..utils.errors import InvalidInput
from .civilization import CivilizationState
from .hex import Hex, HexCoord, Settlement
from .turn import TurnSummary


class GamePhase(str, Enum):
    LOBBY = "lobby"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


@dataclass(frozen=True)
class GameConfig:
    """Per-game settings chosen at creation time."""

    max_turns: Optional[int] = None  # None means no turn limit
    turn_deadline_days: int = DEFAULT_TURN_DEADLINE_DAYS
    allow_ai_governor: bool = True
    difficulty_modifier: float = DEFAULT_DIFFICULTY_MODIFIER
    fog_of_war: bool = False

    def __post_init__(self):
        """Validate config after initialization."""
        if self.max_turns is not None and self.max_turns < 1:
            raise ValueError(f"Invalid max_turns: {self.max_turns} (must be >= 1 or None)")
        if self.turn_deadline_days < 0:
            raise ValueError(
                f"Invalid turn_deadline_days: {self.turn_deadline_days} (must be >= 0)"
            )


@dataclass(frozen=True)
class ActiveEvent:
    """A running instance of a theme event."""

    instance_id: str
    definition_id: str
    target_civilization_ids: list[str] = field(default_factory=list)
    activated_on_turn: int = 0
    expires_on_turn: Optional[int] = None
    responses: dict[str, str] = field(default_factory=dict)  # civ id -> choice id
    resolved: bool = False


def _check_hex_civ_refs(hex_: Hex, known_civs: set[str]) -> None:
    where = f"hex ({hex_.coord.col},{hex_.coord.row})"
    if hex_.controlled_by is not None and hex_.controlled_by not in known_civs:
        raise InvalidInput(f"Unknown civilization '{hex_.controlled_by}' controls {where}")
    for civ_id in hex_.explored_by:
        if civ_id not in known_civs:
            raise InvalidInput(f"Unknown civilization '{civ_id}' in explored_by of {where}")
    for unit in hex_.units:
        if unit.civilization_id not in known_civs:
            raise InvalidInput(
                f"Unit {unit.id} on {where} belongs to unknown civilization "
                f"'{unit.civilization_id}'"
            )


@dataclass(frozen=True)
class GameState:
    """The single serializable snapshot of a game.

    Every engine component treats a GameState as a value: phases return a
    new state and never mutate one they were given. ``rng_state`` is the
    RNG position after the most recent resolved turn, so reconstructing a
    generator from it reproduces the exact continuation.
    """

    game_id: str
    theme_id: str
    turn: int
    phase: GamePhase
    map: list[list[Hex]] = field(default_factory=list)  # map[row][col]
    civilizations: dict[str, CivilizationState] = field(default_factory=dict)
    active_events: list[ActiveEvent] = field(default_factory=list)
    turn_history: list[TurnSummary] = field(default_factory=list)
    rng_seed: int = 0
    rng_state: int = 0
    config: GameConfig = field(default_factory=GameConfig)
    created_at: str = ""
    last_resolved_at: Optional[str] = None

    def __post_init__(self):
        """Validate game data after initialization.

        Raises:
            InvalidInput: If a hex's coordinate differs from its grid
                position, a settlement id appears twice, or a civilization
                id referenced by the map or by diplomatic relations is not
                in ``civilizations``
        """
        if self.turn < 0:
            raise ValueError(f"Invalid turn: {self.turn} (must be >= 0)")

        # Civ references are only checked once civilizations exist
        known_civs = set(self.civilizations) if self.civilizations else None

        settlement_ids: set[str] = set()
        for r, row in enumerate(self.map):
            for c, hex_ in enumerate(row):
                if hex_.coord.col != c or hex_.coord.row != r:
                    raise InvalidInput(
                        f"Hex at grid position ({c},{r}) has coord "
                        f"({hex_.coord.col},{hex_.coord.row})"
                    )
                if hex_.settlement is not None:
                    if hex_.settlement.id in settlement_ids:
                        raise InvalidInput(
                            f"Duplicate settlement id: {hex_.settlement.id}"
                        )
                    settlement_ids.add(hex_.settlement.id)
                if known_civs is not None:
                    _check_hex_civ_refs(hex_, known_civs)

        if known_civs is not None:
            for civ_id, civ in self.civilizations.items():
                for other_id in civ.diplomatic_relations:
                    if other_id not in known_civs:
                        raise InvalidInput(
                            f"Civilization {civ_id} has relations with unknown "
                            f"civilization '{other_id}'"
                        )

    @property
    def rows(self) -> int:
        return len(self.map)

    @property
    def cols(self) -> int:
        return len(self.map[0]) if self.map else 0

    def hexes(self) -> Iterator[Hex]:
        """Iterate over every hex in row-major order."""
        for row in self.map:
            yield from row

    def hex_at(self, coord: HexCoord) -> Optional[Hex]:
        """Return the hex at ``coord``, or None if it is off the grid."""
        if 0 <= coord.row < self.rows and 0 <= coord.col < len(self.map[coord.row]):
            return self.map[coord.row][coord.col]
        return None

    def find_settlement(self, settlement_id: str) -> Optional[tuple[Hex, Settlement]]:
        for hex_ in self.hexes():
            if hex_.settlement is not None and hex_.settlement.id == settlement_id:
                return hex_, hex_.settlement
        return None

    def find_unit(self, unit_id: str) -> Optional[Hex]:
        """Return the hex holding the unit with ``unit_id``, if any."""
        for hex_ in self.hexes():
            if any(unit.id == unit_id for unit in hex_.units):
                return hex_
        return None

    def with_hexes(self, updates: dict[HexCoord, Hex]) -> "GameState":
        """Return a copy of this state with the given hexes swapped in.

        Only rows that contain an updated hex are copied; untouched rows are
        shared with this state (they are never mutated).
        """
        if not updates:
            return self
        new_map = list(self.map)
        for coord, hex_ in updates.items():
            if new_map[coord.row] is self.map[coord.row]:
                new_map[coord.row] = list(self.map[coord.row])
            new_map[coord.row][coord.col] = hex_
        return replace(self, map=new_map)

    def living_civ_ids(self) -> list[str]:
        return [civ_id for civ_id, civ in self.civilizations.items() if not civ.is_eliminated]
