"""Game state initialization.

Builds the first ``GameState`` of a game from a theme: generates the map,
creates one civilization record per theme civilization, garrisons starting
units on each capital and reveals each capital's surroundings.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional

from ..models import (
    CivilizationState,
    GameConfig,
    GamePhase,
    GameState,
    Hex,
    HexCoord,
    RelationshipState,
    Unit,
)
from ..themes.schema import CivilizationDefinition, ThemePackage, UnitDefinition
from ..utils import create_rng, hash_seed
from ..utils.constants import DEFAULT_CIV_STABILITY, INITIAL_TURN, STARTING_UNITS_PER_CIV
from .map_generator import generate_map, get_neighbors

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerMapping:
    """Which player (if any) controls a civilization."""

    civ_id: str
    player_id: Optional[str] = None


def generate_game_seed(game_id: str) -> int:
    """Derive a game's numeric RNG seed from its id."""
    return hash_seed(game_id)


def _starting_stability(theme: ThemePackage, civ_id: str) -> int:
    """Mean starting stability of the civ's anchors, rounded half up."""
    stabilities = [
        anchor.starting_stability
        for anchor in theme.map.settlement_anchors
        if anchor.civilization_id == civ_id
    ]
    if not stabilities:
        return DEFAULT_CIV_STABILITY
    # Integer round-half-up of sum / count
    return (2 * sum(stabilities) + len(stabilities)) // (2 * len(stabilities))


def _starting_unit_definition(
    theme: ThemePackage, completed_techs: list[str]
) -> Optional[UnitDefinition]:
    for unit_def in theme.units:
        if unit_def.prerequisite_tech is None or unit_def.prerequisite_tech in completed_techs:
            return unit_def
    return theme.units[0] if theme.units else None


def _create_civilization(
    civ_def: CivilizationDefinition, theme: ThemePackage, player_id: Optional[str]
) -> CivilizationState:
    return CivilizationState(
        id=civ_def.id,
        player_id=player_id,
        resources=dict(civ_def.starting_resources),
        tech_progress={},
        completed_techs=list(civ_def.starting_techs),
        cultural_influence=0,
        stability=_starting_stability(theme, civ_def.id),
        diplomatic_relations={
            other.id: RelationshipState.PEACE
            for other in theme.civilizations
            if other.id != civ_def.id
        },
        tension_axes={axis.id: 0 for axis in theme.mechanics.tension_axes},
        is_eliminated=False,
        turns_missing_orders=0,
    )


def _find_capital(grid: list[list[Hex]], civ_id: str) -> Optional[Hex]:
    for row in grid:
        for hex_ in row:
            if (
                hex_.controlled_by == civ_id
                and hex_.settlement is not None
                and hex_.settlement.is_capital
            ):
                return hex_
    return None


def _place_starting_forces(
    grid: list[list[Hex]], civ: CivilizationState, theme: ThemePackage
) -> None:
    """Garrison starting units on the civ's capital and explore around it.

    Updates ``grid`` rows in place; the grid is freshly generated and not
    yet shared with any state.
    """
    capital = _find_capital(grid, civ.id)
    if capital is None:
        logger.warning(f"Civilization {civ.id} has no capital; no starting units placed")
        return

    unit_def = _starting_unit_definition(theme, civ.completed_techs)
    units = []
    if unit_def is not None:
        units = [
            Unit(
                id=f"unit-start-{civ.id}-{i}",
                definition_id=unit_def.id,
                civilization_id=civ.id,
                strength=unit_def.strength,
                morale=unit_def.morale,
                moves_remaining=unit_def.moves,
                is_garrisoned=True,
            )
            for i in range(1, STARTING_UNITS_PER_CIV + 1)
        ]

    coord = capital.coord
    grid[coord.row][coord.col] = replace(capital, units=units)

    rows, cols = len(grid), len(grid[0])
    for explored in [coord, *get_neighbors(HexCoord(coord.col, coord.row), cols, rows)]:
        hex_ = grid[explored.row][explored.col]
        if civ.id not in hex_.explored_by:
            grid[explored.row][explored.col] = replace(
                hex_, explored_by=[*hex_.explored_by, civ.id]
            )


def initialize_game_state(
    game_id: str,
    theme: ThemePackage,
    player_mappings: list[PlayerMapping],
    seed: int,
    created_at: str,
) -> GameState:
    """Create the turn-1 state for a new game.

    Args:
        game_id: Game identifier
        theme: Validated theme package
        player_mappings: Civilization to player assignments; unmapped
            civilizations are AI-governed
        seed: Numeric RNG seed (see ``generate_game_seed``)
        created_at: Creation timestamp (no wall clock is read)

    Returns:
        Initial game state, with ``rng_state`` positioned after map generation

    Raises:
        InvalidInput: If the theme's anchors cannot all be placed
    """
    rng = create_rng(seed)
    grid = generate_map(theme.map, rng)

    players = {mapping.civ_id: mapping.player_id for mapping in player_mappings}
    civilizations = {
        civ_def.id: _create_civilization(civ_def, theme, players.get(civ_def.id))
        for civ_def in theme.civilizations
    }

    for civ in civilizations.values():
        _place_starting_forces(grid, civ, theme)

    state = GameState(
        game_id=game_id,
        theme_id=theme.id,
        turn=INITIAL_TURN,
        phase=GamePhase.ACTIVE,
        map=grid,
        civilizations=civilizations,
        active_events=[],
        turn_history=[],
        rng_seed=seed,
        rng_state=rng.state,
        config=GameConfig(),
        created_at=created_at,
        last_resolved_at=None,
    )

    logger.info(
        f"Initialized game {game_id} with theme {theme.id}: "
        f"{len(civilizations)} civilizations on a {theme.map.cols}x{theme.map.rows} map"
    )
    return state
