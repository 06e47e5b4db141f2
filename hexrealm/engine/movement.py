"""Movement phase: refresh unit moves and walk units along their paths.

Rules:
- At the start of the phase every unit's ``moves_remaining`` is reset to
  its unit definition's ``moves`` (units with an unknown definition keep
  their current value)
- A path lists the cells entered, excluding the start cell
- Every step must be adjacent to the previous cell and may not be sea
- A path may not be longer than the unit's remaining moves
- A moved unit ends on the last cell of its path with no moves left
- Every cell on the path becomes explored by the unit's civilization

Orders are applied in submission order; a rejected move is logged and
skipped.
"""

import logging
from dataclasses import replace

from ..models import GameState, Hex, HexCoord, MoveOrder, PlayerOrders, TerrainType, Unit
from ..themes.schema import ThemePackage
from ..utils import hex_distance

logger = logging.getLogger(__name__)


def _refreshed(unit: Unit, theme: ThemePackage) -> Unit:
    unit_def = theme.unit_definition(unit.definition_id)
    if unit_def is None:
        return unit
    return replace(unit, moves_remaining=unit_def.moves)


def refresh_unit_moves(state: GameState, theme: ThemePackage) -> GameState:
    """Reset every unit's remaining moves from the theme's unit definitions."""
    updates: dict[HexCoord, Hex] = {}

    for hex_ in state.hexes():
        if not hex_.units:
            continue
        refreshed = [_refreshed(unit, theme) for unit in hex_.units]
        if refreshed != hex_.units:
            updates[hex_.coord] = replace(hex_, units=refreshed)

    return state.with_hexes(updates)


def _apply_move(state: GameState, civ_id: str, order: MoveOrder) -> tuple[GameState, str]:
    """Move one unit along its path.

    Returns:
        Tuple of (updated game state, log message)

    Raises:
        ValueError: If the move is not legal
    """
    source = state.find_unit(order.unit_id)
    if source is None:
        raise ValueError("unit not found on map")
    unit = next(u for u in source.units if u.id == order.unit_id)
    if unit.civilization_id != civ_id:
        raise ValueError(f"owned by {unit.civilization_id}")
    if not order.path:
        raise ValueError("empty path")
    if len(order.path) > unit.moves_remaining:
        raise ValueError(
            f"path length {len(order.path)} exceeds moves remaining {unit.moves_remaining}"
        )

    prev = source.coord
    for step in order.path:
        step_hex = state.hex_at(step)
        if step_hex is None:
            raise ValueError(f"step ({step.col},{step.row}) is off the map")
        if hex_distance(prev.col, prev.row, step.col, step.row) != 1:
            raise ValueError(
                f"non-adjacent step ({prev.col},{prev.row})->({step.col},{step.row})"
            )
        if step_hex.terrain == TerrainType.SEA:
            raise ValueError(f"step ({step.col},{step.row}) is sea")
        prev = step

    dest = order.path[-1]
    moved = replace(unit, moves_remaining=0)

    updates: dict[HexCoord, Hex] = {
        source.coord: replace(source, units=[u for u in source.units if u.id != unit.id])
    }
    dest_hex = updates.get(dest) or state.hex_at(dest)
    updates[dest] = replace(dest_hex, units=[*dest_hex.units, moved])

    for step in order.path:
        step_hex = updates.get(step) or state.hex_at(step)
        if civ_id not in step_hex.explored_by:
            updates[step] = replace(step_hex, explored_by=[*step_hex.explored_by, civ_id])

    message = (
        f"Unit {unit.id} moved from ({source.coord.col},{source.coord.row}) "
        f"to ({dest.col},{dest.row})"
    )
    return state.with_hexes(updates), message


def process_movement(
    state: GameState, orders: list[PlayerOrders], theme: ThemePackage
) -> tuple[GameState, list[str]]:
    """Execute the movement phase.

    Args:
        state: Game state after validation
        orders: Validated order bundles
        theme: Active theme (unit definitions)

    Returns:
        Tuple of (updated game state, log messages)
    """
    state = refresh_unit_moves(state, theme)
    messages: list[str] = []

    for bundle in orders:
        for order in bundle.orders:
            if not isinstance(order, MoveOrder):
                continue
            try:
                state, message = _apply_move(state, bundle.civilization_id, order)
            except ValueError as e:
                message = f"Unit {order.unit_id}: {e}, skipped"
                logger.warning(message)
            messages.append(message)

    return state, messages
