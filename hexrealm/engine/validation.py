"""Order validation phase.

Validation is lenient: a bad bundle (unknown or eliminated civilization,
wrong turn) is dropped as a whole; a bad order inside a good bundle is
dropped on its own and the rest of the bundle survives. Every drop is
logged and nothing is raised to the caller.
"""

import logging
from dataclasses import replace

from ..models import (
    AnyOrder,
    ConstructionOrder,
    DiplomaticAction,
    DiplomaticActionType,
    EventResponse,
    GameState,
    MoveOrder,
    PlayerOrders,
    ResearchOrder,
    ResourceAllocationOrder,
)
from ..themes.schema import ThemePackage

logger = logging.getLogger(__name__)


def _validate_bundle(state: GameState, bundle: PlayerOrders) -> None:
    """Raise ValueError if the whole bundle must be dropped."""
    civ = state.civilizations.get(bundle.civilization_id)
    if civ is None:
        raise ValueError(f"unknown civilization '{bundle.civilization_id}'")
    if civ.is_eliminated:
        raise ValueError(f"civilization '{bundle.civilization_id}' is eliminated")
    if bundle.turn_number != state.turn:
        raise ValueError(
            f"orders are for turn {bundle.turn_number}, current turn is {state.turn}"
        )


def _validate_single_order(
    state: GameState, civ_id: str, order: AnyOrder, theme: ThemePackage
) -> None:
    """Validate a single order. Raises ValueError if invalid.

    Args:
        state: Game state after diplomacy
        civ_id: Civilization that issued the order
        order: Order to validate
        theme: Active theme (building and tech ids)

    Raises:
        ValueError: If the order references a stale or invalid target
    """
    if isinstance(order, MoveOrder):
        unit_hex = state.find_unit(order.unit_id)
        if unit_hex is None:
            raise ValueError(f"unit '{order.unit_id}' does not exist")
        unit = next(u for u in unit_hex.units if u.id == order.unit_id)
        if unit.civilization_id != civ_id:
            raise ValueError(f"unit '{order.unit_id}' belongs to {unit.civilization_id}")
        if not order.path:
            raise ValueError(f"unit '{order.unit_id}' has an empty path")
        for step in order.path:
            if state.hex_at(step) is None:
                raise ValueError(f"path step ({step.col},{step.row}) is off the map")

    elif isinstance(order, ConstructionOrder):
        found = state.find_settlement(order.settlement_id)
        if found is None:
            raise ValueError(f"settlement '{order.settlement_id}' does not exist")
        settlement_hex, _ = found
        if settlement_hex.controlled_by != civ_id:
            raise ValueError(f"settlement '{order.settlement_id}' is not controlled by {civ_id}")
        if order.building_definition_id not in theme.building_ids():
            raise ValueError(f"unknown building '{order.building_definition_id}'")

    elif isinstance(order, ResearchOrder):
        if order.tech_id not in theme.tech_ids():
            raise ValueError(f"unknown tech '{order.tech_id}'")
        if order.points_allocated <= 0:
            raise ValueError(
                f"research points must be positive, got {order.points_allocated}"
            )

    elif isinstance(order, DiplomaticAction):
        if order.target_civ_id == civ_id:
            raise ValueError("diplomatic action targets itself")
        if order.target_civ_id not in state.civilizations:
            raise ValueError(f"unknown target civilization '{order.target_civ_id}'")
        if not isinstance(order.action_type, DiplomaticActionType):
            raise ValueError(f"unknown diplomatic action '{order.action_type}'")

    elif isinstance(order, EventResponse):
        if not any(e.instance_id == order.event_instance_id for e in state.active_events):
            raise ValueError(f"event '{order.event_instance_id}' is not active")

    elif isinstance(order, ResourceAllocationOrder):
        negative = {k: v for k, v in order.allocations.items() if v < 0}
        if negative:
            raise ValueError(f"negative allocations: {negative}")

    else:
        raise ValueError(f"unknown order type {type(order).__name__}")


def validate_orders(
    state: GameState, orders: list[PlayerOrders], theme: ThemePackage
) -> tuple[list[PlayerOrders], list[str]]:
    """Filter order bundles down to the orders later phases may act on.

    Args:
        state: Game state after diplomacy
        orders: All bundles for the turn (including AI-generated ones)
        theme: Active theme

    Returns:
        Tuple of (validated bundles, log messages for every dropped item)
    """
    valid_bundles: list[PlayerOrders] = []
    messages: list[str] = []

    for bundle in orders:
        try:
            _validate_bundle(state, bundle)
        except ValueError as e:
            message = f"Orders from {bundle.civilization_id} dropped: {e}"
            logger.warning(message)
            messages.append(message)
            continue

        kept: list[AnyOrder] = []
        for i, order in enumerate(bundle.orders):
            try:
                _validate_single_order(state, bundle.civilization_id, order, theme)
            except ValueError as e:
                kind = getattr(order, "kind", type(order).__name__)
                message = f"Civ {bundle.civilization_id} order {i} ({kind}) dropped: {e}"
                logger.warning(message)
                messages.append(message)
                continue
            kept.append(order)

        valid_bundles.append(replace(bundle, orders=kept))

    return valid_bundles, messages
