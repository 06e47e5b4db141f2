"""Diplomacy resolution.

Diplomatic orders change relationships symmetrically: when A declares war
on B, both A's and B's relation maps record ``war``. A war declaration also
pulls in the target's allies (one hop only): every civilization allied
with the target ends up at war with the declarer. The resolver is pure and
draws no randomness.
"""

import logging
from dataclasses import replace
from typing import Optional

from ..models import (
    CivilizationState,
    DiplomaticAction,
    DiplomaticActionType,
    GameState,
    PlayerOrders,
    RelationshipState,
)
from ..themes.schema import ThemePackage

logger = logging.getLogger(__name__)

# send_message and offer_trade are communication only
ACTION_RELATION: dict[DiplomaticActionType, RelationshipState] = {
    DiplomaticActionType.DECLARE_WAR: RelationshipState.WAR,
    DiplomaticActionType.PROPOSE_PEACE: RelationshipState.PEACE,
    DiplomaticActionType.PROPOSE_ALLIANCE: RelationshipState.ALLIANCE,
    DiplomaticActionType.BREAK_ALLIANCE: RelationshipState.PEACE,
    DiplomaticActionType.PROPOSE_TRUCE: RelationshipState.TRUCE,
    DiplomaticActionType.PROPOSE_VASSALAGE: RelationshipState.VASSAL,
}


def set_relation_symmetric(
    civs: dict[str, CivilizationState],
    civ_a: str,
    civ_b: str,
    relation: RelationshipState,
) -> dict[str, CivilizationState]:
    """Return a new civilization mapping with A<->B set to ``relation``.

    The input mapping is returned unchanged if either civilization is missing.
    """
    civ_a_state = civs.get(civ_a)
    civ_b_state = civs.get(civ_b)
    if civ_a_state is None or civ_b_state is None:
        return civs

    return {
        **civs,
        civ_a: replace(
            civ_a_state,
            diplomatic_relations={**civ_a_state.diplomatic_relations, civ_b: relation},
        ),
        civ_b: replace(
            civ_b_state,
            diplomatic_relations={**civ_b_state.diplomatic_relations, civ_a: relation},
        ),
    }


def _apply_action(
    civs: dict[str, CivilizationState], source_civ_id: str, action: DiplomaticAction
) -> tuple[dict[str, CivilizationState], Optional[str]]:
    """Apply one diplomatic action.

    Returns:
        Tuple of (updated civilizations, log message or None if nothing to report)
    """
    target_civ_id = action.target_civ_id
    if target_civ_id not in civs:
        return civs, f"Civ {source_civ_id}: unknown target civ {target_civ_id}, skipped"
    if target_civ_id == source_civ_id:
        return civs, f"Civ {source_civ_id}: diplomatic action targets itself, skipped"

    if not isinstance(action.action_type, DiplomaticActionType):
        return civs, f"Civ {source_civ_id}: unknown diplomatic action {action.action_type!r}, skipped"

    new_relation = ACTION_RELATION.get(action.action_type)
    if new_relation is None:
        return civs, f"Civ {source_civ_id} sent {action.action_type.value} to {target_civ_id}"

    civs = set_relation_symmetric(civs, source_civ_id, target_civ_id, new_relation)
    message = f"Civ {source_civ_id} -> {target_civ_id}: {new_relation.value}"

    if action.action_type is DiplomaticActionType.DECLARE_WAR:
        target = civs[target_civ_id]
        allies = [
            ally_id
            for ally_id in target.diplomatic_relations
            if ally_id in civs and target.relation_to(ally_id) is RelationshipState.ALLIANCE
        ]
        for ally_id in allies:
            civs = set_relation_symmetric(civs, source_civ_id, ally_id, RelationshipState.WAR)
        if allies:
            message += f" (allies of {target_civ_id} join the war: {', '.join(allies)})"

    return civs, message


def apply_diplomatic_orders(
    state: GameState, orders: list[PlayerOrders]
) -> tuple[GameState, list[str]]:
    """Apply every diplomatic order in submission order, with a log.

    Later orders see the relationship changes made by earlier ones.

    Args:
        state: Current game state
        orders: All order bundles for the turn

    Returns:
        Tuple of (updated game state, log messages)
    """
    civs = dict(state.civilizations)
    messages: list[str] = []

    for bundle in orders:
        source_civ_id = bundle.civilization_id
        if source_civ_id not in civs:
            continue

        for order in bundle.orders:
            if not isinstance(order, DiplomaticAction):
                continue
            civs, message = _apply_action(civs, source_civ_id, order)
            if message is not None:
                messages.append(message)

    return replace(state, civilizations=civs), messages


def resolve_diplomacy(
    state: GameState, orders: list[PlayerOrders], theme: ThemePackage
) -> GameState:
    """Apply all diplomatic orders and return the new state.

    Args:
        state: Current game state
        orders: All order bundles for the turn
        theme: Active theme (diplomacy rules do not depend on it yet)

    Returns:
        Game state with updated relationships
    """
    new_state, _ = apply_diplomatic_orders(state, orders)
    return new_state
