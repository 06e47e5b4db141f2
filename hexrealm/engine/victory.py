"""Victory and defeat checking.

This module handles:
1. Defeat: marking civilizations eliminated by the theme's defeat conditions
2. Victory: completing the game when a surviving civilization meets a
   victory condition (first match wins)
3. Turn limit: completing the game when ``config.max_turns`` is reached

Custom conditions are carried by themes for external rule engines and are
ignored here.
"""

import logging
from dataclasses import replace
from typing import Optional

from ..models import CivilizationState, GamePhase, GameState
from ..themes.schema import (
    CapitalLostDefeat,
    ControlHexesVictory,
    DefeatCondition,
    EliminateAllVictory,
    EliminatedByCombatDefeat,
    ResourceAccumulateVictory,
    StabilityZeroDefeat,
    SurviveTurnsVictory,
    TechAdvanceVictory,
    ThemePackage,
    VictoryCondition,
)
from ..utils.constants import STABILITY_MIN

logger = logging.getLogger(__name__)


def _defeat_reason(state: GameState, civ: CivilizationState, condition: DefeatCondition) -> Optional[str]:
    if isinstance(condition, CapitalLostDefeat):
        has_capital = any(
            h.controlled_by == civ.id and h.settlement is not None and h.settlement.is_capital
            for h in state.hexes()
        )
        return None if has_capital else "capital lost"

    if isinstance(condition, StabilityZeroDefeat):
        # turns_at_zero is not tracked; zero stability eliminates immediately
        return "stability at zero" if civ.stability <= STABILITY_MIN else None

    if isinstance(condition, EliminatedByCombatDefeat):
        has_units = any(
            unit.civilization_id == civ.id for h in state.hexes() for unit in h.units
        )
        has_settlements = any(
            h.controlled_by == civ.id and h.settlement is not None for h in state.hexes()
        )
        if not has_units and not has_settlements:
            return "no units or settlements, eliminated by combat"
        return None

    return None


def _victory_reason(
    state: GameState,
    civ: CivilizationState,
    condition: VictoryCondition,
    surviving_civ_ids: list[str],
) -> Optional[str]:
    if isinstance(condition, EliminateAllVictory):
        if surviving_civ_ids == [civ.id]:
            return "all others eliminated"
        return None

    if isinstance(condition, ControlHexesVictory):
        controlled = sum(1 for h in state.hexes() if h.controlled_by == civ.id)
        if controlled >= condition.count:
            return f"controls {controlled} hexes (>= {condition.count})"
        return None

    if isinstance(condition, ResourceAccumulateVictory):
        if civ.resources.get(condition.resource_id, 0) >= condition.amount:
            return f"accumulated {condition.amount} {condition.resource_id}"
        return None

    if isinstance(condition, TechAdvanceVictory):
        if condition.tech_id in civ.completed_techs:
            return f"tech advance {condition.tech_id}"
        return None

    if isinstance(condition, SurviveTurnsVictory):
        if state.turn >= condition.turns:
            return f"survived {condition.turns} turns"
        return None

    return None


def check_victory_defeat(state: GameState, theme: ThemePackage) -> tuple[GameState, list[str]]:
    """Apply defeat conditions, then victory conditions.

    Args:
        state: Game state after attrition
        theme: Active theme (victory and defeat conditions)

    Returns:
        Tuple of (updated game state, log messages)
    """
    messages: list[str] = []
    civs = dict(state.civilizations)

    for civ_id, civ in state.civilizations.items():
        if civ.is_eliminated:
            continue
        for condition in theme.defeat_conditions:
            reason = _defeat_reason(state, civ, condition)
            if reason is not None:
                civs[civ_id] = replace(civ, is_eliminated=True)
                messages.append(f"Civ {civ_id}: {reason}, eliminated")
                logger.info(f"Civilization {civ_id} eliminated on turn {state.turn}: {reason}")
                break

    state = replace(state, civilizations=civs)
    surviving_civ_ids = state.living_civ_ids()
    phase = state.phase

    for civ_id in surviving_civ_ids:
        if phase == GamePhase.COMPLETED:
            break
        for condition in theme.victory_conditions:
            reason = _victory_reason(state, civs[civ_id], condition, surviving_civ_ids)
            if reason is not None:
                phase = GamePhase.COMPLETED
                messages.append(f"Civ {civ_id}: {reason}, victory")
                logger.info(f"Civilization {civ_id} wins on turn {state.turn}: {reason}")
                break

    max_turns = state.config.max_turns
    if phase != GamePhase.COMPLETED and max_turns is not None and state.turn >= max_turns:
        phase = GamePhase.COMPLETED
        messages.append(f"Turn limit {max_turns} reached, game over")
        logger.info(f"Game {state.game_id} reached its turn limit ({max_turns})")

    return replace(state, phase=phase), messages
