"""AI governor: issues orders for civilizations that did not submit any.

The shipped governor is idle. It hands back an empty bundle so the turn
still has exactly one bundle per living civilization. A smarter governor
can be plugged into ``TurnResolver`` as long as it keeps the call
signature of ``generate_ai_orders``.
"""

import logging
from typing import Callable

from ..models import GameState, PlayerOrders
from ..themes.schema import ThemePackage
from ..utils import PRNG
from ..utils.constants import AI_PLAYER_PREFIX

logger = logging.getLogger(__name__)

OrderGenerator = Callable[[GameState, str, ThemePackage, PRNG, str], PlayerOrders]


def generate_ai_orders(
    state: GameState, civ_id: str, theme: ThemePackage, rng: PRNG, submitted_at: str
) -> PlayerOrders:
    """Produce one order bundle for ``civ_id`` for the current turn.

    Args:
        state: Current game state
        civ_id: Civilization to govern
        theme: Active theme
        rng: Generator owned by this call
        submitted_at: Timestamp stamped on the bundle (no wall clock is read)

    Returns:
        Order bundle for ``state.turn``
    """
    return PlayerOrders(
        player_id=f"{AI_PLAYER_PREFIX}{civ_id}",
        civilization_id=civ_id,
        turn_number=state.turn,
        orders=[],
        submitted_at=submitted_at,
    )


def fill_missing_orders(
    state: GameState,
    submitted: list[PlayerOrders],
    theme: ThemePackage,
    rng: PRNG,
    submitted_at: str,
    generator: OrderGenerator = generate_ai_orders,
) -> list[PlayerOrders]:
    """Append an AI bundle for every living civilization that submitted none.

    Each generated bundle gets its own fork of ``rng``; ``rng`` itself is
    never advanced.

    Returns:
        Submitted bundles followed by generated ones, in civilization order
    """
    submitted_civ_ids = {bundle.civilization_id for bundle in submitted}
    all_orders = list(submitted)

    for civ_id, civ in state.civilizations.items():
        if civ.is_eliminated or civ_id in submitted_civ_ids:
            continue
        logger.debug(f"AI governor issuing orders for {civ_id} on turn {state.turn}")
        all_orders.append(generator(state, civ_id, theme, rng.fork(), submitted_at))

    return all_orders
