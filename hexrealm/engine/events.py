"""Event phase: trigger, expire and resolve theme events (not implemented yet)."""

from ..models import GameState
from ..themes.schema import ThemePackage
from ..utils import PRNG


def resolve_events(state: GameState, theme: ThemePackage, rng: PRNG) -> GameState:
    """Trigger and resolve events.

    Args:
        state: Game state after research
        theme: Active theme (event definitions)
        rng: Generator forked for events

    Returns:
        Game state with updated ``active_events`` (currently unchanged)
    """
    return state
