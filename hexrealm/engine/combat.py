"""Combat phase.

Combat resolution rules are not implemented yet; the phase returns the
state unchanged. Replacements must keep this signature and draw all
randomness from the generator they are handed.
"""

from ..models import GameState
from ..themes.schema import ThemePackage
from ..utils import PRNG


def resolve_combat(state: GameState, theme: ThemePackage, rng: PRNG) -> GameState:
    """Resolve battles on every hex holding units of civilizations at war.

    Args:
        state: Game state after movement
        theme: Active theme
        rng: Generator forked for combat

    Returns:
        Game state after combat
    """
    return state
