"""Economy phase: resource yields and upkeep (not implemented yet)."""

from ..models import GameState
from ..themes.schema import ThemePackage


def resolve_economy(state: GameState, theme: ThemePackage) -> GameState:
    """Apply per-turn resource income and upkeep. Returns the state unchanged."""
    return state
