"""Game engine components."""

from .diplomacy import apply_diplomatic_orders, resolve_diplomacy
from .game_initializer import PlayerMapping, generate_game_seed, initialize_game_state
from .map_generator import generate_map, get_neighbors, initialize_map
from .turn_resolver import TurnContext, TurnResolution, TurnResolver, resolve_turn

__all__ = [
    "apply_diplomatic_orders",
    "resolve_diplomacy",
    "PlayerMapping",
    "generate_game_seed",
    "initialize_game_state",
    "generate_map",
    "get_neighbors",
    "initialize_map",
    "TurnContext",
    "TurnResolution",
    "TurnResolver",
    "resolve_turn",
]
