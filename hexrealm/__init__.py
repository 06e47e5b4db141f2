"""Deterministic simulation core for a turn-based hex strategy game."""

from .engine import (
    PlayerMapping,
    TurnResolution,
    TurnResolver,
    generate_game_seed,
    generate_map,
    get_neighbors,
    initialize_game_state,
    resolve_diplomacy,
    resolve_turn,
)
from .themes import load_theme, load_theme_from_json
from .utils import (
    PRNG,
    InvalidInput,
    ThemeValidationError,
    create_rng,
    create_rng_from_seed,
    create_rng_from_state,
    hash_seed,
    weighted_choice,
)
from .utils.serialization import (
    deserialize_game_state,
    deserialize_player_orders,
    dump_game_state,
    load_game_state,
    serialize_game_state,
)

__version__ = "0.1.0"

__all__ = [
    "PlayerMapping",
    "TurnResolution",
    "TurnResolver",
    "generate_game_seed",
    "generate_map",
    "get_neighbors",
    "initialize_game_state",
    "resolve_diplomacy",
    "resolve_turn",
    "load_theme",
    "load_theme_from_json",
    "PRNG",
    "InvalidInput",
    "ThemeValidationError",
    "create_rng",
    "create_rng_from_seed",
    "create_rng_from_state",
    "hash_seed",
    "weighted_choice",
    "deserialize_game_state",
    "deserialize_player_orders",
    "dump_game_state",
    "load_game_state",
    "serialize_game_state",
]
