"""Utility functions and constants for hexrealm."""

from .constants import (
    DEFAULT_CIV_STABILITY,
    DEFAULT_DIFFICULTY_MODIFIER,
    DEFAULT_TURN_DEADLINE_DAYS,
    INITIAL_TURN,
    STABILITY_MIN,
    STARTING_UNITS_PER_CIV,
)
from .distance import hex_distance, offset_to_cube
from .errors import InvalidInput, ThemeValidationError
from .rng import (
    PRNG,
    WeightedItem,
    create_rng,
    create_rng_from_seed,
    create_rng_from_state,
    hash_seed,
    weighted_choice,
)

__all__ = [
    "DEFAULT_CIV_STABILITY",
    "DEFAULT_DIFFICULTY_MODIFIER",
    "DEFAULT_TURN_DEADLINE_DAYS",
    "INITIAL_TURN",
    "STABILITY_MIN",
    "STARTING_UNITS_PER_CIV",
    "hex_distance",
    "offset_to_cube",
    "InvalidInput",
    "ThemeValidationError",
    "PRNG",
    "WeightedItem",
    "create_rng",
    "create_rng_from_seed",
    "create_rng_from_state",
    "hash_seed",
    "weighted_choice",
]
