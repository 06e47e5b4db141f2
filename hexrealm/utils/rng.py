"""Seedable, forkable RNG for deterministic turn resolution.

All randomness in the engine goes through this module. The generator is
Mulberry32 over a single 32-bit state, so a persisted game can resume the
exact sequence from one integer.
"""

import math
from collections.abc import Mapping, Sequence
from typing import Any, NamedTuple

from .constants import (
    FNV_OFFSET_BASIS,
    FNV_PRIME,
    MULBERRY_INCREMENT,
    UINT32_MASK,
    UINT32_RANGE,
)
from .errors import InvalidInput


def _imul(a: int, b: int) -> int:
    """Multiply two 32-bit values, keeping the low 32 bits."""
    return (a * b) & UINT32_MASK


def hash_seed(text: str) -> int:
    """Hash a human-readable seed (e.g. a game id) into a uint32.

    FNV-1a over the string's UTF-16 code units. Lone surrogates are hashed
    as-is, so every str has a hash.

    Args:
        text: Arbitrary seed string

    Returns:
        Unsigned 32-bit hash
    """
    data = text.encode("utf-16-le", "surrogatepass")
    h = FNV_OFFSET_BASIS
    for i in range(0, len(data), 2):
        h ^= data[i] | (data[i + 1] << 8)
        h = _imul(h, FNV_PRIME)
    return h


def _mulberry32_step(state: int) -> tuple[float, int]:
    """Run one Mulberry32 step.

    Returns:
        Tuple of (value in [0, 1), next state)
    """
    next_state = (state + MULBERRY_INCREMENT) & UINT32_MASK
    s = next_state
    s = _imul(s ^ (s >> 15), s | 1)
    s ^= (s + _imul(s ^ (s >> 7), s | 61)) & UINT32_MASK
    s = (s ^ (s >> 14)) & UINT32_MASK
    return s / UINT32_RANGE, next_state


class PRNG:
    """Deterministic Mulberry32 generator with a fork primitive.

    An instance owns its state exclusively. ``fork()`` hands out a new,
    independent generator seeded from the current state without advancing
    this one, so subsystems (combat, events, AI) can consume randomness
    without disturbing each other or the caller's sequence.
    """

    __slots__ = ("_state",)

    def __init__(self, state: int):
        """Initialize RNG with a 32-bit state.

        Args:
            state: Integer state (reduced modulo 2**32)
        """
        self._state = state & UINT32_MASK

    @property
    def state(self) -> int:
        """Current 32-bit state; persist this to resume the sequence."""
        return self._state

    def next(self) -> float:
        """Advance and return a float in [0.0, 1.0)."""
        value, self._state = _mulberry32_step(self._state)
        return value

    def next_int(self, min_value: int, max_value: int) -> int:
        """Return random integer in range [min_value, max_value], inclusive.

        Args:
            min_value: Lower bound (inclusive)
            max_value: Upper bound (inclusive)

        Returns:
            Random integer between the bounds
        """
        return min_value + math.floor(self.next() * (max_value - min_value + 1))

    def fork(self) -> "PRNG":
        """Return an independent generator starting from the current state."""
        return PRNG(self._state)

    def __repr__(self) -> str:
        return f"PRNG(state={self._state:#010x})"


def create_rng(seed: int) -> PRNG:
    """Create a generator whose state is ``seed`` (as uint32)."""
    return PRNG(seed)


def create_rng_from_seed(seed: str) -> PRNG:
    """Create a generator from a human-readable seed string."""
    return PRNG(hash_seed(seed))


def create_rng_from_state(state: int) -> PRNG:
    """Recreate a generator from a persisted ``GameState.rng_state``."""
    return PRNG(state)


class WeightedItem(NamedTuple):
    """A candidate for ``weighted_choice``."""

    value: Any
    weight: float


def _unpack(item: Any) -> tuple[Any, float]:
    if isinstance(item, Mapping):
        return item["value"], item["weight"]
    value, weight = item
    return value, weight


def weighted_choice(items: Sequence[Any], rng: PRNG) -> Any:
    """Pick one value with probability proportional to its weight.

    Consumes exactly one ``rng.next()``. If floating-point error leaves a
    positive remainder after scanning every item, the last item is chosen.

    Args:
        items: ``WeightedItem``/``(value, weight)`` pairs or
            ``{"value": ..., "weight": ...}`` mappings
        rng: Generator to draw from

    Returns:
        The selected value

    Raises:
        InvalidInput: If ``items`` is empty or the total weight is not positive
    """
    pairs = [_unpack(item) for item in items]
    if not pairs:
        raise InvalidInput("weighted_choice: items must not be empty")

    total_weight = sum(weight for _, weight in pairs)
    if total_weight <= 0:
        raise InvalidInput(
            f"weighted_choice: total weight must be positive, got {total_weight}"
        )

    roll = rng.next() * total_weight
    for value, weight in pairs:
        roll -= weight
        if roll <= 0:
            return value

    return pairs[-1][0]
