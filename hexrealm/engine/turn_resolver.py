"""Turn resolution orchestrator.

This module advances a game by exactly one turn. Phases run in a fixed
order:
1. Orders (AI backfill for civilizations that submitted nothing)
2. Diplomacy
3. Validation
4. Movement
5. Combat
6. Economy
7. Construction
8. Research
9. Events
10. Attrition & stability
11. Victory/defeat
12. Summary

Architecture:
Each phase is a method ``(state, context) -> (state, messages)``. The
phase order is the ``TurnResolver.phases`` tuple, run by a single loop that
records one ``ResolutionLog`` per phase. Combat, economy, events and the AI
governor are collaborators passed to the constructor, so they can be
replaced without touching the pipeline.

Randomness: the resolver only ever forks the generator it is given (for
the AI governor, combat and events). Forking never advances the parent, so
the persisted ``rng_state`` does not depend on how much randomness the
collaborators consumed.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, NamedTuple, Optional

from ..models import (
    ConstructionOrder,
    GamePhase,
    GameState,
    PlayerOrders,
    ResearchOrder,
    ResolutionLog,
    ResolutionPhase,
    TurnSummary,
    TurnSummaryEntry,
)
from ..themes.schema import ThemePackage
from ..utils import PRNG
from .ai_governor import OrderGenerator, fill_missing_orders, generate_ai_orders
from .combat import resolve_combat
from .diplomacy import apply_diplomatic_orders
from .economy import resolve_economy
from .events import resolve_events
from .movement import process_movement
from .validation import validate_orders
from .victory import check_victory_defeat

logger = logging.getLogger(__name__)

CombatResolver = Callable[[GameState, ThemePackage, PRNG], GameState]
EconomyResolver = Callable[[GameState, ThemePackage], GameState]
EventResolver = Callable[[GameState, ThemePackage, PRNG], GameState]

# Gameplay phases that do nothing once the game is over
GAME_OVER_SKIPPED_PHASES = frozenset(
    {
        ResolutionPhase.MOVEMENT,
        ResolutionPhase.COMBAT,
        ResolutionPhase.ECONOMY,
        ResolutionPhase.CONSTRUCTION,
        ResolutionPhase.RESEARCH,
        ResolutionPhase.EVENTS,
        ResolutionPhase.ATTRITION,
    }
)

# Log line used when a phase produced no messages of its own
DEFAULT_PHASE_MESSAGES = {
    ResolutionPhase.ORDERS: "Orders collected",
    ResolutionPhase.DIPLOMACY: "Diplomacy resolved",
    ResolutionPhase.VALIDATION: "Orders validated",
    ResolutionPhase.MOVEMENT: "Movement resolved",
    ResolutionPhase.COMBAT: "Combat resolved",
    ResolutionPhase.ECONOMY: "Economy resolved",
    ResolutionPhase.CONSTRUCTION: "Construction resolved",
    ResolutionPhase.RESEARCH: "Research resolved",
    ResolutionPhase.EVENTS: "Events resolved",
    ResolutionPhase.ATTRITION: "Attrition resolved",
    ResolutionPhase.VICTORY_DEFEAT: "Victory/defeat checked",
    ResolutionPhase.SUMMARY: "Summary generated",
}

PhaseResult = tuple[GameState, list[str]]
PhaseMethod = Callable[[GameState, "TurnContext"], PhaseResult]


@dataclass
class TurnContext:
    """Per-turn inputs threaded through the phases.

    ``orders`` is replaced as the turn progresses: backfill appends AI
    bundles and validation filters them. ``input_state`` is the state the
    turn started from and is used for summary deltas.
    """

    input_state: GameState
    orders: list[PlayerOrders]
    theme: ThemePackage
    rng: PRNG
    resolved_at: str
    game_over: bool = False
    summary: Optional[TurnSummary] = None
    logs: list[ResolutionLog] = field(default_factory=list)


class TurnResolution(NamedTuple):
    """Result of resolving one turn."""

    state: GameState
    logs: list[ResolutionLog]


class TurnResolver:
    """Runs the turn phases in order.

    Args:
        ai_governor: Produces a bundle for a civilization that submitted none
        combat: Combat collaborator
        economy: Economy collaborator
        events: Event collaborator
    """

    def __init__(
        self,
        ai_governor: OrderGenerator = generate_ai_orders,
        combat: CombatResolver = resolve_combat,
        economy: EconomyResolver = resolve_economy,
        events: EventResolver = resolve_events,
    ):
        self.ai_governor = ai_governor
        self.combat = combat
        self.economy = economy
        self.events = events

    @property
    def phases(self) -> tuple[tuple[ResolutionPhase, PhaseMethod], ...]:
        """Ordered (phase tag, phase method) pairs."""
        return (
            (ResolutionPhase.ORDERS, self.phase_backfill),
            (ResolutionPhase.DIPLOMACY, self.phase_diplomacy),
            (ResolutionPhase.VALIDATION, self.phase_validation),
            (ResolutionPhase.MOVEMENT, self.phase_movement),
            (ResolutionPhase.COMBAT, self.phase_combat),
            (ResolutionPhase.ECONOMY, self.phase_economy),
            (ResolutionPhase.CONSTRUCTION, self.phase_construction),
            (ResolutionPhase.RESEARCH, self.phase_research),
            (ResolutionPhase.EVENTS, self.phase_events),
            (ResolutionPhase.ATTRITION, self.phase_attrition),
            (ResolutionPhase.VICTORY_DEFEAT, self.phase_victory_defeat),
            (ResolutionPhase.SUMMARY, self.phase_summary),
        )

    # =========================================================================
    # PHASE METHODS
    # Each takes the current state and the turn context and returns the
    # updated state plus log messages
    # =========================================================================

    def phase_backfill(self, state: GameState, ctx: TurnContext) -> PhaseResult:
        submitted_count = len(ctx.orders)
        ctx.orders = fill_missing_orders(
            state,
            ctx.orders,
            ctx.theme,
            ctx.rng.fork(),
            ctx.resolved_at,
            generator=self.ai_governor,
        )
        filled = len(ctx.orders) - submitted_count
        return state, [f"AI filled orders for {filled} civilization(s)"]

    def phase_diplomacy(self, state: GameState, ctx: TurnContext) -> PhaseResult:
        return apply_diplomatic_orders(state, ctx.orders)

    def phase_validation(self, state: GameState, ctx: TurnContext) -> PhaseResult:
        ctx.orders, messages = validate_orders(state, ctx.orders, ctx.theme)
        return state, messages

    def phase_movement(self, state: GameState, ctx: TurnContext) -> PhaseResult:
        return process_movement(state, ctx.orders, ctx.theme)

    def phase_combat(self, state: GameState, ctx: TurnContext) -> PhaseResult:
        return self.combat(state, ctx.theme, ctx.rng.fork()), []

    def phase_economy(self, state: GameState, ctx: TurnContext) -> PhaseResult:
        return self.economy(state, ctx.theme), []

    def phase_construction(self, state: GameState, ctx: TurnContext) -> PhaseResult:
        count = _count_orders(ctx.orders, ConstructionOrder)
        return state, [f"{count} construction order(s) received"]

    def phase_research(self, state: GameState, ctx: TurnContext) -> PhaseResult:
        count = _count_orders(ctx.orders, ResearchOrder)
        return state, [f"{count} research order(s) received"]

    def phase_events(self, state: GameState, ctx: TurnContext) -> PhaseResult:
        return self.events(state, ctx.theme, ctx.rng.fork()), []

    def phase_attrition(self, state: GameState, ctx: TurnContext) -> PhaseResult:
        return state, []

    def phase_victory_defeat(self, state: GameState, ctx: TurnContext) -> PhaseResult:
        return check_victory_defeat(state, ctx.theme)

    def phase_summary(self, state: GameState, ctx: TurnContext) -> PhaseResult:
        ctx.summary = build_turn_summary(ctx.input_state, state, ctx.resolved_at)
        return state, []

    # =========================================================================
    # ORCHESTRATION
    # =========================================================================

    def resolve(
        self,
        state: GameState,
        orders: list[PlayerOrders],
        theme: ThemePackage,
        rng: PRNG,
        resolved_at: str,
    ) -> TurnResolution:
        """Resolve one turn.

        Args:
            state: State to advance (never mutated)
            orders: Submitted bundles; civilizations without one get an AI bundle
            theme: Active theme
            rng: Generator positioned at ``state.rng_state``
            resolved_at: Timestamp recorded as ``last_resolved_at``

        Returns:
            TurnResolution with the next state and one log per phase
        """
        ctx = TurnContext(
            input_state=state,
            orders=list(orders),
            theme=theme,
            rng=rng,
            resolved_at=resolved_at,
            game_over=state.phase == GamePhase.COMPLETED,
        )

        current = state
        for phase, run_phase in self.phases:
            if ctx.game_over and phase in GAME_OVER_SKIPPED_PHASES:
                messages = [f"Skipped {phase.value}: game is over"]
            else:
                current, messages = run_phase(current, ctx)
            ctx.logs.append(
                ResolutionLog(phase=phase, messages=messages or [DEFAULT_PHASE_MESSAGES[phase]])
            )
            logger.debug(f"Turn {state.turn} phase {phase.value} complete")

        resolved = replace(
            current,
            turn=current.turn + 1,
            rng_state=rng.state,
            last_resolved_at=resolved_at,
            turn_history=[*current.turn_history, ctx.summary],
        )
        logger.info(
            f"Game {state.game_id}: resolved turn {state.turn} "
            f"({len(ctx.orders)} order bundle(s), phase {resolved.phase.value})"
        )
        return TurnResolution(state=resolved, logs=ctx.logs)


def _count_orders(bundles: list[PlayerOrders], order_type: type) -> int:
    return sum(1 for bundle in bundles for order in bundle.orders if isinstance(order, order_type))


def build_turn_summary(before: GameState, after: GameState, resolved_at: str) -> TurnSummary:
    """Summarize what changed for each civilization between two states.

    Args:
        before: State at the start of the turn
        after: State after the victory/defeat phase
        resolved_at: Resolution timestamp

    Returns:
        TurnSummary keyed by ``before.turn`` with one entry per civilization
    """
    entries = []
    for civ_id, civ in after.civilizations.items():
        previous = before.civilizations.get(civ_id)
        old_resources = previous.resources if previous is not None else {}
        old_techs = set(previous.completed_techs) if previous is not None else set()
        newly_eliminated = civ.is_eliminated and (previous is None or not previous.is_eliminated)

        deltas = {}
        for resource_id in {*old_resources, *civ.resources}:
            delta = civ.resources.get(resource_id, 0) - old_resources.get(resource_id, 0)
            if delta != 0:
                deltas[resource_id] = delta

        narrative = [f"Turn {before.turn} complete."]
        if newly_eliminated:
            narrative.append(f"Civilization {civ_id} was eliminated.")

        entries.append(
            TurnSummaryEntry(
                civ_id=civ_id,
                narrative_lines=narrative,
                resource_deltas=dict(sorted(deltas.items())),
                events_activated=[
                    event.definition_id
                    for event in after.active_events
                    if event.activated_on_turn == before.turn
                    and civ_id in event.target_civilization_ids
                ],
                combat_results=[],
                tech_completed=next(
                    (tech for tech in civ.completed_techs if tech not in old_techs), None
                ),
                eliminated=civ.is_eliminated,
            )
        )

    return TurnSummary(turn_number=before.turn, resolved_at=resolved_at, entries=entries)


def resolve_turn(
    state: GameState,
    orders: list[PlayerOrders],
    theme: ThemePackage,
    rng: PRNG,
    resolved_at: str,
) -> TurnResolution:
    """Resolve one turn with the default collaborators.

    See ``TurnResolver.resolve``.
    """
    return TurnResolver().resolve(state, orders, theme, rng, resolved_at)
