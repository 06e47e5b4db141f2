"""Game state and order serialization to/from JSON.

The persisted document uses camelCase keys and is fully self-describing,
so a game can be stored as an opaque blob and resumed later with
``create_rng_from_state(state.rng_state)``.
"""

import json
from pathlib import Path
from typing import Any

from ..models import (
    ActiveEvent,
    AnyOrder,
    CivilizationState,
    CombatOutcome,
    CombatResultSummary,
    ConstructionOrder,
    DiplomaticAction,
    DiplomaticActionType,
    EventResponse,
    GameConfig,
    GamePhase,
    GameState,
    Hex,
    HexCoord,
    MoveOrder,
    PlayerOrders,
    RelationshipState,
    ResearchOrder,
    ResourceAllocationOrder,
    ResourceDeposit,
    Settlement,
    SettlementType,
    TerrainType,
    TurnSummary,
    TurnSummaryEntry,
    Unit,
)


def serialize_game_state(state: GameState) -> dict[str, Any]:
    """Convert a GameState to a JSON-compatible dictionary.

    Args:
        state: Game state to serialize

    Returns:
        Dictionary with camelCase keys
    """
    return {
        "gameId": state.game_id,
        "themeId": state.theme_id,
        "turn": state.turn,
        "phase": state.phase.value,
        "map": [[_serialize_hex(h) for h in row] for row in state.map],
        "civilizations": {
            civ_id: _serialize_civilization(civ) for civ_id, civ in state.civilizations.items()
        },
        "activeEvents": [_serialize_active_event(e) for e in state.active_events],
        "turnHistory": [_serialize_turn_summary(s) for s in state.turn_history],
        "rngSeed": state.rng_seed,
        "rngState": state.rng_state,
        "config": _serialize_config(state.config),
        "createdAt": state.created_at,
        "lastResolvedAt": state.last_resolved_at,
    }


def deserialize_game_state(data: dict[str, Any]) -> GameState:
    """Reconstruct a GameState from a dictionary.

    Args:
        data: Dictionary produced by ``serialize_game_state``

    Returns:
        Reconstructed GameState

    Raises:
        KeyError: If a required key is missing
        ValueError: If a value is invalid (including ``InvalidInput`` for
            grid/coordinate mismatches)
    """
    return GameState(
        game_id=data["gameId"],
        theme_id=data["themeId"],
        turn=data["turn"],
        phase=GamePhase(data["phase"]),
        map=[[_deserialize_hex(h) for h in row] for row in data["map"]],
        civilizations={
            civ_id: _deserialize_civilization(civ)
            for civ_id, civ in data["civilizations"].items()
        },
        active_events=[_deserialize_active_event(e) for e in data.get("activeEvents", [])],
        turn_history=[_deserialize_turn_summary(s) for s in data.get("turnHistory", [])],
        rng_seed=data["rngSeed"],
        rng_state=data["rngState"],
        config=_deserialize_config(data.get("config", {})),
        created_at=data.get("createdAt", ""),
        last_resolved_at=data.get("lastResolvedAt"),
    )


def dump_game_state(state: GameState) -> str:
    """Serialize a GameState to JSON text."""
    return json.dumps(serialize_game_state(state), indent=2)


def load_game_state(text: str) -> GameState:
    """Parse JSON text produced by ``dump_game_state``."""
    return deserialize_game_state(json.loads(text))


def save_game(state: GameState, filepath: str | Path) -> None:
    """Save game state to a JSON file."""
    Path(filepath).write_text(dump_game_state(state), encoding="utf-8")


def load_game(filepath: str | Path) -> GameState:
    """Load game state from a JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If JSON is invalid or malformed
    """
    return load_game_state(Path(filepath).read_text(encoding="utf-8"))


def serialize_player_orders(orders: PlayerOrders) -> dict[str, Any]:
    return {
        "playerId": orders.player_id,
        "civilizationId": orders.civilization_id,
        "turnNumber": orders.turn_number,
        "orders": [_serialize_order(o) for o in orders.orders],
        "submittedAt": orders.submitted_at,
    }


def deserialize_player_orders(data: dict[str, Any]) -> PlayerOrders:
    """Reconstruct an order bundle submitted by a client.

    Unknown diplomatic action strings are preserved so the turn pipeline can
    log and skip them.

    Raises:
        ValueError: If an order has an unknown ``kind``
    """
    return PlayerOrders(
        player_id=data["playerId"],
        civilization_id=data["civilizationId"],
        turn_number=data["turnNumber"],
        orders=[_deserialize_order(o) for o in data.get("orders", [])],
        submitted_at=data.get("submittedAt", ""),
    )


# ========== Map ==========


def _serialize_coord(coord: HexCoord) -> dict[str, int]:
    return {"col": coord.col, "row": coord.row}


def _deserialize_coord(data: dict[str, Any]) -> HexCoord:
    return HexCoord(col=data["col"], row=data["row"])


def _serialize_hex(hex_: Hex) -> dict[str, Any]:
    return {
        "coord": _serialize_coord(hex_.coord),
        "terrain": hex_.terrain.value,
        "settlement": (
            _serialize_settlement(hex_.settlement) if hex_.settlement is not None else None
        ),
        "controlledBy": hex_.controlled_by,
        "units": [_serialize_unit(u) for u in hex_.units],
        "resources": [{"resourceId": r.resource_id, "amount": r.amount} for r in hex_.resources],
        "exploredBy": list(hex_.explored_by),
    }


def _deserialize_hex(data: dict[str, Any]) -> Hex:
    settlement = data.get("settlement")
    return Hex(
        coord=_deserialize_coord(data["coord"]),
        terrain=TerrainType(data["terrain"]),
        settlement=_deserialize_settlement(settlement) if settlement is not None else None,
        controlled_by=data.get("controlledBy"),
        units=[_deserialize_unit(u) for u in data.get("units", [])],
        resources=[
            ResourceDeposit(resource_id=r["resourceId"], amount=r["amount"])
            for r in data.get("resources", [])
        ],
        explored_by=list(data.get("exploredBy", [])),
    )


def _serialize_settlement(settlement: Settlement) -> dict[str, Any]:
    return {
        "id": settlement.id,
        "name": settlement.name,
        "type": settlement.type.value,
        "population": settlement.population,
        "stability": settlement.stability,
        "buildings": list(settlement.buildings),
        "isCapital": settlement.is_capital,
    }


def _deserialize_settlement(data: dict[str, Any]) -> Settlement:
    return Settlement(
        id=data["id"],
        name=data["name"],
        type=SettlementType(data["type"]),
        population=data["population"],
        stability=data["stability"],
        buildings=list(data.get("buildings", [])),
        is_capital=data.get("isCapital", False),
    )


def _serialize_unit(unit: Unit) -> dict[str, Any]:
    return {
        "id": unit.id,
        "definitionId": unit.definition_id,
        "civilizationId": unit.civilization_id,
        "strength": unit.strength,
        "morale": unit.morale,
        "movesRemaining": unit.moves_remaining,
        "isGarrisoned": unit.is_garrisoned,
    }


def _deserialize_unit(data: dict[str, Any]) -> Unit:
    return Unit(
        id=data["id"],
        definition_id=data["definitionId"],
        civilization_id=data["civilizationId"],
        strength=data["strength"],
        morale=data["morale"],
        moves_remaining=data["movesRemaining"],
        is_garrisoned=data.get("isGarrisoned", False),
    )


# ========== Civilizations, events, config ==========


def _serialize_civilization(civ: CivilizationState) -> dict[str, Any]:
    return {
        "id": civ.id,
        "playerId": civ.player_id,
        "resources": dict(civ.resources),
        "techProgress": dict(civ.tech_progress),
        "completedTechs": list(civ.completed_techs),
        "culturalInfluence": civ.cultural_influence,
        "stability": civ.stability,
        "diplomaticRelations": {k: v.value for k, v in civ.diplomatic_relations.items()},
        "tensionAxes": dict(civ.tension_axes),
        "isEliminated": civ.is_eliminated,
        "turnsMissingOrders": civ.turns_missing_orders,
    }


def _deserialize_civilization(data: dict[str, Any]) -> CivilizationState:
    return CivilizationState(
        id=data["id"],
        player_id=data.get("playerId"),
        resources=dict(data.get("resources", {})),
        tech_progress=dict(data.get("techProgress", {})),
        completed_techs=list(data.get("completedTechs", [])),
        cultural_influence=data.get("culturalInfluence", 0),
        stability=data.get("stability", 0),
        diplomatic_relations={
            k: RelationshipState(v) for k, v in data.get("diplomaticRelations", {}).items()
        },
        tension_axes=dict(data.get("tensionAxes", {})),
        is_eliminated=data.get("isEliminated", False),
        turns_missing_orders=data.get("turnsMissingOrders", 0),
    )


def _serialize_active_event(event: ActiveEvent) -> dict[str, Any]:
    return {
        "instanceId": event.instance_id,
        "definitionId": event.definition_id,
        "targetCivilizationIds": list(event.target_civilization_ids),
        "activatedOnTurn": event.activated_on_turn,
        "expiresOnTurn": event.expires_on_turn,
        "responses": dict(event.responses),
        "resolved": event.resolved,
    }


def _deserialize_active_event(data: dict[str, Any]) -> ActiveEvent:
    return ActiveEvent(
        instance_id=data["instanceId"],
        definition_id=data["definitionId"],
        target_civilization_ids=list(data.get("targetCivilizationIds", [])),
        activated_on_turn=data.get("activatedOnTurn", 0),
        expires_on_turn=data.get("expiresOnTurn"),
        responses=dict(data.get("responses", {})),
        resolved=data.get("resolved", False),
    )


def _serialize_config(config: GameConfig) -> dict[str, Any]:
    return {
        "maxTurns": config.max_turns,
        "turnDeadlineDays": config.turn_deadline_days,
        "allowAIGovernor": config.allow_ai_governor,
        "difficultyModifier": config.difficulty_modifier,
        "fogOfWar": config.fog_of_war,
    }


def _deserialize_config(data: dict[str, Any]) -> GameConfig:
    defaults = GameConfig()
    return GameConfig(
        max_turns=data.get("maxTurns"),
        turn_deadline_days=data.get("turnDeadlineDays", defaults.turn_deadline_days),
        allow_ai_governor=data.get("allowAIGovernor", defaults.allow_ai_governor),
        difficulty_modifier=data.get("difficultyModifier", defaults.difficulty_modifier),
        fog_of_war=data.get("fogOfWar", defaults.fog_of_war),
    )


# ========== Turn history ==========


def _serialize_turn_summary(summary: TurnSummary) -> dict[str, Any]:
    return {
        "turnNumber": summary.turn_number,
        "resolvedAt": summary.resolved_at,
        "entries": [
            {
                "civId": entry.civ_id,
                "narrativeLines": list(entry.narrative_lines),
                "resourceDeltas": dict(entry.resource_deltas),
                "eventsActivated": list(entry.events_activated),
                "combatResults": [
                    {
                        "attackerCivId": result.attacker_civ_id,
                        "defenderCivId": result.defender_civ_id,
                        "coord": _serialize_coord(result.coord),
                        "attackerStrengthLost": result.attacker_strength_lost,
                        "defenderStrengthLost": result.defender_strength_lost,
                        "outcome": result.outcome.value,
                    }
                    for result in entry.combat_results
                ],
                "techCompleted": entry.tech_completed,
                "eliminated": entry.eliminated,
            }
            for entry in summary.entries
        ],
    }


def _deserialize_turn_summary(data: dict[str, Any]) -> TurnSummary:
    return TurnSummary(
        turn_number=data["turnNumber"],
        resolved_at=data["resolvedAt"],
        entries=[
            TurnSummaryEntry(
                civ_id=entry["civId"],
                narrative_lines=list(entry.get("narrativeLines", [])),
                resource_deltas=dict(entry.get("resourceDeltas", {})),
                events_activated=list(entry.get("eventsActivated", [])),
                combat_results=[
                    CombatResultSummary(
                        attacker_civ_id=result["attackerCivId"],
                        defender_civ_id=result["defenderCivId"],
                        coord=_deserialize_coord(result["coord"]),
                        attacker_strength_lost=result["attackerStrengthLost"],
                        defender_strength_lost=result["defenderStrengthLost"],
                        outcome=CombatOutcome(result["outcome"]),
                    )
                    for result in entry.get("combatResults", [])
                ],
                tech_completed=entry.get("techCompleted"),
                eliminated=entry.get("eliminated", False),
            )
            for entry in data.get("entries", [])
        ],
    )


# ========== Orders ==========


def _serialize_order(order: AnyOrder) -> dict[str, Any]:
    if isinstance(order, MoveOrder):
        return {
            "kind": order.kind,
            "unitId": order.unit_id,
            "path": [_serialize_coord(c) for c in order.path],
        }
    if isinstance(order, ConstructionOrder):
        return {
            "kind": order.kind,
            "settlementId": order.settlement_id,
            "buildingDefinitionId": order.building_definition_id,
        }
    if isinstance(order, ResearchOrder):
        return {
            "kind": order.kind,
            "techId": order.tech_id,
            "pointsAllocated": order.points_allocated,
        }
    if isinstance(order, DiplomaticAction):
        action_type = order.action_type
        return {
            "kind": order.kind,
            "actionType": (
                action_type.value
                if isinstance(action_type, DiplomaticActionType)
                else action_type
            ),
            "targetCivId": order.target_civ_id,
            "payload": dict(order.payload),
        }
    if isinstance(order, EventResponse):
        return {
            "kind": order.kind,
            "eventInstanceId": order.event_instance_id,
            "choiceId": order.choice_id,
        }
    if isinstance(order, ResourceAllocationOrder):
        return {"kind": order.kind, "allocations": dict(order.allocations)}
    raise ValueError(f"Cannot serialize order of type {type(order).__name__}")


def _deserialize_order(data: dict[str, Any]) -> AnyOrder:
    kind = data.get("kind")
    if kind == MoveOrder.kind:
        return MoveOrder(
            unit_id=data["unitId"],
            path=[_deserialize_coord(c) for c in data.get("path", [])],
        )
    if kind == ConstructionOrder.kind:
        return ConstructionOrder(
            settlement_id=data["settlementId"],
            building_definition_id=data["buildingDefinitionId"],
        )
    if kind == ResearchOrder.kind:
        return ResearchOrder(tech_id=data["techId"], points_allocated=data["pointsAllocated"])
    if kind == DiplomaticAction.kind:
        return DiplomaticAction(
            action_type=data["actionType"],
            target_civ_id=data["targetCivId"],
            payload=dict(data.get("payload", {})),
        )
    if kind == EventResponse.kind:
        return EventResponse(event_instance_id=data["eventInstanceId"], choice_id=data["choiceId"])
    if kind == ResourceAllocationOrder.kind:
        return ResourceAllocationOrder(allocations=dict(data.get("allocations", {})))
    raise ValueError(f"Unknown order kind: {kind!r}")
