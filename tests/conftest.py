"""Shared test fixtures and helpers."""

import copy

import pytest

from hexrealm.engine.game_initializer import PlayerMapping, initialize_game_state
from hexrealm.themes import load_theme

# --- Standard theme document (camelCase, as shipped in theme.json) ---

BASE_THEME = {
    "id": "test-realm",
    "name": "Test Realm",
    "description": "Small ruleset used by the test suite",
    "source": "tests",
    "civilizations": [
        {
            "id": "north",
            "name": "Northmarch",
            "color": "#3355aa",
            "startingResources": {"gold": 100, "grain": 50},
            "startingTechs": [],
        },
        {
            "id": "south",
            "name": "Southreach",
            "color": "#aa5533",
            "startingResources": {"gold": 80, "grain": 60},
            "startingTechs": ["chivalry"],
        },
        {
            "id": "east",
            "name": "Eastholm",
            "color": "#33aa55",
            "startingResources": {"gold": 90},
            "startingTechs": [],
        },
    ],
    "map": {
        "cols": 10,
        "rows": 8,
        "seaEdge": False,
        "defaultTerrainWeights": {"plains": 60, "forest": 25, "mountains": 15},
        "zones": [
            {
                "id": "north-hills",
                "name": "Northern Hills",
                "shape": {"kind": "bounds", "minCol": 0, "maxCol": 4, "minRow": 0, "maxRow": 3},
                "terrainWeights": {"mountains": 40},
                "initialControlledBy": "north",
            },
        ],
        "settlementAnchors": [
            {
                "id": "north-capital",
                "name": "Highgate",
                "type": "capital",
                "approxCol": 2,
                "approxRow": 2,
                "civilizationId": "north",
                "isCapital": True,
                "startingPopulation": 5,
                "startingStability": 80,
                "startingBuildings": ["granary"],
            },
            {
                "id": "north-town",
                "name": "Fellbrook",
                "type": "town",
                "approxCol": 3.4,
                "approxRow": 3.5,
                "civilizationId": "north",
                "isCapital": False,
                "startingPopulation": 2,
                "startingStability": 61,
                "startingBuildings": [],
            },
            {
                "id": "south-capital",
                "name": "Sunhold",
                "type": "capital",
                "approxCol": 7,
                "approxRow": 6,
                "civilizationId": "south",
                "isCapital": True,
                "startingPopulation": 4,
                "startingStability": 75,
                "startingBuildings": [],
            },
            {
                "id": "east-capital",
                "name": "Dawnport",
                "type": "capital",
                "approxCol": 8,
                "approxRow": 1,
                "civilizationId": "east",
                "isCapital": True,
                "startingPopulation": 3,
                "startingStability": 65,
                "startingBuildings": [],
            },
        ],
    },
    "resources": [
        {"id": "gold", "name": "Gold", "baseYield": 2},
        {"id": "grain", "name": "Grain", "baseYield": 1, "terrainYields": {"plains": 2}},
    ],
    "techTree": [
        {"id": "bronze", "name": "Bronze Working", "cost": 20, "era": "ancient"},
        {
            "id": "chivalry",
            "name": "Chivalry",
            "cost": 60,
            "prerequisites": ["bronze"],
            "effects": [{"kind": "unlock_unit", "unitDefinitionId": "knights"}],
            "era": "medieval",
        },
    ],
    "buildings": [
        {"id": "granary", "name": "Granary", "cost": 30, "upkeep": 1, "maxPerSettlement": 1},
    ],
    "units": [
        {
            "id": "knights",
            "name": "Knights",
            "cost": 40,
            "strength": 8,
            "morale": 70,
            "moves": 3,
            "prerequisiteTech": "chivalry",
        },
        {
            "id": "militia",
            "name": "Militia",
            "cost": 10,
            "strength": 3,
            "morale": 50,
            "moves": 2,
            "prerequisiteTech": None,
        },
    ],
    "events": [],
    "diplomacyOptions": [
        {"actionType": "declare_war", "allowedStates": ["peace", "truce"]},
    ],
    "victoryConditions": [{"kind": "survive_turns", "turns": 50}],
    "defeatConditions": [{"kind": "capital_lost"}],
    "mechanics": {
        "tensionAxes": [
            {"id": "faith", "name": "Faith", "minValue": -100, "maxValue": 100},
        ],
    },
    "flavor": {"turnName": "Season", "currencyName": "gold"},
}


# --- Fixtures ---


@pytest.fixture
def theme_data():
    """Deep copy of the standard theme document, safe to modify."""
    return copy.deepcopy(BASE_THEME)


@pytest.fixture
def theme(theme_data):
    """Validated standard theme."""
    return load_theme(theme_data)


@pytest.fixture
def game_state(theme):
    """Freshly initialized game (seed=42); north is human, the rest AI."""
    return initialize_game_state(
        game_id="game-1",
        theme=theme,
        player_mappings=[PlayerMapping(civ_id="north", player_id="player-1")],
        seed=42,
        created_at="2024-01-01T00:00:00Z",
    )
