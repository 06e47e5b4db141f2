"""Tests for game state initialization."""

import logging

import pytest

from hexrealm.engine.game_initializer import (
    PlayerMapping,
    generate_game_seed,
    initialize_game_state,
)
from hexrealm.engine.map_generator import generate_map, get_neighbors
from hexrealm.models import GameConfig, GamePhase, HexCoord, RelationshipState
from hexrealm.themes import load_theme
from hexrealm.utils import InvalidInput, create_rng, hash_seed

CREATED_AT = "2024-01-01T00:00:00Z"
NORTH_CAPITAL = HexCoord(2, 2)


def create_game(theme, seed=42, mappings=()):
    return initialize_game_state(
        game_id="game-x",
        theme=theme,
        player_mappings=list(mappings),
        seed=seed,
        created_at=CREATED_AT,
    )


def units_of(state, civ_id):
    return [u for h in state.hexes() for u in h.units if u.civilization_id == civ_id]


class TestInitialState:
    def test_top_level_fields(self, game_state, theme):
        """Test a new game starts active on turn 1 with empty history."""
        assert game_state.game_id == "game-1"
        assert game_state.theme_id == "test-realm"
        assert game_state.turn == 1
        assert game_state.phase == GamePhase.ACTIVE
        assert game_state.rng_seed == 42
        assert game_state.config == GameConfig()
        assert game_state.created_at == CREATED_AT
        assert game_state.last_resolved_at is None
        assert game_state.turn_history == []
        assert game_state.active_events == []

    def test_rng_state_after_map_generation(self, game_state, theme):
        """Test the stored RNG state is the position after map generation."""
        rng = create_rng(42)
        generate_map(theme.map, rng)
        assert game_state.rng_state == rng.state

    def test_map_matches_generator(self, game_state, theme):
        """Test the game map is the generator's output for the seed."""
        grid = generate_map(theme.map, create_rng(42))
        for expected_row, row in zip(grid, game_state.map):
            assert [h.terrain for h in row] == [h.terrain for h in expected_row]
        assert game_state.rows == 8
        assert game_state.cols == 10

    def test_player_mapping(self, game_state):
        """Test only mapped civs get a player id."""
        assert game_state.civilizations["north"].player_id == "player-1"
        assert game_state.civilizations["south"].player_id is None
        assert game_state.civilizations["east"].player_id is None

    def test_unknown_civ_mapping_ignored(self, theme):
        """Test a mapping for a civ the theme lacks is dropped."""
        state = create_game(theme, mappings=[PlayerMapping(civ_id="nowhere", player_id="p9")])
        assert all(civ.player_id is None for civ in state.civilizations.values())

    def test_civilizations_follow_theme_order(self, game_state):
        """Test civ insertion order matches the theme."""
        assert list(game_state.civilizations) == ["north", "south", "east"]


class TestCivilizations:
    def test_starting_resources_and_techs(self, game_state):
        """Test civs start with theme resources and techs."""
        north = game_state.civilizations["north"]
        south = game_state.civilizations["south"]
        assert north.resources == {"gold": 100, "grain": 50}
        assert north.completed_techs == []
        assert south.completed_techs == ["chivalry"]
        assert north.tech_progress == {}
        assert north.cultural_influence == 0
        assert north.turns_missing_orders == 0
        assert not north.is_eliminated

    def test_stability_is_rounded_anchor_mean(self, game_state):
        """Test stability is the rounded mean of the civ's anchors."""
        # north anchors: 80 and 61 -> 70.5 rounds to 71
        assert game_state.civilizations["north"].stability == 71
        assert game_state.civilizations["south"].stability == 75
        assert game_state.civilizations["east"].stability == 65

    def test_stability_defaults_without_anchors(self, theme_data):
        """Test a civ with no anchors starts at the default stability."""
        theme_data["civilizations"].append({"id": "west", "name": "Westmark"})
        state = create_game(load_theme(theme_data))
        assert state.civilizations["west"].stability == 70

    def test_everyone_starts_at_peace(self, game_state):
        """Test every civ is at peace with every other civ."""
        for civ_id, civ in game_state.civilizations.items():
            others = {c for c in game_state.civilizations if c != civ_id}
            assert set(civ.diplomatic_relations) == others
            assert all(r == RelationshipState.PEACE for r in civ.diplomatic_relations.values())

    def test_tension_axes_start_at_zero(self, game_state):
        """Test declared tension axes start at zero."""
        assert game_state.civilizations["east"].tension_axes == {"faith": 0}


class TestStartingForces:
    def test_two_garrisoned_units_on_capital(self, game_state):
        """Test each capital holds two garrisoned starting units."""
        capital = game_state.hex_at(NORTH_CAPITAL)
        assert capital.settlement.id == "north-capital"
        assert [u.id for u in capital.units] == ["unit-start-north-1", "unit-start-north-2"]
        assert all(u.is_garrisoned for u in capital.units)
        assert all(u.civilization_id == "north" for u in capital.units)

    def test_unit_stats_from_definition(self, game_state):
        """Test starting unit stats come from the unit definition."""
        unit = game_state.hex_at(NORTH_CAPITAL).units[0]
        assert unit.definition_id == "militia"
        assert unit.strength == 3
        assert unit.morale == 50
        assert unit.moves_remaining == 2

    def test_first_unlocked_definition_used(self, game_state):
        """Test south knows chivalry, so it starts with knights."""
        assert {u.definition_id for u in units_of(game_state, "south")} == {"knights"}
        assert {u.definition_id for u in units_of(game_state, "east")} == {"militia"}

    def test_units_only_on_capitals(self, game_state):
        """Test no units are placed away from capitals."""
        for hex_ in game_state.hexes():
            if hex_.units:
                assert hex_.settlement is not None and hex_.settlement.is_capital
        assert len(units_of(game_state, "south")) == 2
        assert len(units_of(game_state, "east")) == 2

    def test_capital_surroundings_explored(self, game_state):
        """Test the capital and its neighbors start explored."""
        explored = {h.coord for h in game_state.hexes() if "north" in h.explored_by}
        expected = {NORTH_CAPITAL, *get_neighbors(NORTH_CAPITAL, 10, 8)}
        assert explored == expected
        assert len(expected) == 7

    def test_civ_without_capital_gets_no_units(self, theme_data, caplog):
        """Test a civ with no capital anchor is logged and left unequipped."""
        for anchor in theme_data["map"]["settlementAnchors"]:
            if anchor["civilizationId"] == "east":
                anchor["isCapital"] = False
        with caplog.at_level(logging.WARNING):
            state = create_game(load_theme(theme_data))

        assert units_of(state, "east") == []
        assert not any("east" in h.explored_by for h in state.hexes())
        assert "Civilization east has no capital" in caplog.text

    def test_no_unit_definitions(self, theme_data):
        """Test a theme without units still explores around capitals."""
        theme_data["units"] = []
        state = create_game(load_theme(theme_data))
        assert all(not h.units for h in state.hexes())
        assert "north" in state.hex_at(NORTH_CAPITAL).explored_by


class TestDeterminism:
    def test_same_seed_same_state(self, theme):
        """Test identical inputs build identical states."""
        assert create_game(theme, seed=7) == create_game(theme, seed=7)

    def test_different_seed_different_rng_state(self, theme):
        """Test different seeds leave the RNG in different positions."""
        assert create_game(theme, seed=7).rng_state != create_game(theme, seed=8).rng_state

    def test_game_seed_from_id(self):
        """Test the game seed is the hash of the game id."""
        assert generate_game_seed("game-1") == hash_seed("game-1")

    def test_unplaceable_anchor_raises(self, theme_data):
        """Test an anchor with no free hex aborts initialization."""
        theme_data["map"]["cols"] = 1
        theme_data["map"]["rows"] = 1
        theme_data["map"]["zones"] = []
        with pytest.raises(InvalidInput, match="Could not place anchor"):
            create_game(load_theme(theme_data))
