"""Tests for victory and defeat checking."""

from dataclasses import replace

from hexrealm.engine.victory import check_victory_defeat
from hexrealm.models import GameConfig, GamePhase, HexCoord
from hexrealm.themes import load_theme

EAST_CAPITAL = HexCoord(8, 1)
SOUTH_CAPITAL = HexCoord(7, 6)


def create_theme(theme_data, victory=(), defeat=()):
    theme_data["victoryConditions"] = list(victory)
    theme_data["defeatConditions"] = list(defeat)
    return load_theme(theme_data)


def update_civ(state, civ_id, **changes):
    civs = dict(state.civilizations)
    civs[civ_id] = replace(civs[civ_id], **changes)
    return replace(state, civilizations=civs)


def capture_hex(state, coord, new_owner):
    return state.with_hexes({coord: replace(state.hex_at(coord), controlled_by=new_owner)})


class TestDefeat:
    def test_nothing_happens_at_start(self, game_state, theme):
        """Test a fresh game has no defeats or winner."""
        state, messages = check_victory_defeat(game_state, theme)
        assert state.phase == GamePhase.ACTIVE
        assert state.living_civ_ids() == ["north", "south", "east"]
        assert messages == []

    def test_capital_lost(self, game_state, theme):
        """Test losing the capital eliminates a civ."""
        state = capture_hex(game_state, EAST_CAPITAL, "north")
        new_state, messages = check_victory_defeat(state, theme)

        assert new_state.civilizations["east"].is_eliminated
        assert not new_state.civilizations["north"].is_eliminated
        assert messages == ["Civ east: capital lost, eliminated"]

    def test_stability_zero(self, game_state, theme_data):
        """Test zero stability eliminates a civ."""
        theme = create_theme(theme_data, defeat=[{"kind": "stability_zero"}])
        state = update_civ(game_state, "south", stability=0)
        new_state, messages = check_victory_defeat(state, theme)

        assert new_state.civilizations["south"].is_eliminated
        assert messages == ["Civ south: stability at zero, eliminated"]

    def test_stability_zero_ignores_turns_at_zero(self, game_state, theme_data):
        """Test elimination happens on the first turn at zero whatever turnsAtZero says."""
        theme = create_theme(theme_data, defeat=[{"kind": "stability_zero", "turnsAtZero": 3}])
        state = update_civ(game_state, "south", stability=0)
        new_state, _ = check_victory_defeat(state, theme)

        assert theme.defeat_conditions[0].turns_at_zero == 3
        assert new_state.civilizations["south"].is_eliminated

    def test_eliminated_by_combat(self, game_state, theme_data):
        """Test a civ with no units or settlements is eliminated."""
        theme = create_theme(theme_data, defeat=[{"kind": "eliminated_by_combat"}])
        south_capital = game_state.hex_at(SOUTH_CAPITAL)
        state = game_state.with_hexes(
            {SOUTH_CAPITAL: replace(south_capital, units=[], controlled_by=None)}
        )
        new_state, messages = check_victory_defeat(state, theme)

        assert new_state.civilizations["south"].is_eliminated
        assert "no units or settlements" in messages[0]

    def test_units_alone_keep_civ_alive(self, game_state, theme_data):
        """Test surviving units keep a civ in the game."""
        theme = create_theme(theme_data, defeat=[{"kind": "eliminated_by_combat"}])
        state = capture_hex(game_state, SOUTH_CAPITAL, None)
        new_state, messages = check_victory_defeat(state, theme)
        assert not new_state.civilizations["south"].is_eliminated
        assert messages == []

    def test_already_eliminated_not_reported_again(self, game_state, theme):
        """Test an eliminated civ is not reported twice."""
        state = capture_hex(game_state, EAST_CAPITAL, "north")
        state = update_civ(state, "east", is_eliminated=True)
        _, messages = check_victory_defeat(state, theme)
        assert messages == []

    def test_input_state_unchanged(self, game_state, theme):
        """Test checking never mutates the given state."""
        state = capture_hex(game_state, EAST_CAPITAL, "north")
        check_victory_defeat(state, theme)
        assert not state.civilizations["east"].is_eliminated


class TestVictory:
    def test_eliminate_all(self, game_state, theme_data):
        """Test the last civ standing wins."""
        theme = create_theme(theme_data, victory=[{"kind": "eliminate_all"}])
        state = update_civ(game_state, "south", is_eliminated=True)
        state = update_civ(state, "east", is_eliminated=True)
        new_state, messages = check_victory_defeat(state, theme)

        assert new_state.phase == GamePhase.COMPLETED
        assert messages == ["Civ north: all others eliminated, victory"]

    def test_eliminate_all_after_same_turn_defeats(self, game_state, theme_data):
        """Defeats are applied before victory is checked."""
        theme = create_theme(
            theme_data, victory=[{"kind": "eliminate_all"}], defeat=[{"kind": "capital_lost"}]
        )
        state = capture_hex(game_state, EAST_CAPITAL, "north")
        state = capture_hex(state, SOUTH_CAPITAL, "north")
        new_state, messages = check_victory_defeat(state, theme)

        assert new_state.phase == GamePhase.COMPLETED
        assert messages[-1] == "Civ north: all others eliminated, victory"

    def test_control_hexes(self, game_state, theme_data):
        """Test controlling enough hexes wins."""
        theme = create_theme(theme_data, victory=[{"kind": "control_hexes", "count": 5}])
        new_state, messages = check_victory_defeat(game_state, theme)

        assert new_state.phase == GamePhase.COMPLETED
        assert len(messages) == 1
        assert messages[0].startswith("Civ north: controls")

    def test_resource_accumulate(self, game_state, theme_data):
        """Test stockpiling a resource wins."""
        theme = create_theme(
            theme_data,
            victory=[{"kind": "resource_accumulate", "resourceId": "grain", "amount": 55}],
        )
        new_state, messages = check_victory_defeat(game_state, theme)
        assert new_state.phase == GamePhase.COMPLETED
        assert messages == ["Civ south: accumulated 55.0 grain, victory"]

    def test_tech_advance(self, game_state, theme_data):
        """Test completing the target tech wins."""
        theme = create_theme(theme_data, victory=[{"kind": "tech_advance", "techId": "chivalry"}])
        _, messages = check_victory_defeat(game_state, theme)
        assert messages == ["Civ south: tech advance chivalry, victory"]

    def test_survive_turns(self, game_state, theme):
        """Test surviving the configured turns wins."""
        state = replace(game_state, turn=50)
        new_state, messages = check_victory_defeat(state, theme)
        assert new_state.phase == GamePhase.COMPLETED
        assert messages == ["Civ north: survived 50 turns, victory"]

    def test_only_first_winner_reported(self, game_state, theme_data):
        """Test only the first qualifying civ is declared winner."""
        theme = create_theme(theme_data, victory=[{"kind": "survive_turns", "turns": 1}])
        _, messages = check_victory_defeat(game_state, theme)
        assert messages == ["Civ north: survived 1 turns, victory"]

    def test_eliminated_civ_cannot_win(self, game_state, theme_data):
        """Test eliminated civs are never winners."""
        theme = create_theme(theme_data, victory=[{"kind": "tech_advance", "techId": "chivalry"}])
        state = update_civ(game_state, "south", is_eliminated=True)
        new_state, messages = check_victory_defeat(state, theme)
        assert new_state.phase == GamePhase.ACTIVE
        assert messages == []

    def test_custom_conditions_ignored(self, game_state, theme_data):
        """Test custom conditions are not evaluated."""
        theme = create_theme(
            theme_data,
            victory=[{"kind": "custom", "key": "prophecy"}],
            defeat=[{"kind": "custom", "key": "curse"}],
        )
        new_state, messages = check_victory_defeat(game_state, theme)
        assert new_state.phase == GamePhase.ACTIVE
        assert messages == []


class TestTurnLimit:
    def test_limit_reached_completes_game(self, game_state, theme):
        """Test reaching max_turns ends the game."""
        state = replace(game_state, config=GameConfig(max_turns=1))
        new_state, messages = check_victory_defeat(state, theme)
        assert new_state.phase == GamePhase.COMPLETED
        assert messages == ["Turn limit 1 reached, game over"]

    def test_limit_not_reached(self, game_state, theme):
        """Test the game continues below max_turns."""
        state = replace(game_state, config=GameConfig(max_turns=10))
        new_state, messages = check_victory_defeat(state, theme)
        assert new_state.phase == GamePhase.ACTIVE
        assert messages == []

    def test_victory_takes_precedence(self, game_state, theme_data):
        """Test a winner is reported instead of the turn limit."""
        theme = create_theme(theme_data, victory=[{"kind": "survive_turns", "turns": 1}])
        state = replace(game_state, config=GameConfig(max_turns=1))
        _, messages = check_victory_defeat(state, theme)
        assert messages == ["Civ north: survived 1 turns, victory"]
