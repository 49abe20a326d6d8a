"""
Factory functions for creating games and hand-tuned test scenarios.

Scenario games have their state edited after creation, so their histories
do not replay. They exist for manual testing of edge cases (income on the
last space, leather pickups, tiny markets, end of game).
"""

from typing import Callable, Dict, Sequence

from patchwork.games.patchwork import PatchworkGame
from patchwork.utils.config import DEFAULT_PLAYER_NAMES, Config


def create_game(config: Config) -> PatchworkGame:
    """
    Create a game from match settings.

    Args:
        config: Board size, names, first player, seed and auto-skip

    Returns:
        Fresh PatchworkGame in its opening position
    """
    return PatchworkGame.from_config(config)


def _scenario_game(player_names: Sequence[str], first_player_index: int, seed=None) -> PatchworkGame:
    return PatchworkGame(
        board_size=9,
        player_names=player_names,
        first_player_index=first_player_index,
        seed=seed,
    )


def game_with_patches(
    count: int,
    player_names: Sequence[str] = DEFAULT_PLAYER_NAMES,
    first_player_index: int = 0,
    seed=None,
) -> PatchworkGame:
    """Market trimmed to `count` patches."""
    game = _scenario_game(player_names, first_player_index, seed)
    game.state.patches = game.state.patches[:count]
    game.state.market_position = 0
    return game


def game_near_income(
    player_names: Sequence[str] = DEFAULT_PLAYER_NAMES,
    first_player_index: int = 0,
    seed=None,
) -> PatchworkGame:
    """Current player one space before the first income checkpoint, income 3."""
    game = _scenario_game(player_names, first_player_index, seed)
    me = game.state.players[first_player_index]
    opp = game.state.players[1 - first_player_index]
    me.position = game.state.income_positions[0] - 1
    me.income = 3
    opp.position = 10
    return game


def game_infinite_money(
    player_names: Sequence[str] = DEFAULT_PLAYER_NAMES,
    first_player_index: int = 0,
    seed=None,
) -> PatchworkGame:
    """Current player can afford anything."""
    game = _scenario_game(player_names, first_player_index, seed)
    game.state.players[first_player_index].buttons = 99999
    return game


def game_near_leather_patch(
    player_names: Sequence[str] = DEFAULT_PLAYER_NAMES,
    first_player_index: int = 0,
    seed=None,
) -> PatchworkGame:
    """Current player one space before the first leather slot with 50 buttons."""
    game = _scenario_game(player_names, first_player_index, seed)
    me = game.state.players[first_player_index]
    opp = game.state.players[1 - first_player_index]
    first_leather = game.state.leather_patches[0].position
    me.position = max(0, first_leather - 1)
    me.buttons = 50
    opp.position = first_leather + 5
    return game


def game_near_last_income(
    player_names: Sequence[str] = DEFAULT_PLAYER_NAMES,
    first_player_index: int = 0,
    seed=None,
) -> PatchworkGame:
    """Current player one space before the final checkpoint with income 5."""
    game = _scenario_game(player_names, first_player_index, seed)
    me = game.state.players[first_player_index]
    opp = game.state.players[1 - first_player_index]
    me.position = game.state.time_track_length - 1
    me.income = 5
    opp.position = game.state.time_track_length
    return game


def game_over_scenario(
    player_names: Sequence[str] = DEFAULT_PLAYER_NAMES,
    first_player_index: int = 0,
    seed=None,
) -> PatchworkGame:
    """Both players at the end; player 1 has 15 buttons and 3 cells, player 2 has 12 and 2."""
    game = _scenario_game(player_names, first_player_index, seed)
    p1, p2 = game.state.players
    p1.position = p2.position = game.state.time_track_length
    p1.buttons = 15
    p2.buttons = 12
    p1.board[0, 0] = p1.board[0, 1] = p1.board[1, 0] = 1
    p2.board[0, 0] = p2.board[0, 1] = 2
    return game


SCENARIOS: Dict[str, Callable[..., PatchworkGame]] = {
    "one_patch": lambda *a, **kw: game_with_patches(1, *a, **kw),
    "two_patches": lambda *a, **kw: game_with_patches(2, *a, **kw),
    "near_income": game_near_income,
    "infinite_money": game_infinite_money,
    "near_leather": game_near_leather_patch,
    "near_last_income": game_near_last_income,
    "game_over": game_over_scenario,
}


def create_scenario(name: str, **kwargs) -> PatchworkGame:
    if name not in SCENARIOS:
        available = ", ".join(SCENARIOS.keys())
        raise ValueError(f"Unknown scenario: {name}. Available: {available}")
    return SCENARIOS[name](**kwargs)
