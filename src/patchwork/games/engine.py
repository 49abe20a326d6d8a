"""
Rule functions for a match.

Every function mutates the GameState it is given and reports routine failure
through its return value. Sequencing (who may act, pending leather patches,
history recording) lives in PatchworkGame.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple, Union

from patchwork.core.shapes import transform
from patchwork.games.game_rules import can_place, empty_cell_count, find_filled_square, stamp
from patchwork.games.game_state import GameState, LeatherPatchOnTrack, Patch, Player, empty_board
from patchwork.games.patches import PATCH_DEFINITIONS, create_leather_patch, shuffle_patches
from patchwork.games.track import current_player_index, move_player, opponent_index
from patchwork.history.rng import generate_seed
from patchwork.utils.config import (
    BONUS_7X7_POINTS,
    BONUS_SQUARE_SIZE,
    EMPTY_CELL_PENALTY,
    MARKET_WINDOW,
    STARTING_BUTTONS,
    board_config,
)

logger = logging.getLogger(__name__)

Winner = Union[int, str]  # 0, 1 or "tie"


@dataclass
class BuyResult:
    success: bool
    patch: Optional[Patch] = None
    crossed_leather_positions: List[int] = field(default_factory=list)


@dataclass
class SkipResult:
    spaces_skipped: int
    spaces_moved: int = 0
    crossed_leather_positions: List[int] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

def create_player(name: str, board_size: int) -> Player:
    return Player(name=name, board=empty_board(board_size), buttons=STARTING_BUTTONS)


def create_game_state(
    board_size: int,
    player_names: Sequence[str],
    first_player_index: int = 0,
    seed: Optional[int] = None,
    catalog: Sequence[Patch] = PATCH_DEFINITIONS,
) -> Tuple[GameState, int]:
    """
    Fresh match. Returns (state, seed); the seed fully determines the deck.
    """
    layout = board_config(board_size)
    if len(player_names) != 2:
        raise ValueError(f"Exactly two player names required, got {len(player_names)}")
    if first_player_index not in (0, 1):
        raise ValueError(f"first_player_index must be 0 or 1, got {first_player_index}")
    if seed is None:
        seed = generate_seed()

    leather = [
        LeatherPatchOnTrack(position=pos, collected=False, patch_id=-(idx + 1))
        for idx, pos in enumerate(layout.leather_positions)
    ]
    state = GameState(
        board_size=board_size,
        players=[create_player(player_names[0], board_size), create_player(player_names[1], board_size)],
        patches=shuffle_patches(catalog, seed),
        time_track_length=layout.track_length,
        income_positions=list(layout.income_positions),
        leather_patches=leather,
        first_player_index=first_player_index,
    )
    logger.debug("Created %dx%d game with seed %d", board_size, board_size, seed)
    return state, seed


# ---------------------------------------------------------------------------
# Market
# ---------------------------------------------------------------------------

def available_patches(state: GameState) -> List[Patch]:
    """The next (up to three) patches after the market token, wrapping."""
    count = len(state.patches)
    return [state.patches[(state.market_position + i) % count] for i in range(min(MARKET_WINDOW, count))]


def can_afford(state: GameState, market_index: int) -> bool:
    patches = available_patches(state)
    if not 0 <= market_index < len(patches):
        return False
    player = state.players[current_player_index(state)]
    return player.buttons >= patches[market_index].button_cost


def can_afford_any_patch(state: GameState) -> bool:
    return any(can_afford(state, i) for i in range(len(available_patches(state))))


# ---------------------------------------------------------------------------
# Turn actions
# ---------------------------------------------------------------------------

def buy_patch(
    state: GameState,
    market_index: int,
    x: int,
    y: int,
    rotation: int = 0,
    reflected: bool = False,
) -> BuyResult:
    """
    Current player buys one of the offered patches and places it.

    No state changes on failure (missing slot, too few buttons, illegal spot).
    """
    patches = available_patches(state)
    if not 0 <= market_index < len(patches):
        return BuyResult(False)
    patch = patches[market_index]

    player_index = current_player_index(state)
    player = state.players[player_index]
    if player.buttons < patch.button_cost:
        return BuyResult(False)

    if not can_place(player.board, transform(patch.shape, rotation, reflected), x, y):
        return BuyResult(False)

    player.buttons -= patch.button_cost
    player.income += patch.button_income
    move = move_player(state, player_index, patch.time_cost)
    stamp(player, patch, x, y, rotation, reflected)

    # The token moves to the gap left by the purchase.
    actual_index = (state.market_position + market_index) % len(state.patches)
    del state.patches[actual_index]
    if state.patches:
        state.market_position = actual_index % len(state.patches)
    else:
        state.market_position = 0

    logger.debug("%s bought patch %d at (%d, %d)", player.name, patch.id, x, y)
    return BuyResult(True, patch, move.crossed_leather_positions)


def skip_ahead(state: GameState) -> SkipResult:
    """
    Current player earns the overtake distance in buttons and moves that
    far. Near the end the move is clamped but the payout is not.
    """
    player_index = current_player_index(state)
    player = state.players[player_index]
    opponent = state.players[opponent_index(player_index)]
    if player.position >= state.time_track_length:
        return SkipResult(0)

    distance = opponent.position - player.position + 1
    player.buttons += distance
    move = move_player(state, player_index, distance)
    return SkipResult(distance, move.spaces_moved, move.crossed_leather_positions)


def collect_leather_patch(state: GameState, track_position: int) -> Optional[Patch]:
    """Mark the slot at `track_position` collected and hand out its patch."""
    for lp in state.leather_patches:
        if lp.position == track_position and not lp.collected:
            lp.collected = True
            return create_leather_patch(lp.patch_id)
    return None


def place_leather_patch(
    state: GameState,
    player_index: int,
    patch: Patch,
    x: int,
    y: int,
    rotation: int = 0,
    reflected: bool = False,
) -> bool:
    """Free placement on the board of the player who crossed the slot."""
    player = state.players[player_index]
    if not can_place(player.board, transform(patch.shape, rotation, reflected), x, y):
        return False
    stamp(player, patch, x, y, rotation, reflected)
    return True


# ---------------------------------------------------------------------------
# Bonus, end and scoring
# ---------------------------------------------------------------------------

def check_7x7_bonus(state: GameState, player_index: int) -> bool:
    """Award the bonus square if nobody holds it yet. Returns True when awarded."""
    if state.bonus_7x7_claimed:
        return False
    player = state.players[player_index]
    area = find_filled_square(player.board, BONUS_SQUARE_SIZE)
    if area is None:
        return False
    player.bonus_7x7_area = area
    state.bonus_7x7_claimed = True
    logger.info("%s claimed the 7x7 bonus at %s", player.name, area)
    return True


def is_game_over(state: GameState) -> bool:
    return all(p.position >= state.time_track_length for p in state.players)


def calculate_score(player: Player) -> int:
    bonus = BONUS_7X7_POINTS if player.bonus_7x7_area is not None else 0
    return player.buttons - EMPTY_CELL_PENALTY * empty_cell_count(player.board) + bonus


def final_scores(state: GameState) -> Tuple[int, int]:
    return calculate_score(state.players[0]), calculate_score(state.players[1])


def get_winner(state: GameState) -> Winner:
    score0, score1 = final_scores(state)
    if score0 > score1:
        return 0
    if score1 > score0:
        return 1
    return "tie"
