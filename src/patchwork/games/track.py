"""
Time track: movement, checkpoint crossing and turn order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from patchwork.games.game_state import GameState

logger = logging.getLogger(__name__)


@dataclass
class MoveResult:
    old_position: int
    new_position: int
    income_collected: int = 0
    crossed_leather_positions: List[int] = field(default_factory=list)

    @property
    def spaces_moved(self) -> int:
        return self.new_position - self.old_position


def opponent_index(player_index: int) -> int:
    if player_index not in (0, 1):
        raise ValueError(f"player_index must be 0 or 1, got {player_index}")
    return 1 - player_index


def move_player(state: GameState, player_index: int, spaces: int) -> MoveResult:
    """
    Advance a player, clamped to the end of the track.

    Income checkpoints in (old, new] pay the player's income once each.
    Uncollected leather slots in (old, new] are reported, not collected.
    """
    player = state.players[player_index]
    old = player.position
    new = min(old + max(spaces, 0), state.time_track_length)

    crossed = sum(1 for pos in state.income_positions if old < pos <= new)
    income = crossed * player.income
    player.buttons += income
    player.position = new

    leather = [
        lp.position
        for lp in sorted(state.leather_patches, key=lambda lp: lp.position)
        if not lp.collected and old < lp.position <= new
    ]

    if new != old:
        logger.debug(
            "%s moved %d -> %d (income %d, leather %s)",
            player.name, old, new, income, leather,
        )
    return MoveResult(old, new, income, leather)


def current_player_index(state: GameState) -> int:
    """The player further behind acts; ties go to first_player_index."""
    p0, p1 = state.players[0].position, state.players[1].position
    if p0 < p1:
        return 0
    if p1 < p0:
        return 1
    return state.first_player_index


def overtake_distance(state: GameState) -> int:
    """Spaces the current player must move to stand one ahead of the opponent."""
    current = current_player_index(state)
    me = state.players[current]
    opp = state.players[opponent_index(current)]
    return opp.position - me.position + 1


def next_income_distance(state: GameState, player_index: int) -> Optional[int]:
    position = state.players[player_index].position
    for pos in state.income_positions:
        if pos > position:
            return pos - position
    return None
