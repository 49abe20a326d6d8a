"""
Read-only statistics over a GameHistory.

calculate_stats() only counts log entries. build_chart_data() replays the
game to sample per-turn values, so it doubles as a replay check: a corrupt
history raises ReplayError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import numpy as np

from patchwork.games.game_rules import filled_cell_count
from patchwork.games.game_state import GameState
from patchwork.history.log import BuyPatchAction, GameHistory, LeatherPatchAction, SkipAction
from patchwork.history.replay import iter_replay, new_game_for

Pair = Tuple[int, int]


@dataclass
class GameStats:
    total_turns: int = 0
    turns_by_player: List[int] = field(default_factory=lambda: [0, 0])
    patches_bought: List[int] = field(default_factory=lambda: [0, 0])
    skips: List[int] = field(default_factory=lambda: [0, 0])
    leather_patches: List[int] = field(default_factory=lambda: [0, 0])
    buttons_from_skips: List[int] = field(default_factory=lambda: [0, 0])
    final_scores: Pair = (0, 0)


@dataclass(frozen=True)
class TimeSeriesPoint:
    turn: int
    buttons: Pair
    income: Pair
    cells_filled: Pair
    position: Pair


@dataclass
class ChartData:
    player_names: Tuple[str, str]
    series: List[TimeSeriesPoint]

    def as_arrays(self) -> Dict[str, np.ndarray]:
        """Columns as (turns, 2) int arrays keyed by metric name."""
        return {
            "turn": np.array([p.turn for p in self.series], dtype=np.int32),
            "buttons": np.array([p.buttons for p in self.series], dtype=np.int32).reshape(-1, 2),
            "income": np.array([p.income for p in self.series], dtype=np.int32).reshape(-1, 2),
            "cells_filled": np.array([p.cells_filled for p in self.series], dtype=np.int32).reshape(-1, 2),
            "position": np.array([p.position for p in self.series], dtype=np.int32).reshape(-1, 2),
        }


def calculate_stats(history: GameHistory) -> GameStats:
    """Per-player counts. Leather placements belong to the turn that crossed them."""
    stats = GameStats(final_scores=history.final_scores or (0, 0))

    for action in history.actions:
        p = action.player_index
        if isinstance(action, BuyPatchAction):
            stats.total_turns += 1
            stats.turns_by_player[p] += 1
            stats.patches_bought[p] += 1
        elif isinstance(action, SkipAction):
            stats.total_turns += 1
            stats.turns_by_player[p] += 1
            stats.skips[p] += 1
            stats.buttons_from_skips[p] += action.spaces_skipped
        elif isinstance(action, LeatherPatchAction):
            stats.leather_patches[p] += 1

    return stats


def _sample(turn: int, state: GameState) -> TimeSeriesPoint:
    p0, p1 = state.players
    return TimeSeriesPoint(
        turn=turn,
        buttons=(p0.buttons, p1.buttons),
        income=(p0.income, p1.income),
        cells_filled=(filled_cell_count(p0.board), filled_cell_count(p1.board)),
        position=(p0.position, p1.position),
    )


def build_chart_data(history: GameHistory) -> ChartData:
    """One point for the opening position and one per turn."""
    series = [_sample(0, new_game_for(history).state)]
    turn = 0
    for action, game in iter_replay(history):
        if isinstance(action, LeatherPatchAction):
            series[-1] = _sample(turn, game.state)
        else:
            turn += 1
            series.append(_sample(turn, game.state))
    return ChartData(history.player_names, series)
