"""
PatchworkGame - turn session on top of the rule functions.

Owns the GameState and its GameHistory, enforces who may act and in which
phase, and records exactly one history action per decision:

    DECISION           current player buys or skips
    LEATHER_PLACEMENT  a crossed leather patch must be placed; no other action
    GAME_OVER          both players reached the end of the track
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import replace
from enum import Enum, auto
from typing import Deque, List, Optional, Sequence, Tuple

from patchwork.core.errors import TurnOrderError
from patchwork.games import engine
from patchwork.games.game_rules import board_full
from patchwork.games.game_state import GameState, Patch
from patchwork.games.track import current_player_index, overtake_distance
from patchwork.history.log import (
    BuyPatchAction,
    GameHistory,
    LeatherPatchAction,
    Placement,
    SkipAction,
    create_history,
)
from patchwork.utils.config import DEFAULT_BOARD_SIZE, DEFAULT_PLAYER_NAMES, Config

logger = logging.getLogger(__name__)


class Phase(Enum):
    DECISION = auto()
    LEATHER_PLACEMENT = auto()
    GAME_OVER = auto()


def _normalized(placement: Placement) -> Placement:
    """Quarter turns reduced to 0-3 so logged placements are canonical."""
    return replace(placement, rotation=placement.rotation % 4)


class PatchworkGame:
    """A single two-player match."""

    def __init__(
        self,
        board_size: int = DEFAULT_BOARD_SIZE,
        player_names: Sequence[str] = DEFAULT_PLAYER_NAMES,
        first_player_index: int = 0,
        seed: Optional[int] = None,
        auto_skip: bool = False,
    ):
        self.state, self.seed = engine.create_game_state(board_size, player_names, first_player_index, seed)
        self.history: GameHistory = create_history(self.seed, player_names, first_player_index, board_size)
        self.auto_skip = auto_skip

        self._pending_positions: Deque[int] = deque()
        self._leather_owner: Optional[int] = None
        self._placing: Optional[Patch] = None
        self._placing_position: Optional[int] = None

        logger.info(
            "New %dx%d game: %s vs %s (seed %d)",
            board_size, board_size, player_names[0], player_names[1], self.seed,
        )
        self._settle()

    @classmethod
    def from_config(cls, config: Config) -> "PatchworkGame":
        return cls(
            board_size=config.board_size,
            player_names=config.player_names,
            first_player_index=config.first_player_index,
            seed=config.seed,
            auto_skip=config.auto_skip,
        )

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        if self._placing is not None:
            return Phase.LEATHER_PLACEMENT
        if engine.is_game_over(self.state):
            return Phase.GAME_OVER
        return Phase.DECISION

    def current_player(self) -> int:
        """Index of the player who must act next."""
        if self._placing is not None:
            return self._leather_owner
        return current_player_index(self.state)

    def available_patches(self) -> List[Patch]:
        return engine.available_patches(self.state)

    def overtake_distance(self) -> int:
        return overtake_distance(self.state)

    @property
    def pending_leather_patch(self) -> Optional[Patch]:
        """The leather patch that must be placed before play continues."""
        return self._placing

    @property
    def pending_leather_position(self) -> Optional[int]:
        return self._placing_position

    @property
    def queued_leather_positions(self) -> List[int]:
        """Crossed slots still waiting behind the pending one."""
        return list(self._pending_positions)

    def is_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def scores(self) -> Tuple[int, int]:
        return engine.final_scores(self.state)

    def winner(self) -> engine.Winner:
        return engine.get_winner(self.state)

    # -----------------------------------------------------------------------
    # Actions
    # -----------------------------------------------------------------------

    def buy(self, market_index: int, placement: Placement) -> bool:
        """Buy and place a market patch. False (nothing changed) if not allowed."""
        self._require(Phase.DECISION)
        placement = _normalized(placement)
        player_index = current_player_index(self.state)
        offered = engine.available_patches(self.state)
        result = engine.buy_patch(
            self.state, market_index, placement.x, placement.y, placement.rotation, placement.reflected
        )
        if not result.success:
            return False

        self.history.record(BuyPatchAction(player_index, market_index, offered[market_index].id, placement))
        engine.check_7x7_bonus(self.state, player_index)
        self._queue_leather(player_index, result.crossed_leather_positions)
        self._settle()
        return True

    def skip(self) -> int:
        """Overtake the opponent. Returns the spaces paid for (the overtake distance)."""
        self._require(Phase.DECISION)
        spaces = self._do_skip()
        self._settle()
        return spaces

    def place_leather(self, placement: Placement) -> bool:
        """
        Place the pending leather patch on the board of the player who
        crossed it. An illegal spot returns False and the patch stays pending.
        """
        self._require(Phase.LEATHER_PLACEMENT)
        placement = _normalized(placement)
        owner = self._leather_owner
        if not engine.place_leather_patch(
            self.state, owner, self._placing,
            placement.x, placement.y, placement.rotation, placement.reflected,
        ):
            return False

        self.history.record(LeatherPatchAction(owner, self._placing_position, placement))
        engine.check_7x7_bonus(self.state, owner)
        self._placing = None
        self._placing_position = None
        self._settle()
        return True

    # -----------------------------------------------------------------------
    # Snapshots
    # -----------------------------------------------------------------------

    def snapshot(self) -> "PatchworkGame":
        """Independent copy; mutating either leaves the other untouched."""
        g = PatchworkGame.__new__(PatchworkGame)
        g.state = self.state.copy()
        g.seed = self.seed
        g.history = replace(self.history, actions=list(self.history.actions))
        g.auto_skip = self.auto_skip
        g._pending_positions = deque(self._pending_positions)
        g._leather_owner = self._leather_owner
        g._placing = self._placing
        g._placing_position = self._placing_position
        return g

    def get_state(self) -> GameState:
        return self.state

    def state_string(self) -> str:
        from patchwork.debug.viz import render_state
        return render_state(self.state)

    # -----------------------------------------------------------------------
    # Internals
    # -----------------------------------------------------------------------

    def _require(self, phase: Phase) -> None:
        current = self.phase
        if current is not phase:
            raise TurnOrderError(f"Action requires phase {phase.name}, game is in {current.name}")

    def _do_skip(self) -> int:
        player_index = current_player_index(self.state)
        result = engine.skip_ahead(self.state)
        self.history.record(SkipAction(player_index, result.spaces_skipped))
        self._queue_leather(player_index, result.crossed_leather_positions)
        return result.spaces_skipped

    def _queue_leather(self, player_index: int, positions: List[int]) -> None:
        if positions:
            self._leather_owner = player_index
            self._pending_positions.extend(positions)

    def _settle(self) -> None:
        """Serve the next leather patch, or finish the turn."""
        while self._placing is None:
            if self._pending_positions:
                position = self._pending_positions.popleft()
                patch = engine.collect_leather_patch(self.state, position)
                if patch is None:
                    continue
                if board_full(self.state.players[self._leather_owner].board):
                    # No free cell: the slot is spent and nothing is recorded.
                    logger.info("Leather patch at %d forfeited: board full", position)
                    continue
                self._placing = patch
                self._placing_position = position
                continue

            if engine.is_game_over(self.state):
                if not self.history.is_finalized:
                    scores = engine.final_scores(self.state)
                    self.history.finalize(scores)
                    logger.info("Game over: scores %d / %d", *scores)
                return

            if self.auto_skip and not engine.can_afford_any_patch(self.state):
                logger.info("Auto-skipping %s", self.state.players[current_player_index(self.state)].name)
                self._do_skip()
                continue
            return
