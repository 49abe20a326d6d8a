"""
Game state containers.

Boards are int16 arrays indexed [y, x]:
    0        = empty
    positive = market patch id
    negative = leather patch id

Player and GameState are mutable and owned by the turn engine; copy() gives
a fully independent snapshot for previews and undo.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from patchwork.core.shapes import Shape, shape_key

EMPTY = 0
BOARD_DTYPE = np.int16


@dataclass(frozen=True, eq=False)
class Patch:
    """An acquirable patch. Leather patches have negative ids and zero costs."""

    id: int
    shape: Shape
    button_cost: int
    time_cost: int
    button_income: int

    @property
    def is_leather(self) -> bool:
        return self.id < 0

    def _key(self) -> Tuple[int, str, int, int, int]:
        return (self.id, shape_key(self.shape), self.button_cost, self.time_cost, self.button_income)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Patch):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())


@dataclass(frozen=True)
class PlacedPatch:
    """Where and how a patch was stamped onto a board."""

    patch: Patch
    x: int
    y: int
    rotation: int
    reflected: bool


@dataclass
class LeatherPatchOnTrack:
    position: int
    collected: bool
    patch_id: int


def empty_board(board_size: int) -> np.ndarray:
    return np.zeros((board_size, board_size), dtype=BOARD_DTYPE)


class Player:
    """One player's purse, track position and quilt board."""

    __slots__ = ("name", "buttons", "income", "position", "board", "placed_patches", "bonus_7x7_area")

    def __init__(
        self,
        name: str,
        board: np.ndarray,
        buttons: int = 0,
        income: int = 0,
        position: int = 0,
        placed_patches: Optional[List[PlacedPatch]] = None,
        bonus_7x7_area: Optional[Tuple[int, int]] = None,
    ):
        self.name = name
        self.board = board
        self.buttons = buttons
        self.income = income
        self.position = position
        self.placed_patches: List[PlacedPatch] = placed_patches if placed_patches is not None else []
        self.bonus_7x7_area = bonus_7x7_area  # (x, y) of the claimed square

    @property
    def board_size(self) -> int:
        return int(self.board.shape[0])

    def copy(self) -> "Player":
        return Player(
            name=self.name,
            board=self.board.copy(),
            buttons=self.buttons,
            income=self.income,
            position=self.position,
            placed_patches=list(self.placed_patches),
            bonus_7x7_area=self.bonus_7x7_area,
        )

    def __repr__(self) -> str:
        return (
            f"Player(name={self.name!r}, buttons={self.buttons}, income={self.income}, "
            f"position={self.position}, patches={len(self.placed_patches)})"
        )


class GameState:
    """Everything needed to continue a match."""

    __slots__ = (
        "board_size",
        "players",
        "patches",
        "market_position",
        "time_track_length",
        "income_positions",
        "leather_patches",
        "first_player_index",
        "bonus_7x7_claimed",
    )

    def __init__(
        self,
        board_size: int,
        players: List[Player],
        patches: List[Patch],
        time_track_length: int,
        income_positions: List[int],
        leather_patches: List[LeatherPatchOnTrack],
        first_player_index: int = 0,
        market_position: int = 0,
        bonus_7x7_claimed: bool = False,
    ):
        self.board_size = board_size
        self.players = players
        self.patches = patches
        self.market_position = market_position
        self.time_track_length = time_track_length
        self.income_positions = income_positions
        self.leather_patches = leather_patches
        self.first_player_index = first_player_index
        self.bonus_7x7_claimed = bonus_7x7_claimed

    def copy(self) -> "GameState":
        """Deep copy. Patches are immutable and shared."""
        return GameState(
            board_size=self.board_size,
            players=[p.copy() for p in self.players],
            patches=list(self.patches),
            time_track_length=self.time_track_length,
            income_positions=list(self.income_positions),
            leather_patches=[
                LeatherPatchOnTrack(lp.position, lp.collected, lp.patch_id)
                for lp in self.leather_patches
            ],
            first_player_index=self.first_player_index,
            market_position=self.market_position,
            bonus_7x7_claimed=self.bonus_7x7_claimed,
        )
