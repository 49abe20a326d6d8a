"""
Configuration, rule constants and the board-size registry.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

PACKAGE_DIR = Path(__file__).parent.parent  # src/patchwork/
DATA_DIR = PACKAGE_DIR / "data"
HISTORY_DB = DATA_DIR / "histories.db"


# ---------------------------------------------------------------------------
# Rule constants
# ---------------------------------------------------------------------------

STARTING_BUTTONS = 5
MARKET_WINDOW = 3          # patches offered to the current player
BONUS_SQUARE_SIZE = 7
BONUS_7X7_POINTS = 7
EMPTY_CELL_PENALTY = 2
HISTORY_VERSION = 1

DEFAULT_PLAYER_NAMES: Tuple[str, str] = ("Player 1", "Player 2")


# ---------------------------------------------------------------------------
# Board-size registry
# ---------------------------------------------------------------------------

class BoardConfig(NamedTuple):
    """Static per-size layout of the time track."""

    size: int
    track_length: int
    income_positions: Tuple[int, ...]
    leather_positions: Tuple[int, ...]


BOARD_CONFIGS: Dict[int, BoardConfig] = {
    7: BoardConfig(
        size=7,
        track_length=35,
        income_positions=(5, 11, 17, 23, 29, 35),
        leather_positions=(8, 14, 20, 26, 32),
    ),
    9: BoardConfig(
        size=9,
        track_length=53,
        income_positions=(5, 11, 17, 23, 29, 35, 41, 47, 53),
        leather_positions=(8, 18, 28, 38, 48),
    ),
    11: BoardConfig(
        size=11,
        track_length=70,
        # Every sixth space, plus the final space.
        income_positions=(6, 12, 18, 24, 30, 36, 42, 48, 54, 60, 66, 70),
        leather_positions=(10, 24, 38, 52, 64),
    ),
}

BOARD_SIZES: List[int] = sorted(BOARD_CONFIGS)
DEFAULT_BOARD_SIZE = 9


def board_config(board_size: int) -> BoardConfig:
    """Look up the layout for a board size. Raises ValueError if unsupported."""
    try:
        return BOARD_CONFIGS[board_size]
    except KeyError:
        available = ", ".join(str(s) for s in BOARD_SIZES)
        raise ValueError(f"Unsupported board size: {board_size}. Available: {available}") from None


# ---------------------------------------------------------------------------
# Match settings
# ---------------------------------------------------------------------------

class Config:
    """Match settings with sensible defaults."""

    def __init__(
        self,
        board_size: int = DEFAULT_BOARD_SIZE,
        player_names: Sequence[str] = DEFAULT_PLAYER_NAMES,
        first_player_index: int = 0,
        auto_skip: bool = False,
        seed: Optional[int] = None,
        db_path: Path = HISTORY_DB,
    ):
        board_config(board_size)
        if len(player_names) != 2:
            raise ValueError(f"Exactly two player names required, got {len(player_names)}")
        if first_player_index not in (0, 1):
            raise ValueError(f"first_player_index must be 0 or 1, got {first_player_index}")

        self.board_size = board_size
        self.player_names: Tuple[str, str] = (str(player_names[0]), str(player_names[1]))
        self.first_player_index = first_player_index
        self.auto_skip = auto_skip
        self.seed = seed
        self.db_path = Path(db_path)

    @property
    def board(self) -> BoardConfig:
        return board_config(self.board_size)


# Default configuration
DEFAULT_CONFIG = Config()
