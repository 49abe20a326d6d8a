"""
Shared test fixtures for patchwork tests.

Design principles:
- Fixed seeds so decks are reproducible
- Scenario states built by editing a fresh game, not by hand-assembling one
- Temporary database files with cleanup
"""

import tempfile
from pathlib import Path
from typing import Generator, Optional

import numpy as np
import pytest

from patchwork.core.shapes import shape_key, transform
from patchwork.games.game_rules import can_place
from patchwork.games.game_state import GameState, Patch
from patchwork.games.patches import PATCH_DEFINITIONS
from patchwork.games.patchwork import PatchworkGame, Phase
from patchwork.history.log import Placement

SEED = 12345
NAMES = ("Alice", "Bob")


# =============================================================================
# Helpers
# =============================================================================

def patch_with_shape(key: str, button_cost: Optional[int] = None) -> Patch:
    """First catalog patch whose shape key matches (and cost, if given)."""
    for patch in PATCH_DEFINITIONS:
        if shape_key(patch.shape) == key and (button_cost is None or patch.button_cost == button_cost):
            return patch
    raise LookupError(key)


def first_fit(board: np.ndarray, patch: Patch) -> Optional[Placement]:
    """Top-most, left-most unrotated placement of `patch`, if any."""
    shape = transform(patch.shape, 0, False)
    size = board.shape[0]
    for y in range(size):
        for x in range(size):
            if can_place(board, shape, x, y):
                return Placement(x, y)
    return None


def play_out_by_skipping(game: PatchworkGame) -> PatchworkGame:
    """Finish a game with skips only, placing leather patches at the first free cell."""
    while not game.is_over():
        if game.phase is Phase.LEATHER_PLACEMENT:
            board = game.state.players[game.current_player()].board
            assert game.place_leather(first_fit(board, game.pending_leather_patch))
        else:
            game.skip()
    return game


# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def temp_db_path() -> Generator[Path, None, None]:
    """Temporary database file with cleanup."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = Path(f.name)
    yield path
    for suffix in ["", "-wal", "-shm"]:
        p = Path(str(path) + suffix)
        if p.exists():
            p.unlink()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Temporary directory with cleanup."""
    with tempfile.TemporaryDirectory() as d:
        yield Path(d)


# =============================================================================
# Patch Fixtures
# =============================================================================

@pytest.fixture
def domino() -> Patch:
    """Vertical two-cell patch: cost 2, time 1, income 0."""
    return patch_with_shape("1|1")


@pytest.fixture
def l_tromino() -> Patch:
    """Three-cell corner patch (the cheaper variant)."""
    return patch_with_shape("01|11", button_cost=1)


# =============================================================================
# Game Fixtures
# =============================================================================

@pytest.fixture
def game() -> PatchworkGame:
    """Fresh seeded 9x9 game, first player moves first."""
    return PatchworkGame(board_size=9, player_names=NAMES, seed=SEED)


@pytest.fixture
def state(game: PatchworkGame) -> GameState:
    """State of the fresh seeded game."""
    return game.state


@pytest.fixture
def game_with_domino_first(game: PatchworkGame, domino: Patch) -> PatchworkGame:
    """Seeded game whose first market slot holds the domino."""
    rest = [p for p in game.state.patches if p.id != domino.id]
    game.state.patches = [domino] + rest
    game.state.market_position = 0
    return game


@pytest.fixture
def finished_game() -> PatchworkGame:
    """Seeded game played to the end by skipping."""
    return play_out_by_skipping(PatchworkGame(board_size=9, player_names=NAMES, seed=SEED))
