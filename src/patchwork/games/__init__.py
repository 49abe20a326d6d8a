"""
Games module - Patchwork state, rules and the turn session.
"""

from patchwork.games.game_state import GameState, Player, Patch, PlacedPatch, LeatherPatchOnTrack
from patchwork.games.game_rules import can_place, stamp, find_filled_square, empty_cell_count, filled_cell_count
from patchwork.games.patches import PATCH_DEFINITIONS, PATCH_SHAPE_DEFINITIONS, shuffle_patches
from patchwork.games.track import move_player, current_player_index, overtake_distance, opponent_index
from patchwork.games.patchwork import PatchworkGame, Phase

__all__ = [
    "GameState",
    "Player",
    "Patch",
    "PlacedPatch",
    "LeatherPatchOnTrack",
    "PatchworkGame",
    "Phase",
    "PATCH_DEFINITIONS",
    "PATCH_SHAPE_DEFINITIONS",
    "shuffle_patches",
    "can_place",
    "stamp",
    "find_filled_square",
    "empty_cell_count",
    "filled_cell_count",
    "move_player",
    "current_player_index",
    "overtake_distance",
    "opponent_index",
]
