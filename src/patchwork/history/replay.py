"""
Deterministic replay of a GameHistory.

Actions are fed through the same PatchworkGame calls used during live play.
Any mismatch (wrong player to act, different patch in the offered slot,
illegal placement, leather slot out of order) means the log is corrupt and
raises ReplayError instead of continuing on a diverged game.
"""

from __future__ import annotations

from typing import Iterator, Optional, Tuple

from patchwork.core.errors import ReplayError, TurnOrderError
from patchwork.games.patchwork import PatchworkGame, Phase
from patchwork.history.log import BuyPatchAction, GameAction, GameHistory, LeatherPatchAction, SkipAction


def new_game_for(history: GameHistory) -> PatchworkGame:
    """Fresh game seeded exactly like the recorded one. Auto-skip stays off:
    recorded skips are replayed as ordinary actions."""
    return PatchworkGame(
        board_size=history.board_size,
        player_names=history.player_names,
        first_player_index=history.first_player_index,
        seed=history.seed,
        auto_skip=False,
    )


def apply_action(game: PatchworkGame, action: GameAction, step: int = 0) -> None:
    """Apply one recorded action, raising ReplayError on any divergence."""
    actor = game.current_player()
    if action.player_index != actor:
        raise ReplayError(f"Action {step}: recorded player {action.player_index}, expected {actor}")

    try:
        if isinstance(action, BuyPatchAction):
            offered = game.available_patches()
            if not 0 <= action.patch_index < len(offered):
                raise ReplayError(f"Action {step}: market slot {action.patch_index} is empty")
            if offered[action.patch_index].id != action.patch_id:
                raise ReplayError(
                    f"Action {step}: slot {action.patch_index} holds patch "
                    f"{offered[action.patch_index].id}, recorded {action.patch_id}"
                )
            if not game.buy(action.patch_index, action.placement):
                raise ReplayError(f"Action {step}: purchase of patch {action.patch_id} was rejected")

        elif isinstance(action, SkipAction):
            skipped = game.skip()
            if skipped != action.spaces_skipped:
                raise ReplayError(f"Action {step}: skipped {skipped} spaces, recorded {action.spaces_skipped}")

        elif isinstance(action, LeatherPatchAction):
            if game.phase is not Phase.LEATHER_PLACEMENT:
                raise ReplayError(f"Action {step}: no leather patch is pending")
            if game.pending_leather_position != action.track_position:
                raise ReplayError(
                    f"Action {step}: pending leather slot is {game.pending_leather_position}, "
                    f"recorded {action.track_position}"
                )
            if not game.place_leather(action.placement):
                raise ReplayError(f"Action {step}: leather patch placement was rejected")

        else:
            raise ReplayError(f"Action {step}: unknown action {action!r}")
    except TurnOrderError as e:
        raise ReplayError(f"Action {step}: {e}") from e


def iter_replay(history: GameHistory) -> Iterator[Tuple[GameAction, PatchworkGame]]:
    """Yield (action, game after the action) for every recorded action.

    The same game object is yielded each time; snapshot() it to keep one.
    """
    game = new_game_for(history)
    for step, action in enumerate(history.actions):
        apply_action(game, action, step)
        yield action, game


def replay(history: GameHistory, upto: Optional[int] = None) -> PatchworkGame:
    """
    Rebuild the game after the first `upto` actions (all when None).

    When the full log is replayed and the history carries final scores, the
    rebuilt game must end with those scores.
    """
    actions = history.actions if upto is None else history.actions[:upto]
    game = new_game_for(history)
    for step, action in enumerate(actions):
        apply_action(game, action, step)

    if upto is None and history.final_scores is not None:
        if not game.is_over():
            raise ReplayError("History has final scores but the replayed game is not over")
        if tuple(game.scores()) != tuple(history.final_scores):
            raise ReplayError(f"Replayed scores {game.scores()} differ from recorded {history.final_scores}")
    return game
