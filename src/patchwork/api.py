"""
Public API for creating, playing and replaying Patchwork games.

Usage:
    from patchwork.api import new_game, play_hot_seat, load_and_replay
    from patchwork.utils.config import Config

    game = new_game(Config(board_size=9, seed=12345))
    play_hot_seat(game)
    print(game.history.to_json())

    replayed = load_and_replay("game.json")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from patchwork.core.errors import PatchworkError
from patchwork.games.patchwork import PatchworkGame, Phase
from patchwork.history.log import GameHistory, Placement
from patchwork.history.replay import replay
from patchwork.utils.config import DEFAULT_CONFIG, Config
from patchwork.utils.factory import create_game

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Commands:\n"
    "  b <slot> <x> <y> <rot> <refl>   buy market slot 0-2 and place it\n"
    "  s                               skip ahead past the opponent\n"
    "  p <x> <y> <rot> <refl>          place the pending leather patch\n"
    "  q                               quit"
)


def new_game(config: Optional[Config] = None) -> PatchworkGame:
    """Start a new match from `config` (defaults to a 9x9 game)."""
    return create_game(config or DEFAULT_CONFIG)


def replay_history(history: GameHistory, upto: Optional[int] = None) -> PatchworkGame:
    """Rebuild the game a history describes, optionally only its first `upto` actions."""
    return replay(history, upto)


def load_and_replay(path: str | Path, upto: Optional[int] = None) -> PatchworkGame:
    """Read a history JSON file and replay it."""
    history = GameHistory.from_json(Path(path).read_text(encoding="utf-8"))
    return replay(history, upto)


# ---------------------------------------------------------------------------
# Hot-seat play
# ---------------------------------------------------------------------------


def _parse_placement(tokens) -> Placement:
    if len(tokens) != 4:
        raise ValueError("expected <x> <y> <rot> <refl>")
    x, y, rotation, reflected = (int(t) for t in tokens)
    if rotation not in (0, 1, 2, 3):
        raise ValueError("rotation must be 0-3")
    return Placement(x, y, rotation, bool(reflected))


def _prompt(game: PatchworkGame) -> str:
    player = game.state.players[game.current_player()]
    if game.phase is Phase.LEATHER_PLACEMENT:
        return f"{player.name}, place leather patch (p x y rot refl): "
    return f"{player.name} [{player.buttons} buttons] > "


def _apply_command(game: PatchworkGame, raw: str, output_fn: Callable[[str], None]) -> bool:
    """Apply one command. Returns False when the player asked to quit."""
    tokens = raw.split()
    if not tokens:
        return True
    command, args = tokens[0].lower(), tokens[1:]

    if command == "q":
        return False
    if command in ("h", "?"):
        output_fn(HELP_TEXT)
        return True

    if command == "b":
        if len(args) != 5:
            raise ValueError("expected b <slot> <x> <y> <rot> <refl>")
        slot = int(args[0])
        if not game.buy(slot, _parse_placement(args[1:])):
            output_fn("Illegal purchase: not affordable, no such slot, or the patch does not fit there")
    elif command == "s":
        spaces = game.skip()
        output_fn(f"Skipped {spaces} spaces, earned {spaces} buttons")
    elif command == "p":
        if not game.place_leather(_parse_placement(args)):
            output_fn("Leather patch does not fit there")
    else:
        raise ValueError(f"unknown command {command!r}")
    return True


def play_hot_seat(
    game: PatchworkGame,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> PatchworkGame:
    """
    Run a two-player text session on one terminal until the game ends
    or a player quits.

    Args:
        game: Match to play; mutated in place
        input_fn: Prompt reader (defaults to input)
        output_fn: Line writer (defaults to print)

    Returns:
        The same game, finished or abandoned
    """
    output_fn(HELP_TEXT)
    while not game.is_over():
        output_fn(game.state_string())
        try:
            raw = input_fn(_prompt(game)).strip()
        except EOFError:
            logger.info("Input closed; leaving game unfinished")
            break

        try:
            if not _apply_command(game, raw, output_fn):
                break
        except ValueError as e:
            output_fn(f"Invalid input: {e}")
        except PatchworkError as e:
            output_fn(f"Illegal move: {e}")
        except Exception:
            logger.exception("Hot-seat session failed on input %r", raw)
            raise

    if game.is_over():
        output_fn(game.state_string())
        scores = game.scores()
        winner = game.winner()
        names = [p.name for p in game.state.players]
        output_fn(f"Final scores: {names[0]} {scores[0]}, {names[1]} {scores[1]}")
        output_fn("It's a tie!" if winner == "tie" else f"{names[winner]} wins!")
    return game
