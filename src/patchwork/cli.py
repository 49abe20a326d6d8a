"""
Command-line interface for playing, replaying and inspecting Patchwork games.
"""

import argparse
import logging
import sys
from pathlib import Path

from patchwork.api import load_and_replay, play_hot_seat, replay_history
from patchwork.debug.viz import render_state, render_stats
from patchwork.history.log import GameHistory
from patchwork.stats.projection import calculate_stats
from patchwork.storage.history_store import HistoryStore
from patchwork.utils.config import BOARD_SIZES, DEFAULT_BOARD_SIZE, HISTORY_DB, Config
from patchwork.utils.factory import SCENARIOS, create_game, create_scenario


def _add_source_args(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("file", nargs="?", type=Path, help="History JSON file")
    group.add_argument("--id", type=int, dest="game_id", help="Saved game id in the history database")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="patchwork",
        description="Two-player Patchwork: hot-seat play, replay and statistics",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--db",
        type=Path,
        default=HISTORY_DB,
        help=f"History database (default: {HISTORY_DB})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    play = sub.add_parser("play", help="Play a hot-seat game in the terminal")
    play.add_argument(
        "--board-size", "-b",
        type=int,
        choices=BOARD_SIZES,
        default=DEFAULT_BOARD_SIZE,
        help=f"Quilt board size (default: {DEFAULT_BOARD_SIZE})",
    )
    play.add_argument("--names", "-n", type=str, default=None, help="Comma-separated player names")
    play.add_argument("--first", type=int, choices=(1, 2), default=None, help="Player who moves first on ties")
    play.add_argument("--seed", "-s", type=int, default=None, help="Market shuffle seed")
    play.add_argument("--auto-skip", action="store_true", default=None, help="Skip automatically when broke")
    play.add_argument("--scenario", choices=list(SCENARIOS.keys()), default=None, help="Start from a test scenario")
    play.add_argument("--no-save", action="store_true", help="Do not save the finished game")

    replay = sub.add_parser("replay", help="Replay a history and print the final position")
    _add_source_args(replay)
    replay.add_argument("--upto", type=int, default=None, help="Only replay the first N actions")

    stats = sub.add_parser("stats", help="Show per-player statistics for a history")
    _add_source_args(stats)

    sub.add_parser("list", help="List saved games")

    return parser.parse_args(argv)


def parse_names(names_str: str | None, stored) -> tuple:
    """Parse and validate the --names argument."""
    if names_str is None:
        return tuple(stored)
    names = tuple(n.strip() for n in names_str.split(","))
    if len(names) != 2 or not all(names):
        raise ValueError(f"Invalid --names format: '{names_str}'. Expected two comma-separated names.")
    return names


def _load_history(args) -> GameHistory:
    if args.file is not None:
        return GameHistory.from_json(args.file.read_text(encoding="utf-8"))
    if not Path(args.db).exists():
        raise SystemExit(f"No history database at {args.db}")
    with HistoryStore(args.db, read_only=True) as store:
        history = store.load_history(args.game_id)
    if history is None:
        raise SystemExit(f"No saved game with id {args.game_id}")
    return history


def cmd_play(args) -> None:
    with HistoryStore(args.db) as store:
        names = parse_names(args.names, store.load_player_names())
        first = args.first - 1 if args.first is not None else store.load_first_player()
        auto_skip = args.auto_skip if args.auto_skip is not None else store.load_auto_skip()

        if args.scenario:
            game = create_scenario(
                args.scenario, player_names=names, first_player_index=first, seed=args.seed
            )
            game.auto_skip = auto_skip
        else:
            config = Config(
                board_size=args.board_size,
                player_names=names,
                first_player_index=first,
                auto_skip=auto_skip,
                seed=args.seed,
                db_path=args.db,
            )
            game = create_game(config)

        store.save_player_names(names)
        store.save_first_player(first)
        store.save_auto_skip(auto_skip)

        play_hot_seat(game)

        # Scenario games are hand-edited and would not replay.
        if game.history.is_finalized and not args.scenario and not args.no_save:
            game_id = store.save_history(game.history)
            print(f"Saved as game {game_id}")


def cmd_replay(args) -> None:
    if args.file is not None and args.upto is None:
        game = load_and_replay(args.file)
    else:
        game = replay_history(_load_history(args), args.upto)
    print(render_state(game.state))
    if game.is_over():
        s1, s2 = game.scores()
        print(f"Final scores: {s1} / {s2}")


def cmd_stats(args) -> None:
    history = _load_history(args)
    print(render_stats(calculate_stats(history), history.player_names))


def cmd_list(args) -> None:
    if not Path(args.db).exists():
        print("No saved games")
        return
    with HistoryStore(args.db, read_only=True) as store:
        rows = store.list_histories()
    if not rows:
        print("No saved games")
        return
    for row in rows:
        p1, p2 = row["player_names"]
        s1, s2 = row["final_scores"] or ("-", "-")
        print(
            f"{row['game_id']:>5}  {row['created_at']}  {row['board_size']}x{row['board_size']}  "
            f"{p1} {s1} - {s2} {p2}  (seed {row['seed']})"
        )


COMMANDS = {
    "play": cmd_play,
    "replay": cmd_replay,
    "stats": cmd_stats,
    "list": cmd_list,
}


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    COMMANDS[args.command](args)


if __name__ == "__main__":
    main()
