"""
Tests for patchwork.cli

Tests argument parsing and the replay, stats, list and play commands.
"""

import pytest

from patchwork import cli
from patchwork.storage.history_store import HistoryStore


@pytest.fixture
def history_file(finished_game, temp_dir):
    path = temp_dir / "game.json"
    path.write_text(finished_game.history.to_json(), encoding="utf-8")
    return path


class TestParseArgs:
    """Argument parsing tests."""

    def test_play_defaults(self):
        args = cli.parse_args(["play"])
        assert args.command == "play"
        assert args.board_size == 9
        assert args.seed is None
        assert args.auto_skip is None

    def test_play_options(self):
        args = cli.parse_args(["--verbose", "play", "-b", "7", "--names", "A,B", "--first", "2", "--seed", "3"])
        assert args.verbose
        assert (args.board_size, args.names, args.first, args.seed) == (7, "A,B", 2, 3)

    def test_bad_board_size(self):
        with pytest.raises(SystemExit):
            cli.parse_args(["play", "-b", "8"])

    def test_source_required(self):
        with pytest.raises(SystemExit):
            cli.parse_args(["replay"])

    def test_source_by_id(self):
        args = cli.parse_args(["stats", "--id", "4"])
        assert args.game_id == 4
        assert args.file is None


class TestParseNames:
    """parse_names tests."""

    def test_stored_default(self):
        assert cli.parse_names(None, ["X", "Y"]) == ("X", "Y")

    def test_parsed(self):
        assert cli.parse_names(" Ann , Ben ", ("X", "Y")) == ("Ann", "Ben")

    @pytest.mark.parametrize("bad", ["Solo", "A,B,C", "A,"])
    def test_invalid(self, bad):
        with pytest.raises(ValueError):
            cli.parse_names(bad, ("X", "Y"))


class TestCommands:
    """Command tests."""

    def test_replay_file(self, history_file, capsys):
        cli.main(["replay", str(history_file)])
        out = capsys.readouterr().out
        assert "Final scores" in out

    def test_replay_prefix(self, history_file, capsys):
        cli.main(["replay", str(history_file), "--upto", "2"])
        out = capsys.readouterr().out
        assert "To move" in out

    def test_stats_file(self, history_file, capsys):
        cli.main(["stats", str(history_file)])
        assert "Total turns" in capsys.readouterr().out

    def test_stats_by_id(self, finished_game, temp_db_path, capsys):
        with HistoryStore(temp_db_path) as store:
            game_id = store.save_history(finished_game.history)
        cli.main(["--db", str(temp_db_path), "stats", "--id", str(game_id)])
        assert "Alice" in capsys.readouterr().out

    def test_missing_id(self, temp_db_path):
        HistoryStore(temp_db_path).close()
        with pytest.raises(SystemExit):
            cli.main(["--db", str(temp_db_path), "replay", "--id", "99"])

    def test_list(self, finished_game, temp_db_path, capsys):
        with HistoryStore(temp_db_path) as store:
            store.save_history(finished_game.history)
        cli.main(["--db", str(temp_db_path), "list"])
        out = capsys.readouterr().out
        assert "Alice" in out and "Bob" in out

    def test_list_no_database(self, temp_dir, capsys):
        cli.main(["--db", str(temp_dir / "none.db"), "list"])
        assert "No saved games" in capsys.readouterr().out

    def test_play_saves_finished_game(self, temp_db_path, monkeypatch, capsys):
        """A finished hot-seat game is stored with the chosen names."""
        def play_to_end(game):
            game.state.players[0].position = 52
            game.state.players[1].position = 53
            game.skip()
            return game

        monkeypatch.setattr(cli, "play_hot_seat", play_to_end)
        cli.main(["--db", str(temp_db_path), "play", "--names", "Kim,Lee", "--seed", "5"])
        assert "Saved as game" in capsys.readouterr().out

        with HistoryStore(temp_db_path, read_only=True) as store:
            rows = store.list_histories()
            assert store.load_player_names() == ("Kim", "Lee")
        assert rows[0]["player_names"] == ("Kim", "Lee")

    def test_play_abandoned_not_saved(self, temp_db_path, monkeypatch):
        monkeypatch.setattr(cli, "play_hot_seat", lambda game: game)
        cli.main(["--db", str(temp_db_path), "play", "--no-save"])
        with HistoryStore(temp_db_path, read_only=True) as store:
            assert store.list_histories() == []
