"""
Tests for patchwork.history.log

Tests action records, recording rules and JSON serialization.
"""

import json

import pytest

from patchwork.core.errors import HistoryError
from patchwork.history.log import (
    BuyPatchAction,
    GameHistory,
    LeatherPatchAction,
    Placement,
    SkipAction,
    action_from_dict,
    create_history,
)


@pytest.fixture
def history() -> GameHistory:
    h = create_history(777, ("Alice", "Bob"), 1, 9)
    h.record(BuyPatchAction(1, 2, 14, Placement(3, 4, 1, True)))
    h.record(SkipAction(0, 3))
    h.record(LeatherPatchAction(0, 8, Placement(0, 0)))
    return h


class TestActions:
    """Action record tests."""

    def test_type_tags(self):
        assert BuyPatchAction(0, 0, 1, Placement(0, 0)).type == "buyPatch"
        assert SkipAction(0, 1).type == "skip"
        assert LeatherPatchAction(0, 8, Placement(0, 0)).type == "leatherPatch"

    def test_camel_case_keys(self):
        """Serialized actions use the web client's key names."""
        data = BuyPatchAction(1, 2, 14, Placement(3, 4, 1, True)).to_dict()
        assert data == {
            "type": "buyPatch",
            "playerIndex": 1,
            "patchIndex": 2,
            "patchId": 14,
            "placement": {"x": 3, "y": 4, "rotation": 1, "reflected": True},
        }
        assert SkipAction(0, 3).to_dict() == {"type": "skip", "playerIndex": 0, "spacesSkipped": 3}

    def test_from_dict(self):
        data = {
            "type": "leatherPatch",
            "playerIndex": 1,
            "trackPosition": 18,
            "placement": {"x": 2, "y": 5, "rotation": 0, "reflected": False},
        }
        assert action_from_dict(data) == LeatherPatchAction(1, 18, Placement(2, 5))

    def test_unknown_type(self):
        with pytest.raises(HistoryError, match="Unknown action type"):
            action_from_dict({"type": "undo", "playerIndex": 0})

    def test_missing_field(self):
        with pytest.raises(HistoryError, match="Malformed"):
            action_from_dict({"type": "skip", "playerIndex": 0})


class TestRecording:
    """Append-only recording tests."""

    def test_header(self, history):
        assert history.seed == 777
        assert history.player_names == ("Alice", "Bob")
        assert history.first_player_index == 1
        assert history.version == 1
        assert len(history.actions) == 3

    def test_finalize(self, history):
        history.finalize([10, -4])
        assert history.is_finalized
        assert history.final_scores == (10, -4)

    def test_double_finalize(self, history):
        history.finalize((1, 2))
        with pytest.raises(HistoryError):
            history.finalize((1, 2))

    def test_record_after_finalize(self, history):
        history.finalize((1, 2))
        with pytest.raises(HistoryError):
            history.record(SkipAction(0, 1))


class TestSerialization:
    """JSON tests."""

    def test_json_keys(self, history):
        history.finalize((3, 4))
        data = json.loads(history.to_json())
        assert set(data) == {"version", "seed", "playerNames", "firstPlayerIndex", "boardSize", "actions", "finalScores"}
        assert data["actions"][1] == {"type": "skip", "playerIndex": 0, "spacesSkipped": 3}

    def test_unfinished_has_no_scores(self, history):
        assert "finalScores" not in history.to_dict()

    def test_round_trip(self, history):
        history.finalize((3, 4))
        restored = GameHistory.from_json(history.to_json(indent=2))
        assert restored == history

    def test_bad_version(self, history):
        data = history.to_dict()
        data["version"] = 2
        with pytest.raises(HistoryError, match="version"):
            GameHistory.from_dict(data)

    def test_bad_board_size(self, history):
        data = history.to_dict()
        data["boardSize"] = 8
        with pytest.raises(HistoryError, match="board size"):
            GameHistory.from_dict(data)

    def test_bad_first_player(self, history):
        data = history.to_dict()
        data["firstPlayerIndex"] = 2
        with pytest.raises(HistoryError):
            GameHistory.from_dict(data)

    @pytest.mark.parametrize("text", ["not json", "[1, 2]", '{"seed": 1}'])
    def test_malformed(self, text):
        with pytest.raises(HistoryError):
            GameHistory.from_json(text)
