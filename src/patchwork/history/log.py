"""
Append-only action log.

A GameHistory plus its seed is enough to rebuild a match move by move.
Serialized form uses the web client's camelCase keys so saved games can be
shared between the two.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from patchwork.core.errors import HistoryError
from patchwork.utils.config import BOARD_CONFIGS, HISTORY_VERSION

BUY_PATCH = "buyPatch"
SKIP = "skip"
LEATHER_PATCH = "leatherPatch"


@dataclass(frozen=True)
class Placement:
    x: int
    y: int
    rotation: int = 0
    reflected: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "rotation": self.rotation, "reflected": self.reflected}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Placement":
        return cls(int(data["x"]), int(data["y"]), int(data["rotation"]), bool(data["reflected"]))


@dataclass(frozen=True)
class BuyPatchAction:
    player_index: int
    patch_index: int
    patch_id: int
    placement: Placement
    type: str = field(default=BUY_PATCH, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "playerIndex": self.player_index,
            "patchIndex": self.patch_index,
            "patchId": self.patch_id,
            "placement": self.placement.to_dict(),
        }


@dataclass(frozen=True)
class SkipAction:
    player_index: int
    spaces_skipped: int
    type: str = field(default=SKIP, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "playerIndex": self.player_index, "spacesSkipped": self.spaces_skipped}


@dataclass(frozen=True)
class LeatherPatchAction:
    player_index: int
    track_position: int
    placement: Placement
    type: str = field(default=LEATHER_PATCH, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "playerIndex": self.player_index,
            "trackPosition": self.track_position,
            "placement": self.placement.to_dict(),
        }


GameAction = Union[BuyPatchAction, SkipAction, LeatherPatchAction]


def action_from_dict(data: Dict[str, Any]) -> GameAction:
    try:
        kind = data["type"]
        player_index = int(data["playerIndex"])
        if kind == BUY_PATCH:
            return BuyPatchAction(
                player_index,
                int(data["patchIndex"]),
                int(data["patchId"]),
                Placement.from_dict(data["placement"]),
            )
        if kind == SKIP:
            return SkipAction(player_index, int(data["spacesSkipped"]))
        if kind == LEATHER_PATCH:
            return LeatherPatchAction(
                player_index,
                int(data["trackPosition"]),
                Placement.from_dict(data["placement"]),
            )
    except (KeyError, TypeError, ValueError) as e:
        raise HistoryError(f"Malformed action {data!r}: {e}") from e
    raise HistoryError(f"Unknown action type: {kind!r}")


@dataclass
class GameHistory:
    seed: int
    player_names: Tuple[str, str]
    first_player_index: int
    board_size: int
    actions: List[GameAction] = field(default_factory=list)
    final_scores: Optional[Tuple[int, int]] = None
    version: int = HISTORY_VERSION

    @property
    def is_finalized(self) -> bool:
        return self.final_scores is not None

    def record(self, action: GameAction) -> None:
        if self.is_finalized:
            raise HistoryError("Cannot record actions after the game has been finalized")
        self.actions.append(action)

    def finalize(self, scores: Sequence[int]) -> None:
        if self.is_finalized:
            raise HistoryError("History already finalized")
        self.final_scores = (int(scores[0]), int(scores[1]))

    # -----------------------------------------------------------------------
    # Serialization
    # -----------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "version": self.version,
            "seed": self.seed,
            "playerNames": list(self.player_names),
            "firstPlayerIndex": self.first_player_index,
            "boardSize": self.board_size,
            "actions": [a.to_dict() for a in self.actions],
        }
        if self.final_scores is not None:
            data["finalScores"] = list(self.final_scores)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameHistory":
        try:
            version = int(data["version"])
            names = data["playerNames"]
            history = cls(
                seed=int(data["seed"]),
                player_names=(str(names[0]), str(names[1])),
                first_player_index=int(data["firstPlayerIndex"]),
                board_size=int(data["boardSize"]),
                actions=[action_from_dict(a) for a in data["actions"]],
                version=version,
            )
            scores = data.get("finalScores")
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise HistoryError(f"Malformed history: {e}") from e

        if version != HISTORY_VERSION:
            raise HistoryError(f"Unsupported history version: {version}")
        if history.board_size not in BOARD_CONFIGS:
            raise HistoryError(f"Unsupported board size: {history.board_size}")
        if history.first_player_index not in (0, 1):
            raise HistoryError(f"Invalid first player index: {history.first_player_index}")
        if scores is not None:
            history.final_scores = (int(scores[0]), int(scores[1]))
        return history

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str) -> "GameHistory":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise HistoryError(f"History is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise HistoryError("History JSON must be an object")
        return cls.from_dict(data)


def create_history(
    seed: int,
    player_names: Sequence[str],
    first_player_index: int,
    board_size: int,
) -> GameHistory:
    return GameHistory(
        seed=seed,
        player_names=(player_names[0], player_names[1]),
        first_player_index=first_player_index,
        board_size=board_size,
    )
