"""
Plain-text rendering of boards, market, track and stats for the terminal.

Cell legend:
    .      empty
    #      leather patch
    0-9,   market patch (id 1 -> "1", ..., id 10 -> "A", ...)
    A-Z...
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from patchwork.core.shapes import Shape, transform
from patchwork.games import engine
from patchwork.games.game_rules import empty_cell_count
from patchwork.games.game_state import EMPTY, GameState, Player
from patchwork.games.track import current_player_index, next_income_distance

_ID_CHARS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"


# ═══════════════════════════════════════════════════════════════════════════════
# Text utilities
# ═══════════════════════════════════════════════════════════════════════════════

def pad(text: str, width: int, align: str = "left") -> str:
    gap = max(0, width - len(text))
    if align == "right":
        return " " * gap + text
    if align == "center":
        left = gap // 2
        return " " * left + text + " " * (gap - left)
    return text + " " * gap


def cell_char(value: int) -> str:
    if value == EMPTY:
        return "."
    if value < 0:
        return "#"
    return _ID_CHARS[value % len(_ID_CHARS)]


def side_by_side(blocks: Sequence[List[str]], gap: int = 4) -> List[str]:
    """Join multi-line blocks horizontally."""
    height = max(len(b) for b in blocks)
    widths = [max((len(line) for line in b), default=0) for b in blocks]
    out = []
    for i in range(height):
        parts = [pad(b[i] if i < len(b) else "", w) for b, w in zip(blocks, widths)]
        out.append((" " * gap).join(parts).rstrip())
    return out


# ═══════════════════════════════════════════════════════════════════════════════
# Rendering
# ═══════════════════════════════════════════════════════════════════════════════

def render_shape(shape: Shape, rotation: int = 0, reflected: bool = False) -> List[str]:
    shape = transform(shape, rotation, reflected)
    return ["".join("X" if cell else " " for cell in row).rstrip() for row in shape]


def render_board(player: Player) -> List[str]:
    board = player.board
    size = board.shape[0]
    header = "   " + " ".join(str(x % 10) for x in range(size))
    lines = [f"{player.name}", header]
    for y in range(size):
        lines.append(f"{y:>2} " + " ".join(cell_char(int(v)) for v in board[y]))
    if player.bonus_7x7_area is not None:
        lines.append(f"7x7 bonus at {player.bonus_7x7_area}")
    return lines


def render_market(state: GameState) -> List[str]:
    lines = ["Market:"]
    for i, patch in enumerate(engine.available_patches(state)):
        lines.append(
            f" [{i}] patch {patch.id}: cost {patch.button_cost}, "
            f"time {patch.time_cost}, income {patch.button_income}"
        )
        lines.extend("      " + row for row in render_shape(patch.shape))
    if not state.patches:
        lines.append(" (empty)")
    return lines


def render_track(state: GameState) -> List[str]:
    """One row per player; income checkpoints '$', leather slots '#'."""
    length = state.time_track_length
    marks = np.full(length + 1, "-", dtype="<U1")
    marks[state.income_positions] = "$"
    for lp in state.leather_patches:
        if not lp.collected:
            marks[lp.position] = "#"

    lines = ["Track: " + "".join(marks)]
    for idx, player in enumerate(state.players):
        row = np.full(length + 1, " ", dtype="<U1")
        row[player.position] = str(idx + 1)
        lines.append(f"P{idx + 1}:    " + "".join(row).rstrip())
    return lines


def render_player_summary(state: GameState, index: int) -> str:
    player = state.players[index]
    nxt = next_income_distance(state, index)
    income_note = f"next income in {nxt}" if nxt is not None else "no income left"
    return (
        f"{player.name}: {player.buttons} buttons, income {player.income}, "
        f"position {player.position}/{state.time_track_length} ({income_note}), "
        f"{empty_cell_count(player.board)} empty, score {engine.calculate_score(player)}"
    )


def render_state(state: GameState) -> str:
    lines: List[str] = []
    lines.extend(side_by_side([render_board(p) for p in state.players]))
    lines.append("")
    lines.extend(render_track(state))
    lines.append("")
    for idx in range(2):
        lines.append(render_player_summary(state, idx))
    if not engine.is_game_over(state):
        lines.append(f"To move: {state.players[current_player_index(state)].name}")
        lines.append("")
        lines.extend(render_market(state))
    return "\n".join(lines)


def render_stats(stats, player_names: Sequence[str]) -> str:
    """Table of GameStats columns per player."""
    rows = [
        ("Turns", stats.turns_by_player),
        ("Patches bought", stats.patches_bought),
        ("Skips", stats.skips),
        ("Leather patches", stats.leather_patches),
        ("Buttons from skips", stats.buttons_from_skips),
        ("Final score", stats.final_scores),
    ]
    name_w = max(len(n) for n in player_names)
    label_w = max(len(r[0]) for r in rows)
    lines = [
        f"Total turns: {stats.total_turns}",
        pad("", label_w) + "  " + "  ".join(pad(n, name_w, "right") for n in player_names),
    ]
    for label, values in rows:
        lines.append(pad(label, label_w) + "  " + "  ".join(pad(str(v), name_w, "right") for v in values))
    return "\n".join(lines)
