"""Window-based positional evaluation for non-terminal boards."""

from __future__ import annotations

from functools import lru_cache

import numpy as np

from dropfour.engine import Board, Connect4Config, windows

CENTER_WEIGHT = 3.0

# Own-piece patterns.
SCORE_FOUR = 100_000.0
SCORE_THREE = 10.0
SCORE_TWO = 3.0

# Opponent patterns. An opponent four outweighs our own four tenfold.
SCORE_OPP_FOUR = -1_000_000.0
SCORE_OPP_THREE = -50.0
SCORE_OPP_TWO = -3.0


def score_window(p_count: int, o_count: int, e_count: int, k: int = 4) -> float:
    """Score one window from its own/opponent/empty counts. First match wins."""

    if p_count == k:
        return SCORE_FOUR
    if p_count == k - 1 and e_count == 1:
        return SCORE_THREE
    if p_count == k - 2 and e_count == 2:
        return SCORE_TWO
    if o_count == k:
        return SCORE_OPP_FOUR
    if o_count == k - 1 and e_count == 1:
        return SCORE_OPP_THREE
    if o_count == k - 2 and e_count == 2:
        return SCORE_OPP_TWO
    return 0.0


@lru_cache(maxsize=None)
def _score_table(k: int) -> np.ndarray:
    # table[p, o] == score_window(p, o, k - p - o) for every reachable pair.
    table = np.zeros((k + 1, k + 1), dtype=np.float64)
    for p in range(k + 1):
        for o in range(k + 1 - p):
            table[p, o] = score_window(p, o, k - p - o, k)
    table.flags.writeable = False
    return table


def evaluate(cfg: Connect4Config, board: Board, player: int) -> float:
    """
    Score a board from `player`'s perspective.

    Sum of a center-column bonus (+3 per own piece, -3 per opponent piece)
    and the score of every length-k window on the board.
    """

    center = board.cells[:, cfg.center_col]
    score = CENTER_WEIGHT * int(np.sum(center == player))
    score -= CENTER_WEIGHT * int(np.sum(center == -player))

    w = windows(cfg, board)
    p_counts = np.sum(w == player, axis=1)
    o_counts = np.sum(w == -player, axis=1)
    score += float(_score_table(cfg.k)[p_counts, o_counts].sum())
    return float(score)
