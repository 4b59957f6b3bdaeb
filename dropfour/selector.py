"""Top-level move choice: greedy win/block, then a scored alpha-beta sweep."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from dropfour.engine import AI_PLAYER, Board, Connect4Config, apply_move, has_win, legal_moves
from dropfour.search import SearchStats, alphabeta, order_moves

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankedMove:
    column: int
    score: float


@dataclass(frozen=True)
class MoveDecision:
    column: Optional[int]
    reason: str  # "none" | "win" | "block" | "search"
    ranked: Tuple[RankedMove, ...] = ()
    depth: int = 0


def _immediate_win(cfg: Connect4Config, board: Board, moves: List[int], player: int) -> Optional[int]:
    for col in moves:
        if has_win(cfg, apply_move(cfg, board, col, player), player):
            return col
    return None


def select_move(
    cfg: Connect4Config,
    board: Board,
    depth: int,
    *,
    player: int = AI_PLAYER,
    stats: Optional[SearchStats] = None,
) -> MoveDecision:
    """
    Pick a column for `player`.

    1) no legal moves -> column None
    2) a column that wins right away
    3) a column the opponent would win with next
    4) otherwise every legal column is scored by alpha-beta to `depth` plies
       (the root move counts as the first ply); ties go to the column closest
       to the center because moves are tried center-first and only a strictly
       better score replaces the incumbent.
    """

    if depth < 1:
        raise ValueError("depth must be >= 1")

    legal = legal_moves(cfg, board)
    if not legal:
        return MoveDecision(None, "none", (), depth)

    col = _immediate_win(cfg, board, legal, player)
    if col is not None:
        logger.info("immediate win in column %d", col)
        return MoveDecision(col, "win", (), depth)

    col = _immediate_win(cfg, board, legal, -player)
    if col is not None:
        logger.info("blocking opponent win in column %d", col)
        return MoveDecision(col, "block", (), depth)

    ordered = order_moves(cfg, legal)
    best_move = ordered[0]
    best_score = -math.inf
    scored: List[RankedMove] = []

    for col in ordered:
        child = apply_move(cfg, board, col, player)
        result = alphabeta(cfg, child, depth - 1, -math.inf, math.inf, False, player=player, stats=stats)
        scored.append(RankedMove(col, result.score))
        if result.score > best_score:
            best_score = result.score
            best_move = col

    ranked = tuple(sorted(scored, key=lambda m: m.score, reverse=True))
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "alpha-beta depth=%d ranked=%s",
            depth,
            " ".join(f"{m.column}:{m.score:.2f}" for m in ranked),
        )
    logger.info("chose column %d (score %.2f)", best_move, best_score)
    return MoveDecision(best_move, "search", ranked, depth)


def choose_move(cfg: Connect4Config, board: Board, depth: int, *, player: int = AI_PLAYER) -> Optional[int]:
    return select_move(cfg, board, depth, player=player).column
