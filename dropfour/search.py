"""Depth-limited minimax search with alpha-beta pruning."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional

from dropfour.engine import AI_PLAYER, Board, Connect4Config, InvalidMove, apply_move, is_terminal, legal_moves
from dropfour.heuristic import evaluate


@dataclass(frozen=True)
class SearchResult:
    score: float
    move: Optional[int]  # only meaningful at the root


@dataclass
class SearchStats:
    """Work counters a caller can hand to the search; the search keeps no state of its own."""

    nodes: int = 0
    cutoffs: int = 0


def order_moves(cfg: Connect4Config, moves: Iterable[int]) -> List[int]:
    # Stable: equally central columns keep ascending order.
    return sorted(moves, key=lambda c: abs(c - cfg.center_col))


def alphabeta(
    cfg: Connect4Config,
    board: Board,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    *,
    player: int = AI_PLAYER,
    stats: Optional[SearchStats] = None,
) -> SearchResult:
    """
    Minimax with alpha-beta pruning, scored from `player`'s fixed perspective.

    The recursion alternates sides through `maximizing`:
      - maximizing nodes drop `player`'s piece and keep the highest score
      - minimizing nodes drop the opponent's piece and keep the lowest score
      - alpha is the best score the maximizer is already guaranteed, beta the
        best the minimizer is guaranteed; once alpha >= beta the remaining
        siblings cannot change the result and are skipped

    Leaves (depth 0 or a finished game) are scored with `evaluate` for
    `player`, never for the side to move.
    """

    if depth < 0:
        raise ValueError("depth must be >= 0")
    if stats is not None:
        stats.nodes += 1

    if depth == 0 or is_terminal(cfg, board):
        return SearchResult(evaluate(cfg, board, player), None)

    # Center-first ordering only speeds up pruning; it never changes the value.
    moves = order_moves(cfg, legal_moves(cfg, board))
    best_move = moves[0]

    if maximizing:
        value = -math.inf
        for col in moves:
            try:
                child = apply_move(cfg, board, col, player)
            except InvalidMove:
                continue
            score = alphabeta(cfg, child, depth - 1, alpha, beta, False, player=player, stats=stats).score
            if score > value:
                value = score
                best_move = col
            alpha = max(alpha, value)
            if alpha >= beta:
                if stats is not None:
                    stats.cutoffs += 1
                break  # beta cut-off
        return SearchResult(value, best_move)

    value = math.inf
    for col in moves:
        try:
            child = apply_move(cfg, board, col, -player)
        except InvalidMove:
            continue
        score = alphabeta(cfg, child, depth - 1, alpha, beta, True, player=player, stats=stats).score
        if score < value:
            value = score
            best_move = col
        beta = min(beta, value)
        if beta <= alpha:
            if stats is not None:
                stats.cutoffs += 1
            break  # alpha cut-off
    return SearchResult(value, best_move)
