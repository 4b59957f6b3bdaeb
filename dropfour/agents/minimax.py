"""Alpha-beta (minimax) agent with a greedy win/block shortcut."""

from __future__ import annotations

from typing import Optional

from dropfour.agents.base import Agent, NoLegalMoves
from dropfour.engine import Board, Connect4Config
from dropfour.selector import MoveDecision, select_move


class MinimaxAgent(Agent):
    """
    Fixed-depth search opponent.

    Each call is independent: the board and player come in, a column comes
    out. The most recent decision (with its ranked root scores) is kept on
    `last_decision` for display or debugging only.
    """

    def __init__(self, name: str, *, depth: int = 4) -> None:
        if depth < 1:
            raise ValueError("depth must be >= 1")
        self.name = name
        self.depth = depth
        self.last_decision: Optional[MoveDecision] = None

    @property
    def identifier(self) -> str:
        return f"minimax-d{self.depth}"

    def select_move(self, cfg: Connect4Config, board: Board, player: int) -> int:
        decision = select_move(cfg, board, self.depth, player=player)
        self.last_decision = decision
        if decision.column is None:
            raise NoLegalMoves("no legal moves available")
        return decision.column
