"""Random baseline agent, also the fallback when another agent fails."""

from __future__ import annotations

import random
from typing import Optional

from dropfour.agents.base import Agent, NoLegalMoves
from dropfour.engine import Board, Connect4Config, legal_moves


class RandomAgent(Agent):
    def __init__(self, name: str, seed: Optional[int] = None, *, rng: Optional[random.Random] = None) -> None:
        self.name = name
        self.rng = rng if rng is not None else random.Random(seed)

    @property
    def identifier(self) -> str:
        return "random"

    def select_move(self, cfg: Connect4Config, board: Board, player: int) -> int:
        legal = legal_moves(cfg, board)
        if not legal:
            raise NoLegalMoves("no legal moves available")
        return self.rng.choice(legal)
