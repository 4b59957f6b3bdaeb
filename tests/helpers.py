"""Board builders and scripted agents shared by the tests."""

from typing import Dict, List, Sequence

import torch
import torch.nn as nn

from dropfour.agents.base import Agent, NoLegalMoves
from dropfour.engine import AI_PLAYER, HUMAN_PLAYER, Board, Connect4Config, apply_move, board_from_grid, empty_board, legal_moves
from dropfour.model import ModelConfig, QValueNet

H = HUMAN_PLAYER
A = AI_PLAYER


def board_with(cfg: Connect4Config, stacks: Dict[int, List[int]]) -> Board:
    """Drop pieces column by column; each list is bottom-up."""
    board = empty_board(cfg)
    for col, pieces in stacks.items():
        for player in pieces:
            board = apply_move(cfg, board, col, player)
    return board


def drawn_board(cfg: Connect4Config) -> Board:
    # Pairs of rows alternate phase, so no line of four exists anywhere.
    grid = [[H if ((r // 2) + c) % 2 == 0 else A for c in range(cfg.cols)] for r in range(cfg.rows)]
    return board_from_grid(cfg, grid)


class ColumnAgent(Agent):
    """Plays the first legal column from a fixed preference list."""

    def __init__(self, name: str, preferences: Sequence[int]) -> None:
        self.name = name
        self.preferences = list(preferences)
        self.calls = 0

    def select_move(self, cfg: Connect4Config, board: Board, player: int) -> int:
        self.calls += 1
        legal = legal_moves(cfg, board)
        if not legal:
            raise NoLegalMoves("no legal moves available")
        for col in self.preferences:
            if col in legal:
                return col
        return legal[0]


def constant_model(cfg: Connect4Config, q: Sequence[float]) -> QValueNet:
    """A QValueNet whose output is exactly `q` for every input."""
    model = QValueNet(cfg=cfg, model_cfg=ModelConfig(channels=4))
    with torch.no_grad():
        for p in model.parameters():
            nn.init.zeros_(p)
        model.q_head[-1].bias.copy_(torch.tensor(list(q), dtype=torch.float32))
    model.eval()
    return model
