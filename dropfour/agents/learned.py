"""Agent backed by a learned per-column value model."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np
import torch

from dropfour.agents.base import Agent, NoLegalMoves
from dropfour.engine import Board, Connect4Config, legal_moves
from dropfour.model import QValueNet, encode_board, load_model, pick_device


class LearnedAgent(Agent):
    def __init__(
        self,
        name: str,
        *,
        model: QValueNet,
        device: Optional[torch.device] = None,
        identifier: Optional[str] = None,
    ) -> None:
        self.name = name
        self.model = model
        self.device = device if device is not None else torch.device("cpu")
        self._identifier = identifier or name

    @classmethod
    def from_path(cls, name: str, model_path: Path, *, device: str = "auto") -> "LearnedAgent":
        dev = pick_device(device)
        model = load_model(model_path, device=dev)
        return cls(name, model=model, device=dev, identifier=model_path.name)

    @property
    def identifier(self) -> str:
        return self._identifier

    def q_values(self, cfg: Connect4Config, board: Board, player: int) -> np.ndarray:
        if (cfg.rows, cfg.cols) != (self.model.cfg.rows, self.model.cfg.cols):
            raise ValueError("model config does not match game config")

        with torch.no_grad():
            x = encode_board(board, player).unsqueeze(0).to(self.device)
            q = self.model(x).squeeze(0).cpu().numpy()
        return q.astype(np.float64)

    def select_move(self, cfg: Connect4Config, board: Board, player: int) -> int:
        legal = legal_moves(cfg, board)
        if not legal:
            raise NoLegalMoves("no legal moves available")

        q = self.q_values(cfg, board, player)
        # Only legal columns compete; the first of equal values wins.
        return int(legal[int(np.argmax(q[legal]))])
