"""Move-policy capability shared by every opponent."""

from __future__ import annotations

import abc

from dropfour.engine import Board, Connect4Config


class NoLegalMoves(ValueError):
    """Raised by an agent asked to move on a full board."""


class Agent(abc.ABC):
    name: str

    @property
    def identifier(self) -> str:
        """Stable key for this configuration, used for play counts."""
        return self.name

    @abc.abstractmethod
    def select_move(self, cfg: Connect4Config, board: Board, player: int) -> int:
        raise NotImplementedError
