"""Human-in-the-loop agent that defers input handling to a CLI prompt function."""

from __future__ import annotations

from typing import Callable

from dropfour.agents.base import Agent
from dropfour.engine import Board, Connect4Config

PromptFn = Callable[[Connect4Config, Board, int, str], int]


class HumanAgent(Agent):
    def __init__(self, name: str, prompt_fn: PromptFn) -> None:
        self.name = name
        self.prompt_fn = prompt_fn

    @property
    def identifier(self) -> str:
        return "human"

    def select_move(self, cfg: Connect4Config, board: Board, player: int) -> int:
        return self.prompt_fn(cfg, board, player, self.name)
