"""Connect-4 package (board model + search engine + agents + CLI)."""

from dropfour.engine import (
    AI_PLAYER,
    HUMAN_PLAYER,
    Board,
    Connect4Config,
    GameState,
    InvalidMove,
    Move,
    TerminalResult,
)
from dropfour.search import SearchResult, alphabeta
from dropfour.selector import MoveDecision, RankedMove, choose_move, select_move

__all__ = [
    "AI_PLAYER",
    "HUMAN_PLAYER",
    "Board",
    "Connect4Config",
    "GameState",
    "InvalidMove",
    "Move",
    "TerminalResult",
    "SearchResult",
    "alphabeta",
    "MoveDecision",
    "RankedMove",
    "choose_move",
    "select_move",
]
