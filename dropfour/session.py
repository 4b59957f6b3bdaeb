"""Explicit human-vs-computer game session, passed in and returned by each step."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from typing import Tuple

from dropfour.agents.base import Agent, NoLegalMoves
from dropfour.engine import (
    AI_PLAYER,
    HUMAN_PLAYER,
    Connect4Config,
    GameState,
    InvalidMove,
    initial_state,
    legal_moves,
    play,
    terminal_result,
)

logger = logging.getLogger(__name__)

PLAYING = "playing"
WON = "won"
LOST = "lost"
DRAW = "draw"


@dataclass(frozen=True)
class GameSession:
    """
    Everything a front end needs to carry between turns.

    `status` is from the human's point of view.
    """

    state: GameState
    human_player: int
    agent_id: str
    status: str = PLAYING

    @property
    def ai_player(self) -> int:
        return -self.human_player

    @property
    def is_over(self) -> bool:
        return self.status != PLAYING

    @property
    def human_to_move(self) -> bool:
        return not self.is_over and self.state.current_player == self.human_player


def start_session(
    cfg: Connect4Config,
    agent_id: str,
    *,
    human_starts: bool,
    human_player: int = HUMAN_PLAYER,
) -> GameSession:
    if human_player not in (HUMAN_PLAYER, AI_PLAYER):
        raise ValueError(f"human_player must be {HUMAN_PLAYER} or {AI_PLAYER}")
    first = human_player if human_starts else -human_player
    return GameSession(state=initial_state(cfg, first), human_player=human_player, agent_id=agent_id)


def _advance(cfg: Connect4Config, session: GameSession, col: int) -> GameSession:
    state = play(cfg, session.state, col)
    tr = terminal_result(cfg, state)
    if not tr.is_terminal:
        status = PLAYING
    elif tr.winner == 0:
        status = DRAW
    elif tr.winner == session.human_player:
        status = WON
    else:
        status = LOST
    return replace(session, state=state, status=status)


def human_move(cfg: Connect4Config, session: GameSession, col: int) -> GameSession:
    if session.is_over:
        raise ValueError("game is over")
    if not session.human_to_move:
        raise ValueError("not the human's turn")
    if col not in legal_moves(cfg, session.state.board):
        raise InvalidMove(col, "column full or out of range")
    return _advance(cfg, session, col)


def ai_move(
    cfg: Connect4Config,
    session: GameSession,
    agent: Agent,
    rng: random.Random,
) -> Tuple[GameSession, int]:
    """
    Let `agent` move for the computer side.

    An agent that raises or answers with an illegal column is replaced, for
    this move only, by a uniformly random legal column.
    """

    if session.is_over:
        raise ValueError("game is over")
    if session.state.current_player != session.ai_player:
        raise ValueError("not the computer's turn")

    board = session.state.board
    legal = legal_moves(cfg, board)
    if not legal:
        raise NoLegalMoves("no legal moves available")

    try:
        col = agent.select_move(cfg, board, session.ai_player)
    except NoLegalMoves:
        raise
    except Exception:
        logger.warning("agent %s failed; choosing a random move", agent.name, exc_info=True)
        col = rng.choice(legal)
    else:
        if col not in legal:
            logger.warning("agent %s chose illegal column %r; choosing a random move", agent.name, col)
            col = rng.choice(legal)

    return _advance(cfg, session, col), col
