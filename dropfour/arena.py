"""Agent-vs-agent games and matches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from tqdm import trange

from dropfour.agents.base import Agent
from dropfour.engine import HUMAN_PLAYER, Connect4Config, GameState, initial_state, play, terminal_result

MoveHook = Callable[[GameState], None]


@dataclass(frozen=True)
class MatchResult:
    wins: int
    draws: int
    losses: int

    @property
    def games(self) -> int:
        return self.wins + self.draws + self.losses


def play_game(
    cfg: Connect4Config,
    x_agent: Agent,
    o_agent: Agent,
    *,
    on_move: Optional[MoveHook] = None,
) -> GameState:
    """Play X (+1, moves first) against O (-1) to the end; return the final state."""

    s = initial_state(cfg, HUMAN_PLAYER)
    while not terminal_result(cfg, s).is_terminal:
        agent = x_agent if s.current_player == HUMAN_PLAYER else o_agent
        col = agent.select_move(cfg, s.board, s.current_player)
        s = play(cfg, s, col)
        if on_move is not None:
            on_move(s)
    return s


def run_match(
    cfg: Connect4Config,
    agent_a: Agent,
    agent_b: Agent,
    *,
    games: int,
    progress: bool = True,
) -> MatchResult:
    """
    Play `games` games, alternating who starts to reduce first-player bias.

    Results are reported from agent_a's perspective (wins/draws/losses).
    """

    wins = 0
    draws = 0
    losses = 0

    for g in trange(games, desc=f"{agent_a.name} vs {agent_b.name}", disable=not progress, leave=False):
        a_starts = g % 2 == 0
        x_agent, o_agent = (agent_a, agent_b) if a_starts else (agent_b, agent_a)
        final = play_game(cfg, x_agent, o_agent)

        winner = terminal_result(cfg, final).winner
        if winner == 0:
            draws += 1
        else:
            a_sign = HUMAN_PLAYER if a_starts else -HUMAN_PLAYER
            if winner == a_sign:
                wins += 1
            else:
                losses += 1

    return MatchResult(wins=wins, draws=draws, losses=losses)
