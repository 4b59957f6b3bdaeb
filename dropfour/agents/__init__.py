"""Agent implementations for Connect-4."""

from dropfour.agents.base import Agent, NoLegalMoves
from dropfour.agents.human import HumanAgent
from dropfour.agents.learned import LearnedAgent
from dropfour.agents.minimax import MinimaxAgent
from dropfour.agents.random_agent import RandomAgent

__all__ = ["Agent", "NoLegalMoves", "HumanAgent", "LearnedAgent", "MinimaxAgent", "RandomAgent"]
