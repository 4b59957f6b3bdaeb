"""CLI rendering, input helpers, and entry point for Connect-4."""

from __future__ import annotations

import argparse
import logging
import random
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from dropfour.agents import Agent, HumanAgent, LearnedAgent, MinimaxAgent, RandomAgent
from dropfour.arena import play_game, run_match
from dropfour.counts import PlayCounts
from dropfour.engine import (
    HUMAN_PLAYER,
    Board,
    Connect4Config,
    GameState,
    InvalidMove,
    Move,
    initial_state,
    legal_moves,
    play,
    terminal_result,
    winning_line,
)
from dropfour.model import CatalogError, load_catalog
from dropfour.selector import MoveDecision, select_move
from dropfour.session import DRAW, LOST, WON, GameSession, ai_move, human_move, start_session

logger = logging.getLogger(__name__)

AGENT_CHOICES = ["human", "random", "minimax", "learned"]


def _symbol(player: int) -> str:
    return "X" if player == HUMAN_PLAYER else "O"


def render_board(cfg: Connect4Config, board: Board, highlight: Iterable[Tuple[int, int]] = ()) -> str:
    sym = {+1: "X", -1: "O", 0: "."}
    marked = set(highlight)
    lines: List[str] = []
    for r in range(cfg.rows - 1, -1, -1):
        cells = []
        for c in range(cfg.cols):
            ch = sym[board[r, c]]
            cells.append(ch.lower() if (r, c) in marked else ch)
        lines.append(" ".join(cells))
    lines.append("-" * (2 * cfg.cols - 1))
    lines.append(" ".join(str(c) for c in range(cfg.cols)))
    return "\n".join(lines)


def format_move_history(moves: Sequence[Move]) -> str:
    return " ".join(f"{m.ply}:{_symbol(m.player)}@{m.col}" for m in moves)


def format_decision(decision: MoveDecision) -> str:
    if decision.column is None:
        return "no legal moves"
    if decision.reason == "win":
        return f"column {decision.column}: immediate win"
    if decision.reason == "block":
        return f"column {decision.column}: blocks an immediate loss"
    lines = [f"column {decision.column} (depth {decision.depth})"]
    for m in decision.ranked:
        lines.append(f"  col {m.column}: {m.score:.2f}")
    return "\n".join(lines)


def _parse_column(raw: str, width: int) -> Optional[int]:
    raw = raw.strip()
    if not raw:
        return None
    try:
        col = int(raw)
    except ValueError:
        return None

    if 0 <= col < width:
        return col
    if 1 <= col <= width:
        return col - 1
    return None


def parse_moves(raw: str, width: int) -> List[int]:
    """Parse a digit string of 0-based columns such as "3342"."""

    moves = []
    for ch in raw.strip():
        if not ch.isdigit() or int(ch) >= width:
            raise ValueError(f"invalid column {ch!r} in move string")
        moves.append(int(ch))
    return moves


def replay(cfg: Connect4Config, moves: Sequence[int]) -> GameState:
    s = initial_state(cfg, HUMAN_PLAYER)
    for col in moves:
        s = play(cfg, s, col)
    return s


def prompt_for_human_move(cfg: Connect4Config, board: Board, player: int, name: str) -> int:
    legal = legal_moves(cfg, board)
    prompt = f"{name} ({_symbol(player)}) to move. Column {legal}: "

    while True:
        raw = input(prompt)
        col = _parse_column(raw, cfg.cols)
        if col is None:
            print("Enter a column index (0-based or 1-based).")
            continue
        if col not in legal:
            print("Illegal move: column full or out of range.")
            continue
        return col



def build_agent(
    kind: str,
    *,
    depth: int,
    model: Optional[Path],
    device: str,
    seed: Optional[int],
    name: Optional[str] = None,
) -> Agent:
    if kind == "human":
        return HumanAgent(name or "You", prompt_for_human_move)
    if kind == "minimax":
        return MinimaxAgent(name or f"Minimax d{depth}", depth=depth)
    if kind == "random":
        return RandomAgent(name or "Random", seed=seed)
    if kind == "learned":
        if model is None:
            raise ValueError("the learned agent needs a model file")
        return LearnedAgent.from_path(name or f"Model {model.name}", model, device=device)
    raise ValueError(f"unsupported agent choice: {kind}")


def play_session(
    cfg: Connect4Config,
    agent: Agent,
    *,
    human_starts: bool,
    counts: Optional[PlayCounts],
    rng: random.Random,
    human_player: int = HUMAN_PLAYER,
) -> GameSession:
    session = start_session(cfg, agent.identifier, human_starts=human_starts, human_player=human_player)
    if counts is not None:
        print(f"Games played against {session.agent_id}: {counts.get(session.agent_id)}")

    while not session.is_over:
        print(render_board(cfg, session.state.board))
        if session.human_to_move:
            col = prompt_for_human_move(cfg, session.state.board, session.human_player, "You")
            try:
                session = human_move(cfg, session, col)
            except InvalidMove as exc:
                print(f"Illegal move: {exc}")
                continue
        else:
            print(f"{agent.name} is thinking...")
            session, col = ai_move(cfg, session, agent, rng)
            if isinstance(agent, MinimaxAgent) and agent.last_decision is not None:
                logger.debug("%s", format_decision(agent.last_decision))
            print(f"{agent.name} ({_symbol(session.ai_player)}) -> col {col}, row {session.state.last_row}")
        print("")

    tr = terminal_result(cfg, session.state)
    line = winning_line(cfg, session.state.board, tr.winner) if tr.winner in (-1, 1) else None
    print(render_board(cfg, session.state.board, line or ()))
    messages = {WON: "Congratulations! You win!", LOST: f"{agent.name} wins.", DRAW: "It's a draw!"}
    print(f"Result: {messages[session.status]}")
    print(f"Moves: {format_move_history(session.state.move_history)}")

    if counts is not None:
        counts.increment(session.agent_id)
    return session


def watch_game(cfg: Connect4Config, x_agent: Agent, o_agent: Agent) -> GameState:
    """Play any two agents against each other, printing every move."""

    def show(s: GameState) -> None:
        move = s.move_history[-1]
        print(f"Move: {_symbol(move.player)} -> col {s.last_col}, row {s.last_row}")
        print("")
        print(render_board(cfg, s.board))

    print(render_board(cfg, initial_state(cfg, HUMAN_PLAYER).board))
    final = play_game(cfg, x_agent, o_agent, on_move=show)

    tr = terminal_result(cfg, final)
    if tr.winner == 0:
        print("Result: draw")
    else:
        line = winning_line(cfg, final.board, tr.winner) or ()
        print(render_board(cfg, final.board, line))
        print(f"Result: {_symbol(tr.winner)} wins ({tr.reason})")
    print(f"Moves: {format_move_history(final.move_history)}")
    return final


def _pick_seed(base: Optional[int], override: Optional[int], *, offset: int = 0) -> Optional[int]:
    if override is not None:
        return override
    if base is not None:
        return base + offset
    return None


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Connect-4 (6x7) against a search or learned opponent")
    parser.add_argument("--x", choices=AGENT_CHOICES, default="human", help="agent for X (moves first)")
    parser.add_argument("--o", choices=AGENT_CHOICES, default="minimax", help="agent for O")

    parser.add_argument("--depth", type=int, default=4, help="minimax search depth (plies)")
    parser.add_argument("--depth-x", type=int, default=None, help="minimax depth for X")
    parser.add_argument("--depth-o", type=int, default=None, help="minimax depth for O")

    parser.add_argument("--model", type=Path, default=None, help="model file for a learned agent")
    parser.add_argument("--model-x", type=Path, default=None, help="model file for X")
    parser.add_argument("--model-o", type=Path, default=None, help="model file for O")
    parser.add_argument("--device", type=str, default="auto", help="cpu, cuda, or auto")

    parser.add_argument("--seed", type=int, default=None, help="base random seed (random agents and fallbacks)")
    parser.add_argument("--seed-x", type=int, default=None, help="seed for X random agent")
    parser.add_argument("--seed-o", type=int, default=None, help="seed for O random agent")

    parser.add_argument("--counts-file", type=Path, default=None, help="JSON file tracking games played")
    parser.add_argument("--analyze", type=str, default=None, metavar="MOVES", help="rank moves after MOVES, e.g. 3342")
    parser.add_argument("--games", type=int, default=0, help="play N X-vs-O games with alternating starts")
    parser.add_argument("--list-models", type=Path, default=None, metavar="CATALOG", help="list models in CATALOG")

    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging verbosity",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    cfg = Connect4Config()
    cfg.validate()

    def side_options(side: str) -> Tuple[str, int, Optional[Path], Optional[int]]:
        if side == "x":
            choice = args.x
            depth = args.depth_x if args.depth_x is not None else args.depth
            model = args.model_x if args.model_x is not None else args.model
            seed = _pick_seed(args.seed, args.seed_x, offset=0)
        else:
            choice = args.o
            depth = args.depth_o if args.depth_o is not None else args.depth
            model = args.model_o if args.model_o is not None else args.model
            seed = _pick_seed(args.seed, args.seed_o, offset=1)
        return choice, depth, model, seed

    if args.depth < 1:
        parser.error("--depth must be >= 1")
    for side in ("x", "o"):
        choice, depth, model, _ = side_options(side)
        if depth < 1:
            parser.error(f"--depth-{side} must be >= 1")
        if choice == "learned" and model is None:
            parser.error(f"--model or --model-{side} is required when {side.upper()} is learned")

    if args.list_models is not None:
        try:
            entries = load_catalog(args.list_models)
        except CatalogError as exc:
            parser.error(str(exc))
        for entry in entries:
            print(f"{entry.name}: {entry.file}")
        return

    if args.analyze is not None:
        try:
            s = replay(cfg, parse_moves(args.analyze, cfg.cols))
        except ValueError as exc:
            parser.error(str(exc))
        print(render_board(cfg, s.board))
        if terminal_result(cfg, s).is_terminal:
            print("Position is already decided.")
            return
        print(f"{_symbol(s.current_player)} to move")
        print(format_decision(select_move(cfg, s.board, args.depth, player=s.current_player)))
        return

    if args.games > 0 and "human" in (args.x, args.o):
        parser.error("--games needs two computer agents")

    def side_agent(side: str) -> Agent:
        choice, depth, model, seed = side_options(side)
        name = None
        if args.x == args.o:
            name = f"{choice.capitalize()} {side.upper()}"
        return build_agent(choice, depth=depth, model=model, device=args.device, seed=seed, name=name)

    x_agent = side_agent("x")
    o_agent = side_agent("o")

    if args.games > 0:
        result = run_match(cfg, x_agent, o_agent, games=args.games)
        print(
            f"{x_agent.name} vs {o_agent.name}: games={result.games} "
            f"wins/draw/loss={result.wins}/{result.draws}/{result.losses}"
        )
        return

    if (args.x == "human") != (args.o == "human"):
        human_player = HUMAN_PLAYER if args.x == "human" else -HUMAN_PLAYER
        agent = o_agent if args.x == "human" else x_agent
        counts = PlayCounts(args.counts_file) if args.counts_file is not None else None
        play_session(
            cfg,
            agent,
            human_starts=human_player == HUMAN_PLAYER,
            counts=counts,
            rng=random.Random(args.seed),
            human_player=human_player,
        )
        return

    watch_game(cfg, x_agent, o_agent)


if __name__ == "__main__":
    main()
