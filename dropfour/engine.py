"""Connect-4 board model: gravity placement, windows, and win detection."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

import numpy as np

EMPTY = 0
HUMAN_PLAYER = +1
AI_PLAYER = -1


class InvalidMove(ValueError):
    """Raised when a piece cannot be dropped into a column."""

    def __init__(self, col: int, reason: str) -> None:
        super().__init__(f"illegal move in column {col}: {reason}")
        self.col = col
        self.reason = reason


@dataclass(frozen=True)
class Connect4Config:
    rows: int = 6
    cols: int = 7
    k: int = 4

    def validate(self) -> None:
        if self.cols < 1 or self.rows < 1:
            raise ValueError("rows/cols must be >= 1")
        if self.k < 2:
            raise ValueError("k must be >= 2")
        if self.k > max(self.cols, self.rows):
            raise ValueError("k must be <= max(rows, cols)")

    @property
    def center_col(self) -> int:
        return self.cols // 2


@dataclass(frozen=True, eq=False)
class Board:
    """
    Snapshot of the grid. Row 0 is the bottom row.

    The wrapped array is marked read-only; every move produces a new Board.
    """

    cells: np.ndarray  # shape (rows, cols), dtype=int8

    def __getitem__(self, rc: Tuple[int, int]) -> int:
        return int(self.cells[rc])


def _freeze(cells: np.ndarray) -> Board:
    cells.flags.writeable = False
    return Board(cells=cells)


def empty_board(cfg: Connect4Config) -> Board:
    cfg.validate()
    return _freeze(np.zeros((cfg.rows, cfg.cols), dtype=np.int8))


def board_from_grid(cfg: Connect4Config, grid: Sequence[Sequence[int]]) -> Board:
    """Build a board from nested rows, row 0 (the bottom) first."""

    cfg.validate()
    cells = np.array(grid, dtype=np.int8)
    if cells.shape != (cfg.rows, cfg.cols):
        raise ValueError(f"grid shape {cells.shape} does not match ({cfg.rows}, {cfg.cols})")
    if not np.isin(cells, (EMPTY, HUMAN_PLAYER, AI_PLAYER)).all():
        raise ValueError("grid cells must be 0, +1 or -1")
    filled = cells != EMPTY
    # A filled cell may only sit on top of another filled cell.
    if np.any(filled[1:] & ~filled[:-1]):
        raise ValueError("grid has a floating piece")
    return _freeze(cells)


def legal_moves(cfg: Connect4Config, board: Board) -> List[int]:
    return np.nonzero(board.cells[cfg.rows - 1] == EMPTY)[0].tolist()


def drop_row(cfg: Connect4Config, board: Board, col: int) -> Optional[int]:
    empties = np.nonzero(board.cells[:, col] == EMPTY)[0]
    if len(empties) == 0:
        return None
    return int(empties[0])


def apply_move(cfg: Connect4Config, board: Board, col: int, player: int) -> Board:
    if col < 0 or col >= cfg.cols:
        raise InvalidMove(col, "column out of range")
    row = drop_row(cfg, board, col)
    if row is None:
        raise InvalidMove(col, "column full")

    cells = board.cells.copy()
    cells[row, col] = player
    return _freeze(cells)


@lru_cache(maxsize=None)
def window_index(cfg: Connect4Config) -> np.ndarray:
    """
    Flat cell indices for every length-k window, shape (n_windows, k).

    Order: horizontal, vertical, rising diagonal, falling diagonal.
    """

    k = cfg.k
    out: List[List[int]] = []

    def flat(r: int, c: int) -> int:
        return r * cfg.cols + c

    for r in range(cfg.rows):
        for c in range(cfg.cols - k + 1):
            out.append([flat(r, c + i) for i in range(k)])

    for c in range(cfg.cols):
        for r in range(cfg.rows - k + 1):
            out.append([flat(r + i, c) for i in range(k)])

    for r in range(cfg.rows - k + 1):
        for c in range(cfg.cols - k + 1):
            out.append([flat(r + i, c + i) for i in range(k)])

    for r in range(k - 1, cfg.rows):
        for c in range(cfg.cols - k + 1):
            out.append([flat(r - i, c + i) for i in range(k)])

    idx = np.array(out, dtype=np.intp).reshape(-1, k)
    idx.flags.writeable = False
    return idx


def windows(cfg: Connect4Config, board: Board) -> np.ndarray:
    return board.cells.ravel()[window_index(cfg)]


def has_win(cfg: Connect4Config, board: Board, player: int) -> bool:
    return bool(np.any(np.all(windows(cfg, board) == player, axis=1)))


def winning_line(cfg: Connect4Config, board: Board, player: int) -> Optional[List[Tuple[int, int]]]:
    full = np.all(windows(cfg, board) == player, axis=1)
    hits = np.nonzero(full)[0]
    if len(hits) == 0:
        return None
    return [divmod(int(i), cfg.cols) for i in window_index(cfg)[hits[0]]]


def is_full(cfg: Connect4Config, board: Board) -> bool:
    return bool(np.all(board.cells[cfg.rows - 1] != EMPTY))


def is_terminal(cfg: Connect4Config, board: Board) -> bool:
    return (
        has_win(cfg, board, AI_PLAYER)
        or has_win(cfg, board, HUMAN_PLAYER)
        or is_full(cfg, board)
    )


@dataclass(frozen=True)
class Move:
    ply: int
    player: int  # +1 or -1
    row: int
    col: int


@dataclass(frozen=True)
class GameState:
    board: Board
    current_player: int  # +1 or -1
    last_row: int
    last_col: int
    ply: int
    move_history: Tuple[Move, ...]


@dataclass(frozen=True)
class TerminalResult:
    is_terminal: bool
    winner: int  # +1 / -1 / 0 (draw) / 2 (not terminal)
    reason: str


def initial_state(cfg: Connect4Config, first_player: int = HUMAN_PLAYER) -> GameState:
    return GameState(
        board=empty_board(cfg),
        current_player=first_player,
        last_row=-1,
        last_col=-1,
        ply=0,
        move_history=(),
    )


def play(cfg: Connect4Config, s: GameState, col: int) -> GameState:
    """Apply a move for the player to move and hand the turn over."""

    if terminal_result(cfg, s).is_terminal:
        raise InvalidMove(col, "game is over")
    row = drop_row(cfg, s.board, col) if 0 <= col < cfg.cols else None
    board = apply_move(cfg, s.board, col, s.current_player)

    move = Move(ply=s.ply, player=s.current_player, row=int(row), col=col)
    return GameState(
        board=board,
        current_player=-s.current_player,
        last_row=int(row),
        last_col=col,
        ply=s.ply + 1,
        move_history=s.move_history + (move,),
    )


def terminal_result(cfg: Connect4Config, s: GameState) -> TerminalResult:
    for player in (-s.current_player, s.current_player):
        if has_win(cfg, s.board, player):
            return TerminalResult(True, player, "connect-k")
    if is_full(cfg, s.board):
        return TerminalResult(True, 0, "draw")
    return TerminalResult(False, 2, "in-progress")
