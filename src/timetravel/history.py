"""Move history with time travel for a single tic-tac-toe session."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from .game import (
    EMPTY_BOARD,
    Board,
    Player,
    apply_move,
    check_winner,
    is_legal_move,
    winning_line,
)

logger = logging.getLogger(__name__)

Listener = Callable[["GameHistory"], None]


@dataclass
class GameHistory:
    """Ordered board snapshots plus a pointer to the one being viewed.

    ``history[0]`` is always the empty board and ``history[n]`` is the board
    after the n-th ply. The side to move is derived from the parity of
    ``current_move`` and never stored. Snapshots are only ever added by
    ``submit_move``, so the constructor takes no history.
    """

    history: List[Board] = field(default_factory=lambda: [EMPTY_BOARD], init=False)
    current_move: int = field(default=0, init=False)
    _listeners: List[Listener] = field(default_factory=list, init=False, repr=False)

    # ---- read accessors ----

    def current_board(self) -> Board:
        return self.history[self.current_move]

    def player_to_move(self) -> Player:
        return "X" if self.current_move % 2 == 0 else "O"

    def winner(self) -> Optional[Player]:
        return check_winner(self.current_board())

    def winning_line(self) -> Optional[Tuple[int, int, int]]:
        return winning_line(self.current_board())

    def status(self) -> str:
        winner = self.winner()
        if winner:
            return f"Winner: {winner}"
        return f"Next player: {self.player_to_move()}"

    def move_descriptors(self) -> List[Tuple[int, str]]:
        """(index, label) pairs for every snapshot, oldest first."""
        return [
            (move, f"Go to move #{move}" if move > 0 else "Go to game start")
            for move in range(len(self.history))
        ]

    # ---- commands ----

    def submit_move(self, cell: int) -> bool:
        """Play ``cell`` for the side to move on the current board.

        Illegal moves (occupied cell, or the current board is already won)
        leave the state untouched and return False. A legal move discards
        every snapshot after ``current_move`` before appending the new one.
        """
        board = self.current_board()
        if not is_legal_move(board, cell):
            logger.debug("Rejected move at cell %d on move %d", cell, self.current_move)
            return False

        player = self.player_to_move()
        next_board = apply_move(board, cell, player)
        discarded = len(self.history) - 1 - self.current_move
        del self.history[self.current_move + 1 :]
        self.history.append(next_board)
        self.current_move = len(self.history) - 1
        logger.debug(
            "%s played cell %d (move %d, %d future snapshot(s) discarded)",
            player,
            cell,
            self.current_move,
            discarded,
        )
        self._notify()
        return True

    def jump_to(self, move: int) -> None:
        """View snapshot ``move`` without altering the stored history."""
        if not 0 <= move < len(self.history):
            raise ValueError(
                f"Move {move} is out of range; history has {len(self.history)} entries"
            )
        self.current_move = move
        logger.debug("Jumped to move %d", move)
        self._notify()

    def reset(self) -> None:
        self.history = [EMPTY_BOARD]
        self.current_move = 0
        self._notify()

    # ---- change notification ----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(self)`` after every state change.

        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
