"""Tic-tac-toe with move history and time travel, plus a small web front end."""

from .game import apply_move, check_winner, is_legal_move
from .history import GameHistory
from .ui import app

__all__ = ["GameHistory", "apply_move", "app", "check_winner", "is_legal_move"]
