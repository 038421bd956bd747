"""FastAPI-powered web UI for playing time-travel tic-tac-toe in the browser."""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from .game import BOARD_SIZE
from .history import GameHistory

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Container for one player's game history."""

    history: GameHistory = field(default_factory=GameHistory)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(
    title="Time Travel Tic-Tac-Toe",
    description="Tic-tac-toe with a move list you can jump back into",
)


class MoveRequest(BaseModel):
    """Request payload for placing a mark on the current board."""

    cell: int = Field(ge=0, le=BOARD_SIZE - 1, description="Row-major cell index")


class JumpRequest(BaseModel):
    """Request payload for revisiting an earlier snapshot."""

    move: int = Field(ge=0, description="History index taken from the move list")


def _create_session() -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    session = GameSession()
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    logger.info("Created game %s", session_id)
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        logger.warning("Unknown game %s", game_id)
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _state_payload(game_id: str, session: GameSession) -> Dict[str, object]:
    """Build the JSON state; the caller must hold ``session.lock``."""

    history = session.history
    line = history.winning_line()
    moves: List[Dict[str, object]] = [
        {"move": move, "label": label} for move, label in history.move_descriptors()
    ]
    return {
        "id": game_id,
        "squares": [c or "" for c in history.current_board()],
        "currentMove": history.current_move,
        "nextPlayer": history.player_to_move(),
        "winner": history.winner(),
        "winningLine": list(line) if line else None,
        "status": history.status(),
        "moves": moves,
    }


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        return _state_payload(game_id, session)


@app.post("/api/game")
def create_game() -> Dict[str, object]:
    game_id, session = _create_session()
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(game_id: str, request: MoveRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        accepted = session.history.submit_move(request.cell)
        state = _state_payload(game_id, session)
    state["accepted"] = accepted
    return state


@app.post("/api/game/{game_id}/jump")
def jump(game_id: str, request: JumpRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        try:
            session.history.jump_to(request.move)
        except ValueError as exc:
            logger.warning("Bad jump in game %s: %s", game_id, exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return _state_payload(game_id, session)


@app.post("/api/game/{game_id}/reset")
def reset_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        session.history.reset()
        return _state_payload(game_id, session)


@app.delete("/api/game/{game_id}")
def end_game(game_id: str) -> Dict[str, str]:
    if SESSIONS.pop(game_id, None) is None:
        logger.warning("Unknown game %s", game_id)
        raise HTTPException(status_code=404, detail="Game not found")
    logger.info("Ended game %s", game_id)
    return {"id": game_id}


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>Time Travel Tic-Tac-Toe</title>
    <style>
      body {
        margin: 0;
        min-height: 100vh;
        display: flex;
        justify-content: center;
        padding: 2rem 1rem;
        font-family: system-ui, -apple-system, \"Segoe UI\", sans-serif;
        color: #13203a;
        background: #eef1fb;
      }
      .game {
        display: flex;
        gap: 2rem;
        align-items: flex-start;
      }
      .status {
        margin-bottom: 0.75rem;
        font-weight: 600;
      }
      .board-row {
        display: flex;
      }
      .square {
        width: 3.5rem;
        height: 3.5rem;
        margin: -1px -1px 0 0;
        border: 1px solid #999;
        background: #fff;
        font-size: 1.75rem;
        font-weight: 700;
        cursor: pointer;
      }
      .square.win {
        background: #ffe9a8;
      }
      .new-game {
        margin-top: 0.75rem;
      }
      .game-info ol {
        margin: 0;
        padding-left: 1.5rem;
      }
      .game-info button.current {
        font-weight: 700;
      }
    </style>
  </head>
  <body>
    <div class=\"game\">
      <div class=\"game-board\">
        <div class=\"status\" id=\"status\">Loading...</div>
        <div id=\"board\"></div>
        <button id=\"new-game\" class=\"new-game\">New game</button>
      </div>
      <div class=\"game-info\">
        <ol id=\"moves\"></ol>
      </div>
    </div>
    <script>
      let gameState = null;

      async function request(path, body) {
        const options = body === undefined
          ? { method: 'POST' }
          : {
              method: 'POST',
              headers: { 'Content-Type': 'application/json' },
              body: JSON.stringify(body),
            };
        const response = await fetch(path, options);
        if (!response.ok) {
          const error = await response.json().catch(() => ({}));
          throw new Error(error.detail || response.statusText);
        }
        return response.json();
      }

      function render() {
        document.getElementById('status').textContent = gameState.status;

        const board = document.getElementById('board');
        board.innerHTML = '';
        const winning = new Set(gameState.winningLine || []);
        for (let row = 0; row < 3; row += 1) {
          const rowEl = document.createElement('div');
          rowEl.className = 'board-row';
          for (let col = 0; col < 3; col += 1) {
            const cell = row * 3 + col;
            const button = document.createElement('button');
            button.className = winning.has(cell) ? 'square win' : 'square';
            button.textContent = gameState.squares[cell];
            button.addEventListener('click', () => play(cell));
            rowEl.appendChild(button);
          }
          board.appendChild(rowEl);
        }

        const moves = document.getElementById('moves');
        moves.innerHTML = '';
        for (const { move, label } of gameState.moves) {
          const item = document.createElement('li');
          const button = document.createElement('button');
          button.textContent = label;
          if (move === gameState.currentMove) {
            button.className = 'current';
          }
          button.addEventListener('click', () => jumpTo(move));
          item.appendChild(button);
          moves.appendChild(item);
        }
      }

      async function play(cell) {
        gameState = await request(`/api/game/${gameState.id}/move`, { cell });
        render();
      }

      async function jumpTo(move) {
        gameState = await request(`/api/game/${gameState.id}/jump`, { move });
        render();
      }

      async function restart() {
        gameState = await request(`/api/game/${gameState.id}/reset`);
        render();
      }

      document.getElementById('new-game').addEventListener('click', restart);

      request('/api/game').then((state) => {
        gameState = state;
        render();
      }).catch((error) => {
        document.getElementById('status').textContent = `Unable to start: ${error.message}`;
      });
    </script>
  </body>
</html>
"""
