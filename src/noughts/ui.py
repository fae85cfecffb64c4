"""FastAPI JSON interface for playing Noughts from a browser front end."""

from __future__ import annotations

import logging
import random
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from fastapi import BackgroundTasks, FastAPI, HTTPException
from pydantic import BaseModel, Field

from .ai import Difficulty
from .session import ComputerThinking, GameMode, GameSession, Rejected

logger = logging.getLogger(__name__)


@dataclass
class SessionHandle:
    """Container for an active Noughts session and its request lock."""

    session: GameSession
    move_log: List[Dict[str, int | str]] = field(default_factory=list)
    ai_pending: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, SessionHandle] = {}
app = FastAPI(title="Noughts", description="Tic-tac-toe against a friend or the computer")


AI_THINK_DELAY: Tuple[float, float] = (0.4, 0.8)


class NewGameRequest(BaseModel):
    """Request payload for starting a new game."""

    mode: GameMode = Field(
        default=GameMode.HUMAN_VS_COMPUTER,
        description="'pvp' for two humans, 'bot' to play the computer",
    )
    difficulty: Difficulty = Field(
        default=Difficulty.EASY,
        description="Computer strength; ignored in pvp mode",
    )


class MoveRequest(BaseModel):
    """Request payload for submitting a move on an existing game."""

    index: int = Field(ge=0, le=8)


def _create_session(mode: GameMode, difficulty: Difficulty) -> Tuple[str, SessionHandle]:
    """Create a new game session and register it for later access."""

    handle = SessionHandle(session=GameSession(mode=mode, difficulty=difficulty))
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = handle
    logger.info(
        "Created game %s (mode=%s, difficulty=%s)", session_id, mode.value, difficulty.value
    )
    return session_id, handle


def _get_session(game_id: str) -> SessionHandle:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _run_ai_turn(game_id: str, game_number: int) -> None:
    handle = SESSIONS.get(game_id)
    if not handle:
        return

    time.sleep(max(0.0, random.uniform(*AI_THINK_DELAY)))

    with handle.lock:
        session = handle.session
        if session.games_started != game_number:
            logger.info("Discarding stale computer turn for game %s", game_id)
            return
        try:
            player = session.current_player
            event = session.play_computer_turn()
            if isinstance(event, Rejected):
                return
            handle.move_log.append({"player": player, "index": session.last_move})
        finally:
            handle.ai_pending = False


def _serialize_session(game_id: str, handle: SessionHandle) -> Dict[str, object]:
    with handle.lock:
        payload = handle.session.snapshot()
        payload["id"] = game_id
        payload["aiPending"] = handle.ai_pending
        payload["moveLog"] = list(handle.move_log)
        return payload


def _apply_player_move(
    game_id: str,
    handle: SessionHandle,
    index: int,
    background_tasks: Optional[BackgroundTasks] = None,
) -> None:
    with handle.lock:
        session = handle.session
        player = session.current_player
        event = session.apply_move(index)
        if isinstance(event, Rejected):
            raise HTTPException(status_code=400, detail=event.reason)

        handle.move_log.append({"player": player, "index": index})

        should_schedule_ai = isinstance(session.state, ComputerThinking)
        if should_schedule_ai:
            handle.ai_pending = True
        game_number = session.games_started

    if should_schedule_ai and background_tasks is not None:
        background_tasks.add_task(_run_ai_turn, game_id, game_number)


@app.post("/api/game")
def create_game(request: NewGameRequest) -> Dict[str, object]:
    game_id, handle = _create_session(request.mode, request.difficulty)
    return _serialize_session(game_id, handle)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    handle = _get_session(game_id)
    return _serialize_session(game_id, handle)


@app.post("/api/game/{game_id}/move")
def make_move(
    game_id: str, request: MoveRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    handle = _get_session(game_id)
    _apply_player_move(game_id, handle, request.index, background_tasks)
    return _serialize_session(game_id, handle)


@app.post("/api/game/{game_id}/rematch")
def rematch(game_id: str) -> Dict[str, object]:
    handle = _get_session(game_id)
    with handle.lock:
        handle.session.start_new_game()
        handle.move_log.clear()
        handle.ai_pending = False
    return _serialize_session(game_id, handle)


@app.post("/api/game/{game_id}/scores/reset")
def reset_scores(game_id: str) -> Dict[str, object]:
    handle = _get_session(game_id)
    with handle.lock:
        handle.session.reset_scores()
    return _serialize_session(game_id, handle)
