"""REST service to play Klondike through the engine facade."""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import asdict
from typing import Callable, Dict, Optional, TypeVar

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from engine.game import KlondikeGame
from engine.moves import IllegalStateTransition, MoveRejected
from engine.service import GameService, GameView

logging.basicConfig(level=logging.INFO)

T = TypeVar("T")


class StartRequest(BaseModel):
    seed: Optional[int] = None


class SourceModel(BaseModel):
    zone: str
    pile_index: int = 0
    card_index: Optional[int] = None


class TargetModel(BaseModel):
    zone: str
    pile_index: int = 0


class MoveRequest(BaseModel):
    source: SourceModel
    target: TargetModel


class AutoSendRequest(BaseModel):
    source: SourceModel


class FlipRequest(BaseModel):
    pile_index: int = Field(..., ge=0)


class SessionState:
    def __init__(self, service: GameService) -> None:
        self.service = service
        # Sync endpoints run in a thread pool; one call per session at a time.
        self.lock = threading.Lock()


sessions: Dict[str, SessionState] = {}


app = FastAPI(title="Klondike Play Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def ensure_session(session_id: str) -> SessionState:
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def serialize_state(view: GameView) -> Dict[str, object]:
    return asdict(view)


def run_action(session_id: str, action: Callable[[GameService], T]) -> T:
    session = ensure_session(session_id)
    with session.lock:
        try:
            return action(session.service)
        except IllegalStateTransition as exc:
            logging.info(f"Session {session_id} rejected action: {exc}")
            raise HTTPException(status_code=409, detail={"code": exc.code, "detail": str(exc)}) from exc
        except MoveRejected as exc:
            logging.info(f"Session {session_id} rejected action: {exc}")
            raise HTTPException(status_code=400, detail={"code": exc.code, "detail": str(exc)}) from exc
        except ValueError as exc:
            raise HTTPException(status_code=422, detail={"code": "bad_request", "detail": str(exc)}) from exc


@app.post("/session/start")
def start_session(request: StartRequest) -> Dict[str, object]:
    service = GameService(KlondikeGame(seed=request.seed))
    session_id = uuid.uuid4().hex
    sessions[session_id] = SessionState(service)
    logging.info(f"Started session {session_id} (seed={request.seed})")
    return {
        "session_id": session_id,
        "state": serialize_state(service.get_view()),
    }


@app.get("/session/{session_id}")
def get_state(session_id: str) -> Dict[str, object]:
    view = run_action(session_id, lambda service: service.get_view())
    return {"state": serialize_state(view)}


@app.post("/session/{session_id}/new")
def new_game(session_id: str) -> Dict[str, object]:
    view = run_action(session_id, lambda service: service.new_game())
    return {"state": serialize_state(view)}


@app.post("/session/{session_id}/draw")
def draw_stock(session_id: str) -> Dict[str, object]:
    view = run_action(session_id, lambda service: service.draw_stock())
    return {"state": serialize_state(view)}


@app.post("/session/{session_id}/move")
def move(session_id: str, request: MoveRequest) -> Dict[str, object]:
    source, target = request.source, request.target
    view = run_action(
        session_id,
        lambda service: service.move(
            source.zone,
            source.pile_index,
            target.zone,
            target.pile_index,
            card_index=source.card_index,
        ),
    )
    return {"state": serialize_state(view)}


@app.post("/session/{session_id}/auto-send")
def auto_send(session_id: str, request: AutoSendRequest) -> Dict[str, object]:
    source = request.source
    view = run_action(
        session_id,
        lambda service: service.auto_send(source.zone, source.pile_index, card_index=source.card_index),
    )
    return {"state": serialize_state(view)}


@app.post("/session/{session_id}/flip")
def flip(session_id: str, request: FlipRequest) -> Dict[str, object]:
    view = run_action(session_id, lambda service: service.flip(request.pile_index))
    return {"state": serialize_state(view)}


@app.post("/session/{session_id}/undo")
def undo(session_id: str) -> Dict[str, object]:
    view, undone = run_action(session_id, lambda service: service.undo())
    return {"state": serialize_state(view), "undone": undone}
