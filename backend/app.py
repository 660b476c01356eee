from __future__ import annotations

from typing import Callable, Dict, Optional
import logging
import threading
import uuid

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from backend.models import (
    NewGameReq,
    IntentBody,
    IntentReq,
    IntentResp,
    GetStateResp,
    StateEnvelope,
)
from backend.settings import get_settings

from skyjo import (
    AutoAdvance,
    CreateGame,
    DiscardHeld,
    DrawFromDeck,
    DrawFromDiscard,
    EndTurn,
    FlipAfterDiscard,
    FlipInitial,
    GameConfig,
    GameState,
    Intent,
    ReplaceCell,
    StartNextRound,
    advance_if_current,
    apply_intent,
    new_game,
    to_json,
    wants_auto_advance,
)

logger = logging.getLogger(__name__)

SETTINGS = get_settings()


class Session:
    """One hotseat table: the current snapshot plus its pending auto-advance."""

    def __init__(self, state: GameState, auto_advance_seconds: float) -> None:
        self.state = state
        self.lock = threading.Lock()
        self.auto = AutoAdvance(auto_advance_seconds, self._auto_end_turn)

    def apply(self, intent: Intent) -> bool:
        with self.lock:
            nxt = apply_intent(self.state, intent)
            if nxt is self.state:
                return False
            self.auto.cancel()
            self.state = nxt
            if wants_auto_advance(nxt):
                self.auto.schedule(nxt.version)
            return True

    def snapshot(self) -> Dict[str, object]:
        with self.lock:
            return to_json(self.state)

    def _auto_end_turn(self, version: int) -> None:
        with self.lock:
            nxt = advance_if_current(self.state, version)
            if nxt is not self.state:
                self.state = nxt
                logger.info("Auto-advanced to version %s", nxt.version)


# In-memory session store
SESSIONS: Dict[str, Session] = {}


def _new_session_id() -> str:
    return uuid.uuid4().hex


def get_session(session_id: str) -> Session:
    session = SESSIONS.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def _cell_intent(body: IntentBody, make: Callable[[int, int], Intent]) -> Intent:
    if body.row is None or body.col is None:
        raise HTTPException(status_code=422, detail=f"{body.type} requires row and col")
    return make(body.row, body.col)


def to_intent(body: IntentBody) -> Intent:
    if body.type == "flipInitial":
        return _cell_intent(body, FlipInitial)
    if body.type == "replaceCell":
        return _cell_intent(body, ReplaceCell)
    if body.type == "flipAfterDiscard":
        return _cell_intent(body, FlipAfterDiscard)
    simple: Dict[str, Intent] = {
        "drawFromDeck": DrawFromDeck(),
        "drawFromDiscard": DrawFromDiscard(),
        "discardHeld": DiscardHeld(),
        "endTurn": EndTurn(),
        "startNextRound": StartNextRound(),
    }
    intent: Optional[Intent] = simple.get(body.type)
    if intent is None:
        raise HTTPException(status_code=422, detail=f"Unknown intent type: {body.type}")
    return intent


app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=SETTINGS.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> Dict[str, bool]:
    return {"ok": True}


@app.post("/new-game", response_model=StateEnvelope)
def new_game_endpoint(req: NewGameReq) -> StateEnvelope:
    try:
        state = new_game(GameConfig(seed=req.seed))
        created = apply_intent(state, CreateGame(names=req.names, target_score=req.targetScore))
        if created is state:
            raise HTTPException(status_code=422, detail="Need 2 to 6 non-empty player names")
        sid = _new_session_id()
        SESSIONS[sid] = Session(created, SETTINGS.auto_advance_seconds)
        logger.info("New game %s with %d players", sid, len(created.players))
        return StateEnvelope(sessionId=sid, state=to_json(created))
    except HTTPException:
        raise
    except (AssertionError, ValueError) as e:
        logger.warning("new-game rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("new-game failed")
        raise HTTPException(status_code=500, detail=f"new-game failed: {e}")


@app.get("/state/{sessionId}", response_model=GetStateResp)
def get_state_endpoint(sessionId: str) -> GetStateResp:
    session = get_session(sessionId)
    return GetStateResp(state=session.snapshot())


@app.post("/intent", response_model=IntentResp)
def intent_endpoint(req: IntentReq) -> IntentResp:
    try:
        session = get_session(req.sessionId)
        intent = to_intent(req.intent)
        accepted = session.apply(intent)
        if not accepted:
            logger.debug("Rejected %s for session %s", req.intent.type, req.sessionId)
        return IntentResp(accepted=accepted, state=session.snapshot())
    except HTTPException:
        raise
    except (AssertionError, ValueError) as e:
        logger.warning("intent rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("intent failed")
        raise HTTPException(status_code=500, detail=f"intent failed: {e}")


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=SETTINGS.log_level)
    uvicorn.run("backend.app:app", host="0.0.0.0", port=8000, reload=True)
