from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


IntentType = Literal[
    "flipInitial",
    "drawFromDeck",
    "drawFromDiscard",
    "replaceCell",
    "discardHeld",
    "flipAfterDiscard",
    "endTurn",
    "startNextRound",
]


class NewGameReq(BaseModel):
    names: List[str]
    targetScore: Optional[int] = 100
    seed: Optional[int] = None


class IntentBody(BaseModel):
    type: IntentType
    row: Optional[int] = Field(None, ge=0, le=2)
    col: Optional[int] = Field(None, ge=0, le=3)


class IntentReq(BaseModel):
    sessionId: str
    intent: IntentBody


class GetStateResp(BaseModel):
    state: Dict[str, Any]


class StateEnvelope(BaseModel):
    sessionId: str
    state: Dict[str, Any]


class IntentResp(BaseModel):
    accepted: bool
    state: Dict[str, Any]
