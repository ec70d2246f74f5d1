# app/transport/protocols.py
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, Field, ValidationError

from app.domain.common.types import Status


# =========================
# Incoming (Client -> Server)
# =========================

class InBase(BaseModel):
    type: str
    sessionId: str = Field(min_length=1)


class InJoinGame(InBase):
    type: Literal["joinGame"] = "joinGame"
    playerName: str


class InStartGame(InBase):
    type: Literal["startGame"] = "startGame"


class InStartDrawing(InBase):
    type: Literal["startDrawing"] = "startDrawing"
    word: str


class InGuessWord(InBase):
    # guesses of any length, empty included, are evaluated literally
    type: Literal["guessWord"] = "guessWord"
    guess: str


class InDrawingData(InBase):
    """
    Opaque stroke payload; relayed verbatim, never inspected.
    """
    type: Literal["drawingData"] = "drawingData"
    data: Any = None


class InSnapshot(InBase):
    type: Literal["snapshot"] = "snapshot"


IncomingMessage = Union[
    InJoinGame,
    InStartGame,
    InStartDrawing,
    InGuessWord,
    InDrawingData,
    InSnapshot,
]


# =========================
# Outgoing (Server -> Client)
# =========================

class OutBase(BaseModel):
    type: str


class OutHello(OutBase):
    type: Literal["hello"] = "hello"
    pid: str


class OutError(OutBase):
    type: Literal["error"] = "error"
    code: str
    message: str


class PlayerView(BaseModel):
    id: str
    name: str


class GameView(BaseModel):
    id: str
    hostId: Optional[str] = None
    players: List[PlayerView] = Field(default_factory=list)
    drawer: Optional[PlayerView] = None
    word: str = ""
    status: Status = "INACTIVE"
    round: int = 0
    maxRounds: int = 3
    drawingQueue: List[PlayerView] = Field(default_factory=list)


class OutGameUpdate(OutBase):
    type: Literal["gameUpdate"] = "gameUpdate"
    game: GameView


class OutDrawingStarted(OutBase):
    type: Literal["drawingStarted"] = "drawingStarted"
    word: str


class OutGuess(OutBase):
    type: Literal["guess"] = "guess"
    playerId: str
    guess: str


class OutCorrectGuess(OutBase):
    type: Literal["correctGuess"] = "correctGuess"
    playerId: str
    guess: str


class OutIncorrectGuess(OutBase):
    type: Literal["incorrectGuess"] = "incorrectGuess"
    playerId: str
    guess: str


class OutDrawingData(OutBase):
    type: Literal["drawingData"] = "drawingData"
    sessionId: str
    data: Any = None


OutgoingEvent = Union[
    OutHello,
    OutError,
    OutGameUpdate,
    OutDrawingStarted,
    OutGuess,
    OutCorrectGuess,
    OutIncorrectGuess,
    OutDrawingData,
]


# =========================
# Parser helpers
# =========================

_INCOMING_BY_TYPE = {
    "joinGame": InJoinGame,
    "startGame": InStartGame,
    "startDrawing": InStartDrawing,
    "guessWord": InGuessWord,
    "drawingData": InDrawingData,
    "snapshot": InSnapshot,
}


def parse_incoming(payload: Dict[str, Any]) -> IncomingMessage:
    """
    Convert raw dict -> validated message model.
    Raises ValidationError if invalid.
    """
    if not isinstance(payload, dict):
        raise ValueError("Message must be a JSON object")

    t = payload.get("type")
    if not isinstance(t, str):
        raise ValidationError.from_exception_data(
            title="IncomingMessage",
            line_errors=[{"loc": ("type",), "input": t, "ctx": {"error": "Missing/invalid type"}, "type": "value_error"}],
        )

    cls = _INCOMING_BY_TYPE.get(t)
    if cls is None:
        raise ValidationError.from_exception_data(
            title="IncomingMessage",
            line_errors=[{"loc": ("type",), "input": t, "ctx": {"error": f"Unknown message type: {t}"}, "type": "value_error"}],
        )

    return cls.model_validate(payload)
