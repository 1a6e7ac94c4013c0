"""Requests and Response models of the session service"""

from typing import Optional

from pydantic import BaseModel, field_validator

from src.core.config import PROMOTABLE_TYPES
from src.core.exceptions import InvalidRequestError
from src.core.models import GameSnapshot
from src.core.shared_types import Color, PieceType, SpecialMove, Status

FILES = "abcdefgh"
RANKS = "12345678"


def _is_algebraic_notation(value: str) -> bool:
    return len(value) == 2 and value[0] in FILES and value[1] in RANKS


# --- REQUEST MODELS ---
class SessionRequest(BaseModel):
    session_id: str

    @field_validator("session_id")
    @classmethod
    def validate_session_id(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise InvalidRequestError("Session identifier must not be empty.")
        return value


class CreateSessionRequest(SessionRequest):
    pass


class SelectPieceRequest(SessionRequest):
    square: str

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not _is_algebraic_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret square: {value!r} as a valid square name."
            )
        return value


class MoveRequest(SessionRequest):
    from_square: str
    to_square: str
    promote_to: Optional[PieceType] = None

    @field_validator("from_square", "to_square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not _is_algebraic_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret square: {value!r} as a valid square name."
            )
        return value

    @field_validator("promote_to")
    @classmethod
    def validate_promotion(cls, value: Optional[PieceType]) -> Optional[PieceType]:
        if value is not None and value not in PROMOTABLE_TYPES:
            raise InvalidRequestError(f"A pawn cannot promote to a {value}.")
        return value


# --- RESPONSE MODELS ---
class SessionResponse(BaseModel):
    session_id: str
    status: Status
    current_player: Color
    winner: Optional[Color]
    snapshot: GameSnapshot


class SelectPieceResponse(BaseModel):
    session_id: str
    square: str
    ok: bool
    legal_moves: list[str]


class MoveResponse(BaseModel):
    session_id: str
    success: bool
    status: Status
    special_move: SpecialMove
    captured_piece: Optional[PieceType]
