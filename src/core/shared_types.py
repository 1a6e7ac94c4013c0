"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING = "waiting"
    ACTIVE = "active"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW = "draw"


# Once reached, no further move may change the status. Only a reset leaves these.
TERMINAL_STATUSES: frozenset[Status] = frozenset(
    {Status.CHECKMATE, Status.STALEMATE, Status.DRAW}
)


class Color(StrEnum):
    LIGHT = "light"
    DARK = "dark"

    @property
    def opponent(self) -> "Color":
        return Color.DARK if self == Color.LIGHT else Color.LIGHT


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class CastlingSide(StrEnum):
    KING_SIDE = "kingSide"
    QUEEN_SIDE = "queenSide"


class SpecialMove(StrEnum):
    NONE = "none"
    CASTLE_KING_SIDE = "castleKingSide"
    CASTLE_QUEEN_SIDE = "castleQueenSide"
    PROMOTION = "promotion"


class CaptureType(StrEnum):
    NORMAL = "normal"
    EN_PASSANT = "enPassant"
