"""Defines the types of chess pieces"""

from dataclasses import dataclass
from typing import Self

from src.core.shared_types import Color, PieceType

FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}

MINOR_PIECES: frozenset[PieceType] = frozenset({PieceType.KNIGHT, PieceType.BISHOP})


@dataclass(frozen=True)
class Piece:
    """
    Immutable value. A piece 'moving' means the destination cell now holds an equal Piece.
    Promotion replaces the value in the cell by a new one.
    """

    type: PieceType
    color: Color

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: dark pieces, upper case: light pieces
        color = Color.LIGHT if character.isupper() else Color.DARK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.color == Color.LIGHT
            else PIECE_TO_FEN[self.type].lower()
        )

    def promoted_to(self, new_type: PieceType) -> "Piece":
        return Piece(new_type, self.color)
