"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from dataclasses import dataclass, field
from typing import Self

from src.core.shared_types import CastlingSide, Color, PieceType, SpecialMove
from src.rules.board import Board
from src.rules.pieces import Piece
from src.rules.position import Position


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.

    `between` are the squares that must be empty, `pass_through` the square next to the king
    it crosses on its way (must not be attacked).
    """

    king_from: Position
    king_to: Position
    rook_from: Position
    rook_to: Position
    pass_through: Position
    between: tuple[Position, ...]

    @classmethod
    def from_algebraic(
        cls, k_from: str, k_to: str, r_from: str, r_to: str, between: str
    ) -> Self:
        """Convenience method: to make mapping shown below more readable"""
        king_from = Position.from_algebraic(k_from)
        king_to = Position.from_algebraic(k_to)
        rook_from = Position.from_algebraic(r_from)
        rook_to = Position.from_algebraic(r_to)
        between_squares = tuple(Position.from_algebraic(sq) for sq in between.split())
        # The king always passes over the square the rook lands on.
        return cls(king_from, king_to, rook_from, rook_to, rook_to, between_squares)


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[tuple[Color, CastlingSide], CastlingSquares] = {
    (Color.LIGHT, CastlingSide.KING_SIDE): CastlingSquares.from_algebraic(
        "e1", "g1", "h1", "f1", "f1 g1"
    ),
    (Color.LIGHT, CastlingSide.QUEEN_SIDE): CastlingSquares.from_algebraic(
        "e1", "c1", "a1", "d1", "d1 c1 b1"
    ),
    (Color.DARK, CastlingSide.KING_SIDE): CastlingSquares.from_algebraic(
        "e8", "g8", "h8", "f8", "f8 g8"
    ),
    (Color.DARK, CastlingSide.QUEEN_SIDE): CastlingSquares.from_algebraic(
        "e8", "c8", "a8", "d8", "d8 c8 b8"
    ),
}

CASTLING_TAGS: dict[CastlingSide, SpecialMove] = {
    CastlingSide.KING_SIDE: SpecialMove.CASTLE_KING_SIDE,
    CastlingSide.QUEEN_SIDE: SpecialMove.CASTLE_QUEEN_SIDE,
}


def _all_rights() -> dict[Color, dict[CastlingSide, bool]]:
    return {color: {side: True for side in CastlingSide} for color in Color}


@dataclass
class CastlingRights:
    """
    Rights only ever get revoked during a game, nothing grants them back.
    """

    rights: dict[Color, dict[CastlingSide, bool]] = field(default_factory=_all_rights)

    def has(self, color: Color, side: CastlingSide) -> bool:
        return self.rights[color][side]

    def has_any(self, color: Color) -> bool:
        return any(self.rights[color].values())

    def revoke(self, color: Color, side: CastlingSide) -> None:
        self.rights[color][side] = False

    def revoke_all(self, color: Color) -> None:
        for side in CastlingSide:
            self.revoke(color, side)

    def copy(self) -> "CastlingRights":
        return CastlingRights({color: dict(sides) for color, sides in self.rights.items()})


def side_for_king_move(from_square: Position, to_square: Position) -> CastlingSide:
    """A king moving two files is castling; the direction tells which side."""
    return (
        CastlingSide.KING_SIDE
        if to_square.col > from_square.col
        else CastlingSide.QUEEN_SIDE
    )


def revoke_lost_rights(board: Board, castling_rights: CastlingRights) -> None:
    """
    Checks which rights should get revoked
    ----

    A right survives only while both its king and its rook stand on their home squares.
    * moving the king (castling included) revokes both rights of that color
    * a corner that no longer holds its original rook revokes that side, whatever the cause
      (the rook moved away, or got captured where it stood)
    """
    for (color, side), squares in CASTLING_RULES.items():
        if not castling_rights.has(color, side):
            continue
        king_home = board.piece(squares.king_from) == Piece(PieceType.KING, color)
        rook_home = board.piece(squares.rook_from) == Piece(PieceType.ROOK, color)
        if not (king_home and rook_home):
            castling_rights.revoke(color, side)
