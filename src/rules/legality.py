"""
Legality filter
---

A pseudo-legal move is legal when it does not leave the mover's own king in check.

Every candidate is played on the real board through an undo log holding the minimal diff
(the cells it touched and the king cache entry), the king is tested, and the log is reverted.
Nothing else in the game state is touched, so no history / captured pieces / rights can leak out of the simulation.
"""

from dataclasses import dataclass, field
from typing import Optional

from src.core.shared_types import Color, PieceType
from src.rules.attacks import FORWARD, is_king_in_check
from src.rules.board import Board
from src.rules.castling import CASTLING_RULES
from src.rules.moves import Ancillary, Move
from src.rules.pieces import Piece
from src.rules.position import Position


@dataclass
class UndoLog:
    """Prior contents of every cell touched, in the order they were first touched, + the prior king location."""

    cells: list[tuple[Position, Optional[Piece]]] = field(default_factory=list)
    king_entry: Optional[tuple[Color, Position]] = None

    def remember(self, board: Board, square: Position) -> None:
        self.cells.append((square, board.piece(square)))

    def revert(self, board: Board, kings: dict[Color, Position]) -> None:
        # reversed: if a cell was touched twice, the oldest content must win
        for square, piece in reversed(self.cells):
            board.place_piece(piece, square)
        if self.king_entry is not None:
            color, square = self.king_entry
            kings[color] = square


def en_passant_victim(target: Position, mover: Color) -> Position:
    """The pawn taken en passant stands one row behind the target square, seen from the mover."""
    return target.offset(-FORWARD[mover], 0)


def simulate(
    board: Board,
    kings: dict[Color, Position],
    origin: Position,
    piece: Piece,
    move: Move,
) -> UndoLog:
    """Apply the candidate to the board as if it was executed. Returns the log needed to take it back."""
    undo = UndoLog()
    undo.remember(board, origin)
    undo.remember(board, move.to)

    if move.is_en_passant:
        victim = en_passant_victim(move.to, piece.color)
        undo.remember(board, victim)
        board.remove_piece(victim)

    board.move_piece(origin, move.to)

    if move.castling is not None:
        squares = CASTLING_RULES[(piece.color, move.castling)]
        undo.remember(board, squares.rook_from)
        undo.remember(board, squares.rook_to)
        board.move_piece(squares.rook_from, squares.rook_to)

    if piece.type == PieceType.KING:
        undo.king_entry = (piece.color, kings[piece.color])
        kings[piece.color] = move.to

    return undo


def leaves_king_in_check(
    board: Board,
    kings: dict[Color, Position],
    origin: Position,
    piece: Piece,
    move: Move,
) -> bool:
    undo = simulate(board, kings, origin, piece, move)
    try:
        return is_king_in_check(board, kings, piece.color)
    finally:
        undo.revert(board, kings)


def filter_legal(
    board: Board,
    ancillary: Ancillary,
    origin: Position,
    piece: Piece,
    candidates: list[Move],
) -> list[Move]:
    """Keep those candidates that do not put (or leave) the mover in check."""
    return [
        move
        for move in candidates
        if not leaves_king_in_check(board, ancillary.kings, origin, piece, move)
    ]
