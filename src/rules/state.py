"""
Game state: the board plus all bookkeeping the rules need, and the ephemeral selection of the local player.

There is no module level "current game". Every operation takes the GameState it works on.
"""

from dataclasses import dataclass, field
from typing import Optional

from src.core.shared_types import CaptureType, Color, SpecialMove, Status
from src.rules.board import Board
from src.rules.castling import CastlingRights
from src.rules.moves import Move
from src.rules.pieces import Piece
from src.rules.position import Position


def starting_kings() -> dict[Color, Position]:
    return {
        Color.LIGHT: Position.from_algebraic("e1"),
        Color.DARK: Position.from_algebraic("e8"),
    }


def no_captures() -> dict[Color, list[Piece]]:
    return {color: [] for color in Color}


@dataclass(frozen=True)
class MoveRecord:
    """Immutable entry of the move history."""

    piece: Piece
    from_square: Position
    to_square: Position
    captured_piece: Optional[Piece] = None
    special_move: SpecialMove = SpecialMove.NONE
    capture_type: Optional[CaptureType] = None


@dataclass
class GameState:
    board: Board = field(default_factory=Board.starting_position)
    current_player: Color = Color.LIGHT
    status: Status = Status.WAITING
    castling_rights: CastlingRights = field(default_factory=CastlingRights)
    en_passant_target: Optional[Position] = None
    kings: dict[Color, Position] = field(default_factory=starting_kings)
    captured_pieces: dict[Color, list[Piece]] = field(default_factory=no_captures)
    move_history: list[MoveRecord] = field(default_factory=list)

    # --- ephemeral: never meaningful across a snapshot boundary ---
    selected: Optional[Position] = None
    valid_moves: list[Move] = field(default_factory=list)

    @property
    def last_move(self) -> Optional[MoveRecord]:
        return self.move_history[-1] if self.move_history else None

    def clear_selection(self) -> None:
        self.selected = None
        self.valid_moves = []
