"""
Boundary layer data model(s).

A GameSnapshot is the full, serializable state of one game. It is what the rules package hands to the
persistence / broadcast collaborators and what it accepts back from them.

The rules package assumes any snapshot it applies is structurally valid, so validation happens here,
at construction time. Invalid snapshots raise InvalidSnapshotError.
"""

from typing import Optional, Self

from pydantic import BaseModel, field_validator, model_validator

from src.core.exceptions import InvalidSnapshotError
from src.core.shared_types import (
    CaptureType,
    CastlingSide,
    Color,
    PieceType,
    SpecialMove,
    Status,
)

BOARD_SIZE = 8

# Where king and rooks must stand while the corresponding castling right is held.
CASTLING_HOME_SQUARES: dict[Color, dict[str, tuple[int, int]]] = {
    Color.LIGHT: {"king": (7, 4), CastlingSide.KING_SIDE: (7, 7), CastlingSide.QUEEN_SIDE: (7, 0)},
    Color.DARK: {"king": (0, 4), CastlingSide.KING_SIDE: (0, 7), CastlingSide.QUEEN_SIDE: (0, 0)},
}


class PositionModel(BaseModel):
    row: int
    col: int

    @field_validator("row", "col")
    @classmethod
    def validate_on_board(cls, value: int) -> int:
        if not 0 <= value < BOARD_SIZE:
            raise InvalidSnapshotError(
                f"Coordinate {value} is off the board. Expected 0 <= value < {BOARD_SIZE}."
            )
        return value


class PieceModel(BaseModel):
    type: PieceType
    color: Color


class MoveRecordModel(BaseModel):
    piece: PieceModel
    from_square: PositionModel
    to_square: PositionModel
    captured_piece: Optional[PieceModel] = None
    special_move: SpecialMove = SpecialMove.NONE
    capture_type: Optional[CaptureType] = None


class GameSnapshot(BaseModel):
    """Transport-safe representation of a game, exchanged with persistence and remote peers."""

    board: list[list[Optional[PieceModel]]]
    current_player: Color
    status: Status
    castling_rights: dict[Color, dict[CastlingSide, bool]]
    en_passant_target: Optional[PositionModel] = None
    kings: dict[Color, PositionModel]
    captured_pieces: dict[Color, list[PieceModel]]
    move_history: list[MoveRecordModel]

    @field_validator("board")
    @classmethod
    def validate_board_shape(
        cls, value: list[list[Optional[PieceModel]]]
    ) -> list[list[Optional[PieceModel]]]:
        if len(value) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in value):
            raise InvalidSnapshotError(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}.")
        return value

    @field_validator("castling_rights")
    @classmethod
    def validate_castling_keys(
        cls, value: dict[Color, dict[CastlingSide, bool]]
    ) -> dict[Color, dict[CastlingSide, bool]]:
        for color in Color:
            if set(value.get(color, {})) != set(CastlingSide):
                raise InvalidSnapshotError(
                    f"Castling rights of {color} must list exactly {', '.join(CastlingSide)}."
                )
        return value

    @model_validator(mode="after")
    def validate_consistency(self) -> Self:
        """Kings present and cached correctly, rights not contradicting the board."""
        for color in Color:
            king = PieceModel(type=PieceType.KING, color=color)
            squares = [
                (row, col)
                for row, cells in enumerate(self.board)
                for col, piece in enumerate(cells)
                if piece == king
            ]
            if len(squares) != 1:
                raise InvalidSnapshotError(
                    f"Expected exactly one {color} king on the board, found {len(squares)}."
                )
            cached = self.kings.get(color)
            if cached is None or (cached.row, cached.col) != squares[0]:
                raise InvalidSnapshotError(
                    f"Cached {color} king location does not match the board."
                )

            home = CASTLING_HOME_SQUARES[color]
            rook = PieceModel(type=PieceType.ROOK, color=color)
            for side in CastlingSide:
                if not self.castling_rights[color][side]:
                    continue
                king_row, king_col = home["king"]
                rook_row, rook_col = home[side]
                if (
                    self.board[king_row][king_col] != king
                    or self.board[rook_row][rook_col] != rook
                ):
                    raise InvalidSnapshotError(
                        f"{color} holds the {side} castling right, but king/rook left their squares."
                    )
        return self
