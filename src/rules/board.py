"""The board holds the configuration of pieces. Rules live elsewhere; this is the grid + its bookkeeping helpers."""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Self

from src.core.shared_types import Color, PieceType
from src.rules.pieces import Piece
from src.rules.position import BOARD_SIZE, Position

STARTING_LAYOUT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

Grid = list[list[Optional[Piece]]]


def empty_grid() -> Grid:
    return [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]


@dataclass
class Board:
    grid: Grid = field(default_factory=empty_grid)

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_LAYOUT)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board from the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * the first group is row 0 (dark back rank), the last group row 7 (light back rank)
        * lower case letters are dark pieces, upper case letters light pieces
        * a number denotes that many consecutive empty squares
        """
        grid = empty_grid()
        for row, fen_one_row in enumerate(fen_str.split("/")):
            col = 0
            for character in fen_one_row:
                if character.isalpha():
                    grid[row][col] = Piece.from_fen(character)
                    col += 1
                else:
                    col += int(character)
        return cls(grid)

    def to_fen(self) -> str:
        """Rows are separated by slashes."""
        return "/".join(self._row_to_fen(row) for row in range(BOARD_SIZE))

    def _row_to_fen(self, row: int) -> str:
        fen_characters: list[str] = []
        empty_count = 0
        for piece in self.grid[row]:
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())

        # if the entire row is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def piece(self, square: Position) -> Optional[Piece]:
        """Off-board squares hold nothing."""
        if not square.is_within_bounds():
            return None
        return self.grid[square.row][square.col]

    def is_empty(self, square: Position) -> bool:
        return self.piece(square) is None

    def is_enemy(self, square: Position, color: Color) -> bool:
        piece = self.piece(square)
        return piece is not None and piece.color != color

    def place_piece(self, piece: Optional[Piece], square: Position) -> None:
        self.grid[square.row][square.col] = piece

    def remove_piece(self, square: Position) -> Optional[Piece]:
        piece = self.piece(square)
        self.grid[square.row][square.col] = None
        return piece

    def move_piece(self, from_square: Position, to_square: Position) -> None:
        """Update the position on the board. Whatever stood on to_square is overwritten."""
        self.place_piece(self.remove_piece(from_square), to_square)

    def occupied(self) -> Iterator[tuple[Position, Piece]]:
        """Walk the board row by row, yielding every occupied square."""
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                piece = self.grid[row][col]
                if piece is not None:
                    yield Position(row, col), piece

    def locate_color(self, color: Color) -> list[Position]:
        return [square for square, piece in self.occupied() if piece.color == color]

    def locate_pieces(self, piece: Piece) -> list[Position]:
        return [square for square, found in self.occupied() if found == piece]

    def locate_king(self, color: Color) -> Optional[Position]:
        kings = self.locate_pieces(Piece(PieceType.KING, color))
        return kings[0] if kings else None

    def copy(self) -> "Board":
        """Pieces are immutable, copying the rows is enough."""
        return Board([list(row) for row in self.grid])
