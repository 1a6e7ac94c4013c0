"""
Game status evaluation
---

Re-derives the status from scratch for the side to move, after every executed move:

1. insufficient material -> draw (overrides everything else)
2. in check, no legal moves -> checkmate
3. not in check, no legal moves -> stalemate
4. in check -> check
5. otherwise -> active
"""

from collections import Counter

from src.core.shared_types import Color, Status
from src.rules.attacks import is_king_in_check
from src.rules.board import Board
from src.rules.legality import filter_legal
from src.rules.moves import generate_candidates
from src.rules.pieces import MINOR_PIECES
from src.rules.state import GameState


def has_any_legal_moves(state: GameState, color: Color) -> bool:
    """Early exit: stop at the first piece with at least one legal move."""
    for square in state.board.locate_color(color):
        piece = state.board.piece(square)
        assert piece is not None
        candidates = generate_candidates(state.board, state, square, piece)
        if filter_legal(state.board, state, square, piece, candidates):
            return True
    return False


def has_insufficient_material(board: Board) -> bool:
    """
    Simplified check, NOT the full chess ruleset. Drawn are only:
    * king vs king
    * king + one knight or bishop vs lone king
    """
    totals: Counter[Color] = Counter()
    minors: Counter[Color] = Counter()
    for _, piece in board.occupied():
        totals[piece.color] += 1
        if piece.type in MINOR_PIECES:
            minors[piece.color] += 1

    if totals[Color.LIGHT] == 1 and totals[Color.DARK] == 1:
        return True

    for lone, other in ((Color.LIGHT, Color.DARK), (Color.DARK, Color.LIGHT)):
        if totals[lone] == 1 and totals[other] == 2 and minors[other] >= 1:
            return True
    return False


def evaluate(state: GameState) -> Status:
    """Status for the side now to move."""
    if has_insufficient_material(state.board):
        return Status.DRAW

    side_to_move = state.current_player
    in_check = is_king_in_check(state.board, state.kings, side_to_move)
    has_legal_moves = has_any_legal_moves(state, side_to_move)

    if not has_legal_moves:
        return Status.CHECKMATE if in_check else Status.STALEMATE
    return Status.CHECK if in_check else Status.ACTIVE
