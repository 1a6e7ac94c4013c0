"""Unit tests for src/services/session_service.py"""

from typing import Generator, Optional
from unittest.mock import patch

import pytest

from src.api.models import (
    CreateSessionRequest,
    MoveRequest,
    MoveResponse,
    SelectPieceRequest,
    SessionRequest,
)
from src.core.exceptions import GameStateError, RepositoryError, SessionNotFoundError
from src.core.models import GameSnapshot
from src.core.shared_types import Color, PieceType, SpecialMove, Status
from src.rules import game
from src.rules.position import Position
from src.rules.snapshot import get_snapshot
from src.services.session_service import GameSessionService

SESSION_ID = "friday-night"


# --- MOCK DEPENDENCIES ----
class MockRepository:
    """Mock the SnapshotRepository using a dictionary of snapshots."""

    def __init__(self) -> None:
        self._sessions: dict[str, GameSnapshot] = {}

    def get_snapshot(self, session_id: str) -> GameSnapshot | None:
        return self._sessions.get(session_id)

    def create_session(self, session_id: str, snapshot: GameSnapshot) -> GameSnapshot:
        if session_id in self._sessions:
            raise RepositoryError(f"Session {session_id!r} already exists.")
        self._sessions[session_id] = snapshot
        return snapshot

    def update_snapshot(
        self, session_id: str, snapshot: GameSnapshot
    ) -> GameSnapshot | None:
        if session_id not in self._sessions:
            return None
        self._sessions[session_id] = snapshot
        return snapshot

    def delete_session(self, session_id: str) -> GameSnapshot | None:
        return self._sessions.pop(session_id, None)

    def clear(self) -> None:
        """Clear the repository (useful in between tests)"""
        self._sessions.clear()


@pytest.fixture
def mock_repository() -> Generator[MockRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = MockRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def service(mock_repository: MockRepository) -> GameSessionService:
    """Service holding one freshly created (and started) session"""
    service = GameSessionService(mock_repository)
    service.create_session(CreateSessionRequest(session_id=SESSION_ID))
    service.start_game(SessionRequest(session_id=SESSION_ID))
    return service


def move(
    service: GameSessionService,
    from_square: str,
    to_square: str,
    promote_to: Optional[PieceType] = None,
) -> MoveResponse:
    return service.make_move(
        MoveRequest(
            session_id=SESSION_ID,
            from_square=from_square,
            to_square=to_square,
            promote_to=promote_to,
        )
    )


# --- SERVICE - CREATE / GET ----
def test_create_session(mock_repository: MockRepository) -> None:
    """New session is persisted, and the response shows the starting position."""
    service = GameSessionService(mock_repository)
    response = service.create_session(CreateSessionRequest(session_id=SESSION_ID))

    assert response.session_id == SESSION_ID
    assert response.status == Status.WAITING
    assert response.current_player == Color.LIGHT
    assert response.winner is None
    assert response.snapshot == get_snapshot(game.initialize())
    assert mock_repository.get_snapshot(SESSION_ID) == response.snapshot


def test_create_duplicate_session(service: GameSessionService) -> None:
    with pytest.raises(RepositoryError):
        service.create_session(CreateSessionRequest(session_id=SESSION_ID))


def test_get_session(service: GameSessionService) -> None:
    response = service.get_session(SessionRequest(session_id=SESSION_ID))
    assert response.status == Status.ACTIVE


def test_get_unknown_session(mock_repository: MockRepository) -> None:
    service = GameSessionService(mock_repository)
    with pytest.raises(SessionNotFoundError):
        service.get_session(SessionRequest(session_id="nobody-here"))


# --- SERVICE - START ----
def test_start_game_twice(service: GameSessionService) -> None:
    with pytest.raises(GameStateError):
        service.start_game(SessionRequest(session_id=SESSION_ID))


# --- SERVICE - SELECT ----
def test_select_piece_lists_legal_moves(service: GameSessionService) -> None:
    response = service.select_piece(SelectPieceRequest(session_id=SESSION_ID, square="b1"))
    assert response.ok
    assert sorted(response.legal_moves) == ["a3", "c3"]


def test_select_opponent_piece(service: GameSessionService) -> None:
    response = service.select_piece(SelectPieceRequest(session_id=SESSION_ID, square="b8"))
    assert not response.ok
    assert response.legal_moves == []


# --- SERVICE - MOVE ----
def test_legal_move_is_stored(
    service: GameSessionService, mock_repository: MockRepository
) -> None:
    response = move(service, "e2", "e4")
    assert response.success
    assert response.status == Status.ACTIVE
    assert response.special_move == SpecialMove.NONE
    assert response.captured_piece is None

    stored = mock_repository.get_snapshot(SESSION_ID)
    assert stored is not None
    assert stored.current_player == Color.DARK
    assert len(stored.move_history) == 1


def test_illegal_move_is_not_stored(
    service: GameSessionService, mock_repository: MockRepository
) -> None:
    before = mock_repository.get_snapshot(SESSION_ID)
    with patch.object(mock_repository, attribute="update_snapshot") as mock_update:
        response = move(service, "e2", "e5")
    mock_update.assert_not_called()
    assert not response.success
    assert mock_repository.get_snapshot(SESSION_ID) == before


def test_capture_is_reported(service: GameSessionService) -> None:
    for from_square, to_square in (("e2", "e4"), ("d7", "d5")):
        assert move(service, from_square, to_square).success
    response = move(service, "e4", "d5")
    assert response.captured_piece == PieceType.PAWN


def test_fools_mate_through_the_service(service: GameSessionService) -> None:
    for from_square, to_square in (("f2", "f3"), ("e7", "e5"), ("g2", "g4")):
        assert move(service, from_square, to_square).success
    response = move(service, "d8", "h4")
    assert response.status == Status.CHECKMATE

    session = service.get_session(SessionRequest(session_id=SESSION_ID))
    assert session.winner == Color.DARK
    assert not move(service, "e2", "e4").success


def test_promotion_choice_is_forwarded(mock_repository: MockRepository) -> None:
    state = game.initialize("7k/4P3/8/8/8/8/8/K7")
    mock_repository.create_session(SESSION_ID, get_snapshot(state))
    service = GameSessionService(mock_repository)

    response = move(service, "e7", "e8", promote_to=PieceType.KNIGHT)
    assert response.special_move == SpecialMove.PROMOTION
    assert response.status == Status.DRAW


# --- SERVICE - SNAPSHOT / RESET / DELETE ----
def test_apply_remote_snapshot(
    service: GameSessionService, mock_repository: MockRepository
) -> None:
    remote = game.initialize()
    game.make_move(remote, Position.from_algebraic("d2"), Position.from_algebraic("d4"))
    response = service.apply_remote_snapshot(
        SessionRequest(session_id=SESSION_ID), get_snapshot(remote)
    )
    assert response.current_player == Color.DARK
    assert mock_repository.get_snapshot(SESSION_ID) == get_snapshot(remote)


def test_reset_game(service: GameSessionService) -> None:
    move(service, "e2", "e4")
    response = service.reset_game(SessionRequest(session_id=SESSION_ID))
    assert response.status == Status.WAITING
    assert response.snapshot == get_snapshot(game.initialize())


def test_delete_session(
    service: GameSessionService, mock_repository: MockRepository
) -> None:
    service.delete_session(SessionRequest(session_id=SESSION_ID))
    assert mock_repository.get_snapshot(SESSION_ID) is None
    with pytest.raises(SessionNotFoundError):
        service.delete_session(SessionRequest(session_id=SESSION_ID))
