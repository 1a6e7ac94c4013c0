"""Orchestration between callers, the rules package and the snapshot repository."""

import logging

from src.api.models import (
    CreateSessionRequest,
    MoveRequest,
    MoveResponse,
    SelectPieceRequest,
    SelectPieceResponse,
    SessionRequest,
    SessionResponse,
)
from src.core.exceptions import GameStateError, RepositoryError, SessionNotFoundError
from src.core.models import GameSnapshot
from src.db.repository import SnapshotRepository
from src.rules import game
from src.rules.position import Position
from src.rules.snapshot import apply_snapshot, from_snapshot, get_snapshot
from src.rules.state import GameState

logger = logging.getLogger(__name__)


class GameSessionService:
    """
    Every call loads the stored snapshot into a fresh GameState, runs one rules operation and stores the result.

    NOTE: Selections are ephemeral and never persisted, so `make_move` re-selects the piece itself.
    The caller is responsible for letting only one writer through per session at a time.
    """

    def __init__(self, repository: SnapshotRepository) -> None:
        self.repo = repository

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """New game in the starting position, waiting for both players."""
        state = game.initialize()
        stored = self.repo.create_session(request.session_id, get_snapshot(state))
        logger.info("Created session %s", request.session_id)
        return self._create_session_response(request.session_id, from_snapshot(stored))

    def get_session(self, request: SessionRequest) -> SessionResponse:
        """Retrieve current game state (e.g. for a peer polling for updates)."""
        state = self._load(request.session_id)
        return self._create_session_response(request.session_id, state)

    def start_game(self, request: SessionRequest) -> SessionResponse:
        """Both players are present: waiting -> active."""
        state = self._load(request.session_id)
        if not game.start_game(state):
            raise GameStateError(
                f"Cannot start session {request.session_id!r}. status: {state.status}"
            )
        self._store(request.session_id, state)
        logger.info("Started session %s", request.session_id)
        return self._create_session_response(request.session_id, state)

    def select_piece(self, request: SelectPieceRequest) -> SelectPieceResponse:
        """Legal moves of the piece on the requested square. Nothing is stored."""
        state = self._load(request.session_id)
        moves, ok = game.select_piece(state, Position.from_algebraic(request.square))
        return SelectPieceResponse(
            session_id=request.session_id,
            square=request.square,
            ok=ok,
            legal_moves=[move.to.to_algebraic() for move in moves],
        )

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """Attempt a move. Only a successful move gets stored."""
        state = self._load(request.session_id)
        result = game.make_move(
            state,
            Position.from_algebraic(request.from_square),
            Position.from_algebraic(request.to_square),
            request.promote_to,
        )
        if result.success:
            self._store(request.session_id, state)
        else:
            logger.debug(
                "Session %s: rejected %s%s",
                request.session_id,
                request.from_square,
                request.to_square,
            )
        return MoveResponse(
            session_id=request.session_id,
            success=result.success,
            status=result.game_status,
            special_move=result.special_move,
            captured_piece=result.captured_piece.type if result.captured_piece else None,
        )

    def apply_remote_snapshot(
        self, request: SessionRequest, snapshot: GameSnapshot
    ) -> SessionResponse:
        """A peer pushed a new snapshot: replace the stored state wholesale."""
        state = self._load(request.session_id)
        apply_snapshot(state, snapshot)
        self._store(request.session_id, state)
        return self._create_session_response(request.session_id, state)

    def reset_game(self, request: SessionRequest) -> SessionResponse:
        """New game in the same session."""
        state = self._load(request.session_id)
        game.reset(state)
        self._store(request.session_id, state)
        logger.info("Reset session %s", request.session_id)
        return self._create_session_response(request.session_id, state)

    def delete_session(self, request: SessionRequest) -> None:
        if self.repo.delete_session(request.session_id) is None:
            raise SessionNotFoundError(f"Session {request.session_id!r} not found.")
        logger.info("Deleted session %s", request.session_id)

    # -- Internal helpers --
    def _load(self, session_id: str) -> GameState:
        """Attempt to find the session in the repository and raise error if it fails."""
        snapshot = self.repo.get_snapshot(session_id)
        if snapshot is None:
            raise SessionNotFoundError(f"Session {session_id!r} not found.")
        return from_snapshot(snapshot)

    def _store(self, session_id: str, state: GameState) -> None:
        if self.repo.update_snapshot(session_id, get_snapshot(state)) is None:
            raise RepositoryError(f"Session {session_id!r} disappeared while updating.")

    def _create_session_response(
        self, session_id: str, state: GameState
    ) -> SessionResponse:
        return SessionResponse(
            session_id=session_id,
            status=state.status,
            current_player=state.current_player,
            winner=game.winner(state),
            snapshot=get_snapshot(state),
        )
