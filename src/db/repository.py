"""Protocol repository (implemented with SQLAlchemy in sql_repository.py, in memory by the tests)"""

from typing import Protocol

from src.core.models import GameSnapshot


class SnapshotRepository(Protocol):
    """Persistence layer orchestration. Games are keyed by a session identifier."""

    def get_snapshot(self, session_id: str) -> GameSnapshot | None:
        """Get the stored snapshot, if the session exists."""
        ...

    def create_session(self, session_id: str, snapshot: GameSnapshot) -> GameSnapshot:
        """Store a new session and return the stored data."""
        ...

    def update_snapshot(
        self, session_id: str, snapshot: GameSnapshot
    ) -> GameSnapshot | None:
        """Replace the snapshot of an existing session."""
        ...

    def delete_session(self, session_id: str) -> GameSnapshot | None:
        """Remove a session's record."""
        ...
