"""Implementation of SnapshotRepository using SQLAlchemy"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.exceptions import RepositoryError
from src.core.models import GameSnapshot
from src.db.schema import DBGameSession

logger = logging.getLogger(__name__)


class SQLSnapshotRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_snapshot(self, session_id: str) -> GameSnapshot | None:
        """Get the stored snapshot, if the session exists."""
        session_db = self._fetch_session(session_id)
        if session_db:
            return self._to_model(session_db)
        return None

    def create_session(self, session_id: str, snapshot: GameSnapshot) -> GameSnapshot:
        """Store a new session and return the stored data."""
        if self._fetch_session(session_id) is not None:
            raise RepositoryError(f"Session {session_id!r} already exists.")

        session_db = DBGameSession(
            session_id=session_id,
            snapshot=snapshot.model_dump(mode="json"),
            status=snapshot.status.value,
        )
        self.db.add(session_db)
        self.db.commit()
        self.db.refresh(session_db)
        logger.debug("Stored new session %s", session_id)
        return self._to_model(session_db)

    def update_snapshot(
        self, session_id: str, snapshot: GameSnapshot
    ) -> GameSnapshot | None:
        """Replace the snapshot of an existing session."""
        session_db = self._fetch_session(session_id)
        if not session_db:
            return None
        session_db.snapshot = snapshot.model_dump(mode="json")
        session_db.status = snapshot.status.value
        self.db.commit()
        self.db.refresh(session_db)
        return self._to_model(session_db)

    def delete_session(self, session_id: str) -> GameSnapshot | None:
        """Remove a session's record."""
        session_db = self._fetch_session(session_id)
        if not session_db:
            return None
        snapshot = self._to_model(session_db)
        self.db.delete(session_db)
        self.db.commit()
        return snapshot

    def _fetch_session(self, session_id: str) -> DBGameSession | None:
        query = select(DBGameSession).where(DBGameSession.session_id == session_id)
        return self.db.scalar(query)

    def _to_model(self, session_db: DBGameSession) -> GameSnapshot:
        """Convert SQLAlchemy model to data transfer model."""
        return GameSnapshot.model_validate(session_db.snapshot)
