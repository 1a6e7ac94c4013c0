"""
Application settings, read once from the environment.

    CHESS_DATABASE_URL       SQLAlchemy URL of the session store
    CHESS_SQL_ECHO           "1"/"true"/"yes" to echo SQL statements
    CHESS_LOG_LEVEL          level name passed to logging
    CHESS_DEFAULT_PROMOTION  piece a pawn turns into when the caller does not choose
"""

import os

from src.core.shared_types import PieceType

PROMOTABLE_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


def _env_flag(name: str, default: str = "") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


def _env_promotion(name: str, default: PieceType) -> PieceType:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        piece_type = PieceType(raw.strip().lower())
    except ValueError:
        return default
    return piece_type if piece_type in PROMOTABLE_TYPES else default


DATABASE_URL: str = os.getenv("CHESS_DATABASE_URL", "sqlite:///./chess_sessions.db")
SQL_ECHO: bool = _env_flag("CHESS_SQL_ECHO")
LOG_LEVEL: str = os.getenv("CHESS_LOG_LEVEL", "INFO").upper()
DEFAULT_PROMOTION: PieceType = _env_promotion("CHESS_DEFAULT_PROMOTION", PieceType.QUEEN)
