"""Generate database session"""

import logging
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core import config
from src.core.logging_config import configure_logging
from src.db.schema import Base

logger = logging.getLogger(__name__)

engine = create_engine(config.DATABASE_URL, echo=config.SQL_ECHO)
SessionLocal = sessionmaker(bind=engine)


def init_db() -> None:
    """Ensure all tables are created"""
    configure_logging()
    logger.info("Creating tables for %s", engine.url.render_as_string(hide_password=True))
    Base.metadata.create_all(bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
