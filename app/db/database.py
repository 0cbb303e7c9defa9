"""
Database connection and session management for Absorbey.
"""

import os
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from app.config import config

Base = declarative_base()

# Projects are stored in a SQLite file under DATA_DIR unless DATABASE_URL points elsewhere
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{config.DATA_DIR}/absorbey.db")


def create_db_engine(url: str = DATABASE_URL) -> Engine:
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


@event.listens_for(Engine, "connect")
def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """Turn on foreign keys so deleting a project removes its quiz attempts."""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_db_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DBSession = Session


def init_db(bind: Engine = None) -> None:
    """Create all tables."""
    from app.db.models import ProjectRecord, QuizAttemptRecord  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def get_db() -> Generator[Session, None, None]:
    """
    Yield a database session and close it after the request.

    Used as a FastAPI dependency.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
