"""
=============================================================================
DATABASE MODULE
=============================================================================
Single source of truth for the SQLAlchemy engine used by the mood analyzer.

Local dev: SQLite file from DATABASE_URL (default ./mood_analyzer.db)
Production: any SQLAlchemy URL supplied through the environment / .env
=============================================================================
"""

from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from mood_analyzer.core.config import settings

DATABASE_URL = settings.DATABASE_URL


def _create_engine():
    """Create the SQLAlchemy engine."""
    if settings.is_sqlite:
        # FastAPI runs sync routes in a threadpool
        return create_engine(
            DATABASE_URL,
            connect_args={"check_same_thread": False},
            pool_pre_ping=True,
        )
    return create_engine(DATABASE_URL, pool_pre_ping=True)


engine = _create_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def initialize_database() -> None:
    """Create tables that do not exist yet and check connectivity."""
    import mood_analyzer.models  # noqa: F401  registers tables
    from mood_analyzer.db.session import Base

    Base.metadata.create_all(bind=engine)
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
