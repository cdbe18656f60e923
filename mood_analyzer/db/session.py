from sqlalchemy.orm import declarative_base

from mood_analyzer.db.database import SessionLocal, get_db

Base = declarative_base()

__all__ = ["Base", "SessionLocal", "get_db"]
