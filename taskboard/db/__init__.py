"""Database package"""

from taskboard.db.base import Base
from taskboard.db.session import engine, SessionLocal, get_db, init_models

__all__ = ["Base", "engine", "SessionLocal", "get_db", "init_models"]
