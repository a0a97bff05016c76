from vitrine.database.base import Base
from vitrine.database.engine import engine, init_db
from vitrine.database.session import SessionLocal, get_db

__all__ = ["Base", "engine", "init_db", "SessionLocal", "get_db"]
