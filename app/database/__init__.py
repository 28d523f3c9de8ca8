from app.database.base import Base
from app.database.engine import engine
from app.database.session import SessionLocal

__all__ = ["Base", "engine", "SessionLocal"]
