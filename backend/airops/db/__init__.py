"""
Database module
"""
from airops.db.database import Base, engine, async_session_maker, get_db, init_db, close_db

__all__ = ["Base", "engine", "async_session_maker", "get_db", "init_db", "close_db"]
