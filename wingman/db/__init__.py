"""Database helpers for the SQL key/value store."""

from .session import Base, build_engine, get_engine, reset_engine, session_scope

__all__ = ["Base", "build_engine", "get_engine", "reset_engine", "session_scope"]
