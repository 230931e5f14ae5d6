"""Create the ``kv_entries`` table (idempotent).

Run as ``python -m wingman.db.create_tables``; the app calls ``create_all()``
on startup when ``STORAGE_BACKEND=sql``.
"""
from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # registers KeyValueEntry on Base.metadata


def create_all(engine: Engine | None = None) -> Engine:
    engine = engine or get_engine()
    Base.metadata.create_all(bind=engine, checkfirst=True)
    return engine


if __name__ == "__main__":
    try:
        engine = create_all()
        print(f"kv_entries ready on {engine.url.render_as_string(hide_password=True)}")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
