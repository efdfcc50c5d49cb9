# infra/db/base.py
from __future__ import annotations
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


def build_engine(db_url: str, *, echo: bool = False) -> Engine:
    """
    Create the lookup-store engine.
    SQLite connections are shared across the API worker threads; an in-memory
    database is pinned to a single connection so every session sees it.
    """
    kwargs: dict = {"echo": echo, "future": True}
    if db_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in db_url or db_url.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool
    logger.info("Using database at: %s", db_url)
    return create_engine(db_url, **kwargs)


def build_session_factory(engine: Engine, *, create_schema: bool = True) -> sessionmaker:
    if create_schema:
        # Import for side effects: registers the ORM tables on Base.metadata.
        import infra.db.models  # noqa: F401

        Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


__all__ = ["Base", "build_engine", "build_session_factory"]
