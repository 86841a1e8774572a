"""SQLAlchemy engine and request-scoped sessions for the progress store."""

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from chatterly.config import Settings


class Base(DeclarativeBase):
    """Declarative base of the chatterly tables."""


_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def create_store_engine(database_url: str, pool_size: int) -> Engine:
    """
    Build the engine for ``database_url``.

    An in-memory SQLite database lives on a single shared connection; a
    SQLite file is opened per pooled connection and may cross threads.
    """
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(url, pool_size=pool_size, pool_pre_ping=True)
    if url.database in (None, "", ":memory:"):
        return create_engine(
            url, connect_args={"check_same_thread": False}, poolclass=StaticPool
        )
    return create_engine(url, connect_args={"check_same_thread": False})


def initialize_database(settings: Settings) -> Engine:
    """Create the engine and session factory; called once from the app lifespan."""
    global _engine, _session_factory  # noqa: PLW0603

    _engine = create_store_engine(settings.DATABASE_URL, settings.DATABASE_POOL_SIZE)
    _session_factory = sessionmaker(autoflush=False, bind=_engine)
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    """
    Return the application's session factory.

    Raises:
        RuntimeError: If the database has not been initialized or was disposed
    """
    if _session_factory is None:
        raise RuntimeError("Database not initialized. Call initialize_database() first.")
    return _session_factory


def dispose_engine() -> None:
    global _engine, _session_factory  # noqa: PLW0603
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


def get_db(
    session_factory: Annotated[sessionmaker[Session], Depends(get_session_factory)],
) -> Generator[Session, None, None]:
    """Yield a session for the duration of one request."""
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


DatabaseSession = Annotated[Session, Depends(get_db)]
