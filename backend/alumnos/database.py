"""Database engine and helpers.

The engine is process-wide state with an explicit lifecycle: the
application lifespan calls `init_engine()` once at startup and
`dispose_engine()` on shutdown. Nothing in this module creates an engine
implicitly; asking for one before `init_engine()` is a programming error.
"""

from typing import Optional

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

_engine: Optional[Engine] = None


def init_engine(url: str, echo: bool = False) -> Engine:
    """Create the process-wide engine for `url`.

    Raises `RuntimeError` if an engine is already initialised.
    """
    global _engine
    if _engine is not None:
        raise RuntimeError("database engine already initialised")
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    _engine = create_engine(url, echo=echo, connect_args=connect_args)
    return _engine


def get_engine() -> Engine:
    """Return the initialised engine or raise `RuntimeError`."""
    if _engine is None:
        raise RuntimeError("database engine not initialised; call init_engine() first")
    return _engine


def dispose_engine() -> None:
    """Release pooled connections and forget the engine."""
    global _engine
    if _engine is not None:
        _engine.dispose()
    _engine = None


def create_db_and_tables():
    """Create database tables using SQLModel metadata.

    Tables that already exist are left untouched, so this is safe to call
    on every startup against a persistent SQLite file.
    """
    # models must be imported so their tables are registered on the metadata
    from . import models  # noqa: F401
    SQLModel.metadata.create_all(get_engine())


def get_session():
    """Yield a database `Session` for FastAPI dependency injection.

    The generator yields a session and ensures it is closed when the
    request scope finishes.
    """
    with Session(get_engine()) as session:
        yield session
