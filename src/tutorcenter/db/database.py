"""Database engine and session management.

Provides engine setup, schema initialization and ORM session handling for
the tutoring center API.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Generator

import structlog
from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from tutorcenter.db.models import Base

logger = structlog.get_logger(__name__)

# Default database location
DEFAULT_DB_URL = "sqlite:///db/tutorcenter.db"

# Current engine (module-level, one per process)
_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def _build_engine(database_url: str, echo: bool = False) -> Engine:
    url = make_url(database_url)
    connect_args = {}

    if url.get_backend_name() == "sqlite":
        # Request handlers run in a threadpool
        connect_args["check_same_thread"] = False
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(database_url, echo=echo, connect_args=connect_args)

    if url.get_backend_name() == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def init_db(database_url: str | None = None, echo: bool = False) -> Engine:
    """Initialize database with schema.

    Creates the engine and all required tables if they don't exist.

    Args:
        database_url: SQLAlchemy URL. Defaults to sqlite:///db/tutorcenter.db
        echo: Log emitted SQL

    Returns:
        The configured engine
    """
    global _engine, _session_factory

    reset_db()

    _engine = _build_engine(database_url or DEFAULT_DB_URL, echo=echo)
    _session_factory = sessionmaker(bind=_engine, expire_on_commit=False)

    Base.metadata.create_all(_engine)

    logger.info("database.initialized", url=_engine.url.render_as_string(hide_password=True))
    return _engine


def get_engine() -> Engine:
    """Return the current engine, initializing the default database if needed."""
    if _engine is None:
        init_db()
    assert _engine is not None
    return _engine


@contextmanager
def get_db() -> Generator[Session, None, None]:
    """Get ORM session as context manager.

    Commits on success, rolls back and re-raises on error.

    Example:
        with get_db() as db:
            students = db.scalars(select(Student)).all()
    """
    get_engine()
    assert _session_factory is not None

    db = _session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency yielding a request-scoped ORM session."""
    with get_db() as db:
        yield db


def list_table_names() -> list[str]:
    """Return the table names reported by the live database."""
    return sorted(inspect(get_engine()).get_table_names())


def reset_db() -> None:
    """Dispose the current engine, if any."""
    global _engine, _session_factory

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None
