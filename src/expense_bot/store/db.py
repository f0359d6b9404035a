"""Engine singleton, schema setup, and transactional session scope.

The engine is created lazily on first use from the database URL handed in by
the caller and cached for the life of the process. ``reset_engine`` drops the
cache, for tests.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session

from expense_bot.store.tables import Base

logger = logging.getLogger(__name__)

_engine: Engine | None = None
_schema_ready: bool = False


class StoreNotConfiguredError(RuntimeError):
    """Raised when no database URL is configured."""


def normalize_database_url(url: str) -> str:
    """Map hosted-Postgres style URLs onto the psycopg driver.

    ``postgres://`` and bare ``postgresql://`` URLs (as exported by Vercel,
    Heroku and friends) are rewritten to ``postgresql+psycopg://``. Other URLs,
    such as ``sqlite:///expenses.db``, pass through unchanged.
    """
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+psycopg://" + url[len(prefix) :]
    return url


def get_engine(database_url: str) -> Engine:
    """Return a cached SQLAlchemy engine for ``database_url``.

    Raises StoreNotConfiguredError if the URL is empty.
    """
    global _engine, _schema_ready
    if not database_url:
        raise StoreNotConfiguredError("No database URL configured")
    if _engine is None:
        url = normalize_database_url(database_url)
        # Requests are served from a threadpool
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        _engine = create_engine(url, pool_pre_ping=True, connect_args=connect_args)
        _schema_ready = False
    return _engine


def ensure_schema(engine: Engine) -> None:
    """Create the expenses table if it does not exist. Runs once per engine."""
    global _schema_ready
    if _schema_ready:
        return
    Base.metadata.create_all(engine, checkfirst=True)
    _schema_ready = True
    logger.info("Expense schema ready", extra={"dialect": engine.dialect.name})


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """Provide a transactional scope: commit on success, roll back on error."""
    session = Session(engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def reset_engine() -> None:
    """Dispose and forget the cached engine. Used for testing."""
    global _engine, _schema_ready
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _schema_ready = False
