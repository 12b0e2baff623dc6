# File: sqla_i18n/services/db_utils.py
# Engine and session helpers for applications and tests using the i18n registry.

import logging
from contextlib import contextmanager
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from ..config import get_database_url

log = logging.getLogger(__name__)


def build_engine(url: str = None, **engine_kwargs) -> Engine:
    """
    Create an engine for `url` (defaults to config.get_database_url()).
    SQLite engines get foreign keys enforced; in-memory SQLite shares one connection.
    """
    db_url = url or get_database_url()
    is_sqlite = db_url.startswith("sqlite")

    if is_sqlite:
        engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            engine_kwargs.setdefault("poolclass", StaticPool)

    engine = create_engine(db_url, **engine_kwargs)

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_conn, conn_record):  # noqa: ARG001
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    log.info(f"[DB INFO] Engine created for {engine.url.get_backend_name()}")
    return engine


@contextmanager
def session_scope(session_factory):
    """Session context manager: commit on success, rollback and re-raise on error."""
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception as e:
        log.error(f"[DB ERROR] Session rolled back: {e}")
        session.rollback()
        raise
    finally:
        session.close()
