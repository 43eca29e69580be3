"""
db.engine - Engine bootstrap, session factory and teardown.

The connection string comes from config.DB_URL (or the CLI --db flag);
SQLite gets its pragmas applied on every new connection.
"""

from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from db.models import Base

_engine = None
_SessionLocal: sessionmaker | None = None


def init_db(db_url: str) -> None:
    """Create the engine, apply SQLite pragmas, and emit CREATE TABLE."""
    global _engine, _SessionLocal

    kwargs = {}
    if db_url in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise every session sees an empty DB
        kwargs = {"poolclass": StaticPool,
                  "connect_args": {"check_same_thread": False}}

    _engine = create_engine(db_url, echo=False, future=True, **kwargs)

    if db_url.startswith("sqlite"):
        @event.listens_for(_engine, "connect")
        def _sqlite_pragmas(dbapi_conn, _rec):
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA journal_mode=WAL")
            cur.execute("PRAGMA foreign_keys=ON")
            cur.execute("PRAGMA synchronous=NORMAL")
            cur.close()

    Base.metadata.create_all(_engine)
    _SessionLocal = sessionmaker(bind=_engine, expire_on_commit=False)


def get_session() -> Session:
    """Return a new session.  Caller is responsible for .close()."""
    if _SessionLocal is None:
        raise RuntimeError("Database not initialised - call init_db() first")
    return _SessionLocal()


def dispose_db() -> None:
    """Release pooled connections and forget the session factory."""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None
