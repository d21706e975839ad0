"""
Engine and session wiring for the job store.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from talentmatch.config import settings
from talentmatch.logger import get_logger

DEFAULT_DATABASE_URL = "sqlite:///./talentmatch.db"

# Applied to every new SQLite connection.
SQLITE_PRAGMAS = ("busy_timeout=30000", "foreign_keys=ON")
# These need the write lock and may be refused while another process holds it.
SQLITE_WAL_PRAGMAS = ("journal_mode=WAL", "synchronous=NORMAL")

logger = get_logger(__name__)


class Base(DeclarativeBase):
    pass


def build_engine(url: str | None = None) -> Engine:
    resolved = (url or "").strip() or DEFAULT_DATABASE_URL
    if not resolved.startswith("sqlite"):
        return create_engine(resolved, pool_pre_ping=True)

    sqlite_engine = create_engine(resolved, connect_args={"check_same_thread": False, "timeout": 30})
    event.listen(sqlite_engine, "connect", _on_sqlite_connect)
    return sqlite_engine


def _on_sqlite_connect(dbapi_connection, _connection_record) -> None:
    if not isinstance(dbapi_connection, sqlite3.Connection):
        return

    cursor = dbapi_connection.cursor()
    try:
        for pragma in SQLITE_PRAGMAS:
            cursor.execute(f"PRAGMA {pragma};")
        for pragma in SQLITE_WAL_PRAGMAS:
            try:
                cursor.execute(f"PRAGMA {pragma};")
            except sqlite3.OperationalError as exc:
                logger.debug(f"Skipped PRAGMA {pragma}: {exc}")
    finally:
        cursor.close()


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=True)


def get_db() -> Iterator[Session]:
    with SessionLocal() as db:
        yield db


def init_db() -> None:
    """Create missing tables; existing ones are left untouched."""
    from talentmatch import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.debug(f"Schema ready on {engine.url.render_as_string(hide_password=True)}")
