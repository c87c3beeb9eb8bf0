"""Database engine, session management and transaction helpers."""

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings

logger = logging.getLogger(__name__)


def enable_sqlite_transactions(engine: Engine) -> None:
    """
    Make pysqlite honour BEGIN/SAVEPOINT and enforce foreign keys.

    pysqlite defers BEGIN until the first DML statement, which breaks SAVEPOINT
    semantics; we take over transaction control and emit BEGIN ourselves.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, _connection_record) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn) -> None:
        conn.exec_driver_sql("BEGIN")


engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.DEBUG,
)
if engine.dialect.name == "sqlite":
    enable_sqlite_transactions(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(session: Session, name: str = "batch") -> Iterator[Session]:
    """
    Run a logical batch in one transaction: commit on success, roll back on any error.

    The original exception is re-raised after rollback so callers see the real cause.
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        logger.warning("Transaction aborted and rolled back: %s", name)
        raise


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
