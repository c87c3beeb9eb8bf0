"""Shared SQLite fixtures for storage-backed tests."""

import os
import unittest

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTH_ENABLED", "false")

from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.database import enable_sqlite_transactions  # noqa: E402
from app.models import Base  # noqa: E402

ACTOR_ID = 999999


def make_engine() -> Engine:
    """In-memory SQLite engine with all tables, savepoints and foreign keys enabled."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_transactions(engine)
    Base.metadata.create_all(engine)
    return engine


class DatabaseTestCase(unittest.TestCase):
    """TestCase with a fresh database and session per test."""

    def setUp(self) -> None:
        self.engine = make_engine()
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)
        self.db = self.SessionLocal()

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()
