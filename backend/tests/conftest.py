"""Pytest fixtures for trash purge testing.

Provides reusable test fixtures for:
- In-memory SQLite engine with the vault schema
- Database session per test
- Cipher factory for trash / active rows
- A fixed reference time for cutoff calculations

Usage:
    def test_purge(db_session, add_cipher, now):
        add_cipher(deleted_days_ago=45)
        assert purge_deleted_ciphers(db_session, PurgeSettings(), now=now) == 1
"""

import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Generator, Optional
from uuid import uuid4

# Set environment variables BEFORE any project imports
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CELERY_BROKER_URL", "memory://")
os.environ.setdefault("CELERY_RESULT_BACKEND", "cache+memory://")

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from vault_trash.models import Base, Cipher
from vault_trash.trash.service import format_timestamp


# 2024-02-14T10:30:00.000Z; thirty days earlier is 2024-01-15T10:30:00.000Z
FIXED_NOW = datetime(2024, 2, 14, 10, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Fixed reference time used as "now" for cutoff calculations."""
    return FIXED_NOW


@pytest.fixture(scope="function")
def engine() -> Generator[Engine, None, None]:
    """In-memory SQLite engine shared across connections of one test."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    try:
        yield test_engine
    finally:
        Base.metadata.drop_all(bind=test_engine)
        test_engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def add_cipher(db_session: Session, now: datetime):
    """Factory that inserts a cipher.

    deleted_days_ago=None creates an active cipher; otherwise the cipher is
    placed in the trash that many days before `now`. deleted_at can be given
    directly as a stored timestamp string instead.
    """

    def _add(
        deleted_days_ago: Optional[float] = None,
        deleted_at: Optional[str] = None,
    ) -> Cipher:
        if deleted_at is None and deleted_days_ago is not None:
            deleted_at = format_timestamp(now - timedelta(days=deleted_days_ago))

        created_at = format_timestamp(now - timedelta(days=400))
        cipher = Cipher(
            id=str(uuid4()),
            user_id="user-1",
            type=1,
            data='{"name":"2.enc|iv|mac"}',
            favorite=False,
            created_at=created_at,
            updated_at=deleted_at or created_at,
            deleted_at=deleted_at,
        )
        db_session.add(cipher)
        db_session.commit()
        return cipher

    return _add


@pytest.fixture
def cipher_count(db_session: Session):
    """Return a callable giving the number of cipher rows currently stored."""

    def _count() -> int:
        db_session.expire_all()
        return db_session.query(Cipher).count()

    return _count
