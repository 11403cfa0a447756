"""Database engine, session factory and request dependency."""
from __future__ import annotations

from functools import lru_cache
from typing import Iterator

from sqlalchemy import create_engine, func
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import get_settings

Base = declarative_base()


@lru_cache()
def get_engine() -> Engine:
    """Build the process-wide engine from settings on first use."""
    settings = get_settings()
    if settings.DATABASE_URL.startswith("sqlite"):
        return create_engine(
            settings.DATABASE_URL,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        settings.DATABASE_URL,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_pre_ping=True,
    )


SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def new_session() -> Session:
    return SessionLocal(bind=get_engine())


def get_db() -> Iterator[Session]:
    """Yield a request-scoped session."""
    db = new_session()
    try:
        yield db
    finally:
        db.close()


def allocate_id(db: Session, column) -> int:
    """Next legacy surrogate id (``MAX(id) + 1``) inside the current transaction."""
    current = db.query(func.max(column)).scalar()
    return int(current or 0) + 1
