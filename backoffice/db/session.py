"""Database engine, session factory, and dependency injection."""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from typing import Generator

from backoffice.core.config import settings


def _engine_options(url: str) -> dict:
    """Pool options per backend; SQLite gets a single shared connection."""
    if url.startswith("sqlite"):
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {
        "pool_size": 20,
        "max_overflow": 40,
        "pool_timeout": 30,
        "pool_recycle": 1800,
        "pool_pre_ping": True,
    }


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.SQL_ECHO,
    **_engine_options(settings.DATABASE_URL),
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency that provides a DB session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create every table registered on the declarative base."""
    import backoffice.models  # noqa: F401
    from backoffice.db.base import Base

    Base.metadata.create_all(bind=engine)


def commit_or_flush(db: Session, commit: bool) -> None:
    """Commit, or only flush so the caller can add to the same transaction."""
    if commit:
        db.commit()
    else:
        db.flush()
