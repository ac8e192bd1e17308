"""
Database engine and session management.
Provides reusable session handling for Celery tasks, the CLI and scripts.
"""

import logging
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from wagerline.config import get_settings
from wagerline.database.base import Base

logger = logging.getLogger(__name__)

# Lazily built engine; the session factory is bound on first use
_engine: Optional[Engine] = None
SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=True)


def get_engine() -> Engine:
    """Get or create the engine for the configured database."""
    global _engine
    if _engine is None:
        database_url = get_settings().database_url
        engine_kwargs = {"pool_pre_ping": True}
        if database_url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            engine_kwargs.update(pool_size=5, max_overflow=10, pool_recycle=3600)
        _engine = create_engine(database_url, **engine_kwargs)
        SessionLocal.configure(bind=_engine)
    return _engine


def reset_engine(engine: Optional[Engine] = None) -> None:
    """Replace the engine, e.g. to point workers at a different database."""
    global _engine
    if _engine is not None and _engine is not engine:
        _engine.dispose()
    _engine = engine
    if engine is not None:
        SessionLocal.configure(bind=engine)


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """
    Context manager for database sessions in Celery tasks or scripts.

    Usage:
        with get_db_context() as db:
            event = db.get(Event, event_id)
            event.status = "completed"
            db.commit()

    Ensures:
        - Session is properly closed even on exceptions
        - Rollback on error
    """
    get_engine()
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db() -> None:
    """Create all tables for the registered models."""
    import wagerline.models  # noqa: F401  registers mappers

    Base.metadata.create_all(bind=get_engine())
    logger.info("Database tables created")
