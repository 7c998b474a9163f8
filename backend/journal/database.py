# backend/journal/database.py
"""
Engine, session factory and the get_db dependency.

The engine is built once at import from settings:
- sqlite (tests, local dev): one shared connection via StaticPool, so an
  in-memory journal is visible to every session
- postgresql: a QueuePool sized by DB_POOL_SIZE / DB_POOL_MAX_OVERFLOW,
  recycled after DB_POOL_RECYCLE seconds, pinged when DB_POOL_PRE_PING is on
"""

import logging
from collections.abc import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from .config import settings

logger = logging.getLogger(__name__)

POOL_TIMEOUT_SECONDS = 30


def _create_engine() -> Engine:
    if settings.is_sqlite:
        logger.info("Using SQLite journal database")
        # sync endpoints run in FastAPI's threadpool
        return create_engine(
            settings.database_url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=settings.debug,
        )

    logger.info(
        "Using PostgreSQL journal database "
        f"(pool_size={settings.db_pool_size}, max_overflow={settings.db_pool_max_overflow}, "
        f"recycle={settings.db_pool_recycle}s, pre_ping={settings.db_pool_pre_ping})"
    )
    return create_engine(
        settings.database_url,
        poolclass=QueuePool,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_pool_max_overflow,
        pool_recycle=settings.db_pool_recycle,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_timeout=POOL_TIMEOUT_SECONDS,
        echo=settings.debug,
    )


engine = _create_engine()
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session, closed when the response is done."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def check_database_health() -> dict:
    """
    Run SELECT 1 against the engine.

    Returns a dict with "status" ("healthy"/"unhealthy"). Healthy results name
    the backend and, for QueuePool engines, the current pool counters;
    unhealthy ones carry the driver error.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Journal database unreachable: {e}")
        return {"status": "unhealthy", "error": str(e)}

    report: dict = {
        "status": "healthy",
        "database": "sqlite" if settings.is_sqlite else "postgresql",
    }
    pool = engine.pool
    if isinstance(pool, QueuePool):
        report["pool"] = {
            "pool_size": pool.size(),
            "checked_in": pool.checkedin(),
            "checked_out": pool.checkedout(),
            "overflow": pool.overflow(),
        }
    return report
