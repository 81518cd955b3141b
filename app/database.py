"""
Database Configuration Module

SQLAlchemy 2.0 setup for the Reading Tracker API.

We use SYNCHRONOUS SQLAlchemy: every request is a short, independent unit of
work (load one record, mutate it, commit), so a pooled sync engine is enough.

Session Management Pattern
==========================
"Session per request":
1. Request arrives → get_db() opens a session from the pool
2. The session is handed to the services for that request
3. Services commit (or roll back on storage errors)
4. The session is closed when the request ends

The engine (and its connection pool) is created once per process and
disposed by the FastAPI lifespan on shutdown.
"""

import logging
from collections.abc import Generator

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.config import Settings, get_settings

logger = logging.getLogger(__name__)


# =============================================================================
# Database Engine
# =============================================================================
def create_db_engine(settings: Settings) -> Engine:
    """
    Build the SQLAlchemy engine for the configured database.

    Key parameters:
    - pool_size / max_overflow: connection pool sizing (PostgreSQL only)
    - pool_pre_ping: test connection health before using it
    - echo: log all SQL statements in debug mode

    SQLite (development and tests) does not take pool sizing arguments and
    needs check_same_thread=False because FastAPI runs sync routes in a
    threadpool.
    """
    if settings.is_sqlite:
        return create_engine(
            settings.database_url,
            connect_args={"check_same_thread": False},
            echo=settings.debug,
        )

    return create_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
    )


engine = create_db_engine(get_settings())


# =============================================================================
# Session Factory
# =============================================================================
# - autocommit=False: services decide when to commit
# - autoflush=False: don't auto-flush before queries (more predictable)
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses Base.metadata to discover the users and books tables.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Code before yield opens the session, code after yield closes it, and the
    finally block guarantees the connection goes back to the pool even when
    the route raises.

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def check_database_connection(bind: Engine | None = None) -> bool:
    """
    Run a trivial query to confirm the database is reachable.

    Used at startup and by the /health endpoint. Never raises; failures are
    logged and reported as False.
    """
    bind = bind or engine
    try:
        with bind.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error(f"Database connection check failed: {e}")
        return False


def dispose_engine() -> None:
    """Close every pooled connection. Called on application shutdown."""
    engine.dispose()


def create_tables() -> None:
    """
    Create all database tables.

    Useful for development and tests. In production, use Alembic migrations.
    """
    Base.metadata.create_all(bind=engine)

