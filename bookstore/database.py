"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the bookstore API.

The default database is a SQLite file next to the app, matching how the
store is usually run during development. Any SQLAlchemy URL works; for
server databases (PostgreSQL, MySQL) the connection pool settings apply.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives → create a new session
2. Use session for all database operations in that request
3. Commit on success, rollback on failure
4. Close session when request ends

This is implemented using FastAPI's dependency injection.
"""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bookstore.config import Settings, get_settings

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
def build_engine(config: Settings) -> Engine:
    """
    Create the SQLAlchemy engine for the configured database URL.

    SQLite connections are shared across FastAPI's worker threads, so the
    same-thread check is disabled. SQLite also rejects the pool sizing
    arguments, which only make sense for server databases.
    """
    if config.is_sqlite:
        return create_engine(
            config.database_url,
            connect_args={"check_same_thread": False},
            echo=config.debug,
        )

    return create_engine(
        config.database_url,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_pre_ping=True,  # Verify connections are alive before using
        echo=config.debug,  # Log SQL in debug mode
    )


engine = build_engine(settings)


# =============================================================================
# Session Factory
# =============================================================================
# - autocommit=False: We control when to commit
# - autoflush=False: Don't auto-flush before queries (more predictable behavior)

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

    Alembic reads Base.metadata to discover tables for migrations.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Code before yield creates the session, the route handler receives it,
    and the finally block closes it even if the handler raised.

    Usage in Routes:
        @router.get("/Books/{book_id}")
        def get_book(book_id: int, db: Session = Depends(get_db)):
            ...

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
def create_tables() -> None:
    """
    Create all database tables.

    Used on startup in development and by the seed script.

    WARNING: In production, use Alembic migrations instead!
    """
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """
    Drop all database tables.

    DANGER: This deletes all data! Only use in development and tests.
    """
    Base.metadata.drop_all(bind=engine)
