# WorkHours - Database Setup
# SQLAlchemy engine, session factory, and FastAPI dependencies

import sqlite3
from typing import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool, StaticPool

from app.config import get_settings
from app.models.base import Base


# Get settings
settings = get_settings()


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


def build_engine(url: str):
    """
    Create an engine for url.

    In-memory SQLite shares one connection so every session sees the same
    database. File SQLite and SQL Server get a real pool, one connection
    per session, so each request's transaction stays isolated.
    """
    if url.startswith("sqlite"):
        if _is_memory_sqlite(url):
            new_engine = create_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                echo=settings.debug,
            )
        else:
            new_engine = create_engine(
                url,
                connect_args={"check_same_thread": False},
                echo=settings.debug,
            )
    else:
        new_engine = create_engine(
            url,
            poolclass=QueuePool,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_pool_recycle,
            pool_pre_ping=True,  # Verify connections before using
            echo=settings.debug,  # Log SQL in debug mode
        )

    event.listen(new_engine, "connect", set_connection_options)
    return new_engine


def set_connection_options(dbapi_connection, connection_record):
    """
    Set connection-level options.

    This runs once when a new connection is created.
    """
    cursor = dbapi_connection.cursor()

    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor.execute("PRAGMA foreign_keys=ON")
    else:
        # Date literals in ymd order regardless of server language
        cursor.execute("SET DATEFORMAT ymd")

    cursor.close()


engine = build_engine(settings.database_url)


# Session factory
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,  # Prevent lazy-load issues after commit
)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a database session.

    Usage in route handlers:

        @router.get("/summary")
        def summary(db: Session = Depends(get_db)):
            ...

    The session is automatically closed after the request completes,
    even if an exception occurs.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """
    Context manager for database sessions outside of FastAPI requests.

    Usage in scripts, CLI commands, or the approval scheduler:

        with get_db_context() as db:
            AutoApprover(db).run()
            db.commit()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """
    Initialize the database schema.

    Creates all tables defined in the models.

    WARNING: This is for development/testing only.
    In production, use Alembic migrations.
    """
    import app.models  # noqa: F401  registers every table on Base.metadata
    Base.metadata.create_all(bind=engine)


def drop_db() -> None:
    """
    Drop all tables.

    WARNING: Destroys all data. Only for development/testing.
    """
    Base.metadata.drop_all(bind=engine)


def check_connection() -> bool:
    """
    Test the database connection.

    Returns True if connection succeeds, raises exception otherwise.
    Useful for health checks and startup verification.
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return True

