#slot_manager\infrastructure\sql\database.py

"""SQLAlchemy database setup and session management."""

from contextlib import contextmanager
from typing import Callable, Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from slot_manager.config import settings


# ============================================
# Base for ORM models
# ============================================
Base = declarative_base()


# ============================================
# Engine configuration
# ============================================
def create_db_engine(
    database_url: Optional[str] = None,
    echo: Optional[bool] = None,
) -> Engine:
    """Create SQLAlchemy engine for the settings store."""

    url = database_url or settings.database_url

    connect_args = {}
    if url.startswith("sqlite"):
        # Debounced saves flush from a timer thread
        connect_args["check_same_thread"] = False

    return create_engine(
        url,
        echo=settings.echo_sql if echo is None else echo,
        pool_pre_ping=True,  # Verify connections before using
        connect_args=connect_args,
    )


# ============================================
# Session factory function
# ============================================
def get_session_factory(engine_instance: Engine) -> Callable[[], Session]:
    """Get a session factory bound to the given engine."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine_instance,
        expire_on_commit=False
    )


# ============================================
# Session management
# ============================================
@contextmanager
def session_scope(session_factory: Callable[[], Session]) -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Usage:
        with session_scope(factory) as session:
            row = session.get(SettingsORM, "llamacpp-slot-manager")
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


# ============================================
# Database initialization
# ============================================
def init_db(engine_instance: Engine) -> None:
    """Create all tables."""
    Base.metadata.create_all(bind=engine_instance)


def drop_db(engine_instance: Engine) -> None:
    """Drop all tables (for testing only)."""
    Base.metadata.drop_all(bind=engine_instance)
