"""Database configuration and session management."""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from plan_tracker.config import get_settings

settings = get_settings()


def build_engine(database_url: str):
    """Create an engine; sqlite needs the same-thread check disabled."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


# Create engine
engine = build_engine(settings.database_url)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def init_db(bind=None):
    """Create all tables on the given engine (defaults to the configured one)."""
    # Register models on the metadata
    import plan_tracker.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
