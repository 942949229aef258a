"""
Database configuration and session management.
"""

import logging
from sqlalchemy import JSON, create_engine
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from app.config import settings

logger = logging.getLogger("kdoc_admin.database")

# Create SQLAlchemy Base
Base = declarative_base()

# Localized text and other free-form documents; JSONB on PostgreSQL
JSONType = JSON().with_variant(JSONB(), "postgresql")


def _engine_kwargs() -> dict:
    if settings.is_sqlite():
        # In-memory SQLite must share one connection across threads
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {"pool_pre_ping": True}


# Create engine
engine = create_engine(settings.database_url, echo=settings.db_echo, **_engine_kwargs())

# Create session factory
SessionLocal = sessionmaker(bind=engine)


def init_database():
    """Initialize database schema"""
    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn)
    logger.info("Database tables created successfully")


def get_db_session():
    """Get database session (for FastAPI dependency injection)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
