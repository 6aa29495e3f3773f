"""
Database connection and session management.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from db.models import Base
import config

# Create engine
engine = create_engine(config.DATABASE_URL, echo=False, pool_pre_ping=True)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def configure_database(database_url: str):
    """Point the session factory at a different database."""
    global engine
    engine = create_engine(database_url, echo=False, pool_pre_ping=True)
    SessionLocal.configure(bind=engine)
    return engine


def init_database():
    """Initialize database tables."""
    Base.metadata.create_all(engine)
