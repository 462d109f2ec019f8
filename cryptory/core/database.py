"""Database connection and session management."""
import logging
import os
from datetime import datetime
import pytz
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from cryptory.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

# Korea timezone
KST = pytz.timezone('Asia/Seoul')


def kst_now():
    """Get current datetime in Korea Standard Time (KST).

    Returns:
        datetime: Current datetime in KST timezone
    """
    return datetime.now(KST)


def make_engine(database_url: str):
    """Create an engine, allowing SQLite connections to cross threads."""
    return create_engine(
        database_url,
        connect_args={"check_same_thread": False} if "sqlite" in database_url else {}
    )


# Create SQLAlchemy engine
engine = make_engine(settings.database_url)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()


def get_db():
    """Get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create all tables."""
    # Register models on Base.metadata
    from cryptory.models import coin, chart, issue  # noqa: F401

    if settings.database_url.startswith("sqlite:///"):
        db_path = settings.database_url.replace("sqlite:///", "", 1)
        db_dir = os.path.dirname(db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")
