import logging

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from dotenv import load_dotenv

from app.core.config import settings

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL

if not DATABASE_URL:
    raise ValueError("[DB] DATABASE_URL not configured")


def build_engine(url: str, **overrides):
    """Create the SQLAlchemy engine with backend-appropriate options."""
    if url.lower().startswith("sqlite"):
        options = {
            "connect_args": {"check_same_thread": False},
        }
    else:
        options = {
            "pool_pre_ping": True,
            "pool_size": settings.DATABASE_POOL_SIZE,
            "max_overflow": settings.DATABASE_MAX_OVERFLOW,
            "pool_recycle": settings.DATABASE_POOL_RECYCLE,
            "pool_timeout": 30,
        }
    options["echo"] = settings.DATABASE_ECHO
    options.update(overrides)
    return create_engine(url, **options)


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


def get_db():
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_connection() -> bool:
    """Test database connection - NON-BLOCKING."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
        safe_url = DATABASE_URL.split("@")[-1]
        logger.info(f"[DB] Connected: {safe_url}")
        return True
    except Exception as e:
        logger.warning(f"[DB] Connection failed (continuing): {e}")
        return False


def init_db(bind=None) -> None:
    """Create all tables registered on Base."""
    # Import all models so they're registered with Base
    import app.models  # noqa: F401
    from app.db.base import Base

    Base.metadata.create_all(bind=bind or engine)
    logger.info("[DB] Database tables initialized")


def close_db_connection() -> None:
    """Close database connections."""
    engine.dispose()
    logger.info("[DB] Database connections closed")
