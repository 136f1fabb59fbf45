from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from mytaxy.core.config import DATABASE_URL

SQLALCHEMY_DATABASE_URL = DATABASE_URL

# SQLite needs check_same_thread disabled for FastAPI's threadpool
connect_args = {"check_same_thread": False} if SQLALCHEMY_DATABASE_URL.startswith("sqlite") else {}

# Create SQLAlchemy engine
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)

# Session maker
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base model for all ORM classes
Base = declarative_base()


def init_db() -> None:
    """Create any missing tables. Called once at process start."""
    # models must be imported so their tables are registered on Base.metadata
    from mytaxy.database import models, payment_models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def close_db() -> None:
    """Release pooled connections at shutdown."""
    engine.dispose()


# ✅ Dependency for FastAPI routes
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
