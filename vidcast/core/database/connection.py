# File: vidcast/core/database/connection.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from vidcast.core.config.settings import settings

# check_same_thread=False is needed only for SQLite (Test Mode).
# The ingest worker and the task pool open sessions from their own threads.
connect_args = {"check_same_thread": False} if "sqlite" in settings.DATABASE_URL else {}

engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    pool_pre_ping=True,
    connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


def get_db():
    """Dependency for obtaining a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Registers every feature model on the shared Base and creates missing tables."""
    from vidcast.core.database.base import Base
    import vidcast.features.videos.data.sql_models  # noqa: F401
    import vidcast.features.ingest.data.sql_models  # noqa: F401
    import vidcast.features.analyzers.data.sql_models  # noqa: F401

    Base.metadata.create_all(bind=engine)
