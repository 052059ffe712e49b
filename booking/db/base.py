from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from booking.core.config import settings


def normalize_database_url(url: str) -> str:
    """Point plain ``postgresql://`` URLs at the psycopg3 driver. Other URLs pass through."""
    if url.startswith("postgresql://") and "+psycopg" not in url:
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


def _engine_kwargs(url: str) -> dict:
    # SQLite connections are shared with the TestClient's worker thread.
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


database_url = normalize_database_url(settings.database_url)

engine = create_engine(database_url, **_engine_kwargs(database_url))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()
