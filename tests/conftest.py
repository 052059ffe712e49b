import os
import tempfile
from datetime import datetime, time, timedelta
from pathlib import Path
from types import SimpleNamespace

# Set environment variables BEFORE any imports that might use settings
# Use a temporary directory for test database to avoid permission issues
_test_db_dir = tempfile.mkdtemp()
_test_db_path = os.path.join(_test_db_dir, "test_booking.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_path}"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from booking.domain.clock import utc_now
from booking.main import app

ROOT_DIR = Path(__file__).resolve().parent.parent


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test and run migrations."""
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    test_db_url = f"sqlite:///{test_db_path}"

    test_engine = create_engine(
        test_db_url,
        connect_args={"check_same_thread": False},
    )

    # Enable WAL mode to reduce locking issues
    @event.listens_for(test_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )

    # Run Alembic migrations to set up the database schema
    alembic_cfg = Config(str(ROOT_DIR / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(ROOT_DIR / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", test_db_url)
    command.upgrade(alembic_cfg, "head")

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        test_engine.dispose()

        for suffix in ["", "-wal", "-shm"]:
            path = f"{test_db_path}{suffix}"
            if os.path.exists(path):
                os.remove(path)
        if os.path.exists(temp_db_dir):
            os.rmdir(temp_db_dir)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database dependency override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    from booking.api.deps import get_db

    app.dependency_overrides[get_db] = override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session to match test naming conventions."""
    return db_session


@pytest.fixture(scope="function")
def hotel(db: Session):
    """Create an active hotel (default policies: 2 days notice, 1 day gap, no overlap)."""
    from booking.repositories.location import create_location, update_location

    location = create_location(
        db,
        name="Grand Hotel",
        address="1 Main Street",
        capacity=120,
        open_time=time(0, 0),
        close_time=time(23, 59, 59),
        location_type="hotel",
        description="Test hotel",
    )
    return update_location(db, location_id=location.id, is_active=True)


@pytest.fixture(scope="function")
def inactive_hotel(db: Session):
    """Create a hotel that was never activated."""
    from booking.repositories.location import create_location

    return create_location(
        db,
        name="Closed Hotel",
        address="2 Side Street",
        capacity=10,
        open_time=time(8, 0),
        close_time=time(20, 0),
        location_type="hotel",
    )


@pytest.fixture(scope="function")
def future_day() -> datetime:
    """Midnight UTC ten days from now; comfortably past any default advance notice."""
    return (utc_now() + timedelta(days=10)).replace(
        hour=0, minute=0, second=0, microsecond=0
    )


# ============================================================================
# IN-MEMORY FACTORIES (domain tests do not need a database)
# ============================================================================


@pytest.fixture(scope="function")
def make_booking():
    """Factory for bookings: anything exposing start_time and end_time."""

    def _make_booking(start: datetime, end: datetime):
        return SimpleNamespace(start_time=start, end_time=end)

    return _make_booking


@pytest.fixture(scope="function")
def make_override():
    """Factory for persisted-looking policy overrides."""

    def _make_override(policy_key, settings_json="{}"):
        return SimpleNamespace(policy_key=policy_key, settings_json=settings_json)

    return _make_override


@pytest.fixture(scope="function")
def make_location():
    """Factory for in-memory locations carrying bookings and overrides."""

    def _make_location(
        location_type: str = "hotel",
        bookings=None,
        overrides=None,
        is_active: bool = True,
        open_time: time = time(0, 0),
        close_time: time = time(23, 59),
    ):
        return SimpleNamespace(
            id=1,
            is_active=is_active,
            location_type=location_type,
            open_time=open_time,
            close_time=close_time,
            bookings=list(bookings or []),
            policy_overrides=list(overrides or []),
        )

    return _make_location
