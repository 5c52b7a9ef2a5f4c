"""
Test fixtures for Flightwatch backend tests.
"""
import pytest
from datetime import timedelta
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from flightwatch.database import Base, get_db
from flightwatch.main import app
from flightwatch.models import User, FlightSearch
from flightwatch.utils.timeutil import utcnow


# Create test database engine (SQLite in-memory, one shared connection)
TEST_DATABASE_URL = "sqlite:///:memory:"

test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


# Enable foreign key constraints for SQLite
@event.listens_for(test_engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Creates all tables before the test and drops them after.
    """
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def override_get_db(db_session):
    """
    Override the get_db dependency to use the test database session.
    """
    def _override_get_db():
        try:
            yield db_session
        finally:
            pass

    return _override_get_db


@pytest.fixture(scope="function")
async def client(override_get_db):
    """
    Create an async test client with the database dependency overridden.
    """
    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def make_user(db, email="traveller@example.com", **kwargs):
    user = User(email=email, **kwargs)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_search(db, user, origin="NYC", destination="LON", days_out=1, trip_days=7, is_active=True):
    departure = utcnow() + timedelta(days=days_out)
    search = FlightSearch(
        user_id=user.id,
        origin_city=origin,
        destination_city=destination,
        departure_date=departure,
        return_date=departure + timedelta(days=trip_days) if trip_days is not None else None,
        is_active=is_active,
    )
    db.add(search)
    db.commit()
    db.refresh(search)
    return search


@pytest.fixture
def user(db_session):
    return make_user(db_session)


@pytest.fixture
def flight_search(db_session, user):
    return make_search(db_session, user)


@pytest.fixture
def user_factory(db_session):
    def _make(email, **kwargs):
        return make_user(db_session, email=email, **kwargs)
    return _make


@pytest.fixture
def search_factory(db_session, user):
    """Build flight searches; owned by the default ``user`` unless one is passed."""
    def _make(owner=None, **kwargs):
        return make_search(db_session, owner or user, **kwargs)
    return _make
