"""
Test configuration and fixtures for the MyTaxy receipts service
"""

import os
import tempfile
from datetime import datetime

import pytest

# Set test environment before importing the app
os.environ.update({
    'DATABASE_URL': 'sqlite://',
    'SECRET_KEY': 'test_secret_key_for_testing_only',
    'RAZORPAY_KEY_ID': 'rzp_test_key',
    'RAZORPAY_KEY_SECRET': 'test_razorpay_secret',
    'PAYMENT_GATEWAY': 'fallback',
    'PUBLIC_BASE_URL': 'http://127.0.0.1:8000',
    'RECEIPTS_DIR': os.path.join(tempfile.gettempdir(), 'mytaxy-test-receipts'),
})

import factory
from factory import Faker
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mytaxy.auth import create_account_token
from mytaxy.database.database import Base, get_db
from mytaxy.database.models import Captain, Ride, User
from mytaxy.database.stores import AccountStore, ReceiptStore, RideStore
from mytaxy.main import app

RIDE_START = datetime(2024, 5, 1, 9, 30)
RIDE_END = datetime(2024, 5, 1, 10, 5)


@pytest.fixture(scope='function')
def engine():
    """In-memory SQLite shared across threads for the duration of one test"""
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope='function')
def db_session(engine):
    """Create database session for testing"""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    for factory_class in (UserFactory, CaptainFactory, RideFactory):
        factory_class._meta.sqlalchemy_session = session
    yield session
    session.rollback()
    session.close()


@pytest.fixture(scope='function')
def client(db_session):
    """Create test client bound to the test session"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def rides(db_session):
    return RideStore(db_session)


@pytest.fixture
def receipts(db_session):
    return ReceiptStore(db_session)


@pytest.fixture
def accounts(db_session):
    return AccountStore(db_session)


# Factory classes for test data generation
class UserFactory(factory.alchemy.SQLAlchemyModelFactory):
    class Meta:
        model = User
        sqlalchemy_session_persistence = "commit"

    fullname = Faker('name')
    email = factory.Sequence(lambda n: f"rider{n}@test.com")
    phone = factory.Sequence(lambda n: f"98{n:08d}")


class CaptainFactory(factory.alchemy.SQLAlchemyModelFactory):
    class Meta:
        model = Captain
        sqlalchemy_session_persistence = "commit"

    fullname = Faker('name')
    email = factory.Sequence(lambda n: f"captain{n}@test.com")
    phone = factory.Sequence(lambda n: f"97{n:08d}")
    vehicle_color = "Yellow"
    vehicle_plate = factory.Sequence(lambda n: f"KA01AB{n:04d}")
    vehicle_type = "car"


class RideFactory(factory.alchemy.SQLAlchemyModelFactory):
    """A finished cash ride; override fields for other states"""
    class Meta:
        model = Ride
        sqlalchemy_session_persistence = "commit"

    user = factory.SubFactory(UserFactory)
    captain = factory.SubFactory(CaptainFactory)
    pickup = "12.9716,77.5946"
    destination = "12.9352,77.6245"
    pickup_address = "MG Road, Bengaluru"
    destination_address = "Koramangala, Bengaluru"
    vehicle_type = "car"
    status = "completed"
    start_time = RIDE_START
    end_time = RIDE_END
    distance = 6.4
    duration = 35
    fare = 250.0
    payment_method = "cash"
    payment_status = "pending"


# Fixtures for test data
@pytest.fixture
def user(db_session):
    return UserFactory()


@pytest.fixture
def captain(db_session):
    return CaptainFactory()


@pytest.fixture
def make_ride(db_session, user, captain):
    """Build a ride for the default user and captain"""
    def _make_ride(**overrides):
        overrides.setdefault('user', user)
        overrides.setdefault('captain', captain)
        return RideFactory(**overrides)
    return _make_ride


@pytest.fixture
def auth_headers():
    """Bearer headers for a user or captain"""
    def _auth_headers(account):
        return {'Authorization': f"Bearer {create_account_token(account)}"}
    return _auth_headers
