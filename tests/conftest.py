import os
import time
import uuid

# Configure the app before anything from pethub is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret-for-pethub-tests-0123456789"
os.environ["REDIS_URL"] = ""
os.environ["BARCODE_LOOKUP_API_KEY"] = ""
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pethub import config
from pethub.database import Base, get_db
from pethub.main import app
from pethub.models import Business, Client, Pet, Product, Profile, Service
from pethub.rate_limiter import reset_rate_limits

TEST_USER_ID = "8f14e45f-ceea-467a-9af1-2f3c4d5e6a7b"


def make_token(
    sub: str = TEST_USER_ID,
    secret: str = None,
    expires_in: int = 3600,
    audience: str = "authenticated",
    **claims,
) -> str:
    """Mint a session JWT the way the auth platform does"""
    payload = {
        "sub": sub,
        "aud": audience,
        "exp": int(time.time()) + expires_in,
        "email": "groomer@example.com",
        **claims,
    }
    return jwt.encode(payload, secret or config.SUPABASE_JWT_SECRET, algorithm="HS256")


@pytest.fixture(autouse=True)
def clear_rate_limits():
    reset_rate_limits()
    yield
    reset_rate_limits()


@pytest.fixture
def db_session():
    """Fresh in-memory database per test"""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def business(db_session):
    business = Business(name="Happy Paws Grooming", phone="(787) 555-1234", address="San Juan, Puerto Rico")
    db_session.add(business)
    db_session.flush()
    db_session.add(Profile(user_id=TEST_USER_ID, business_id=business.id, email="groomer@example.com"))
    db_session.commit()
    return business


@pytest.fixture
def other_business(db_session):
    business = Business(name="Other Grooming Co")
    db_session.add(business)
    db_session.commit()
    return business


@pytest.fixture
def api(db_session, business):
    """TestClient wired to the test database"""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def sample_client(db_session, business):
    client = Client(business_id=business.id, first_name="Ana", last_name="Rivera", phone="(787) 555-0101")
    db_session.add(client)
    db_session.commit()
    return client


@pytest.fixture
def sample_pet(db_session, business, sample_client):
    pet = Pet(
        business_id=business.id,
        client_id=sample_client.id,
        name="Coco",
        species="dog",
        breed="Poodle",
        birth_month=3,
        birth_year=2020,
    )
    db_session.add(pet)
    db_session.commit()
    return pet


@pytest.fixture
def sample_service(db_session, business):
    service = Service(business_id=business.id, name="Full Groom - Large", price=65.0, duration_minutes=90, color="green")
    db_session.add(service)
    db_session.commit()
    return service


@pytest.fixture
def sample_product(db_session, business):
    product = Product(
        business_id=business.id,
        sku="SHAMPOO-01",
        barcode="012345678905",
        name="Oatmeal Shampoo",
        quantity=10,
        price=1299,
        reorder_level=3,
    )
    db_session.add(product)
    db_session.commit()
    return product


@pytest.fixture
def random_uuid():
    return str(uuid.uuid4())
