import os
from datetime import datetime

# Configure before the app package is imported
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENABLE_DATABASE"] = "true"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import config
from app.database import Base, get_db
from app.domain.scheduling.router import get_schedule_service
from app.domain.scheduling.service import ScheduleService
from app.main import app
from app.models import Customer, Job, User
from app.routes.auth import session_claims
from app.security_utils import create_session_token, hash_password

TEST_PASSWORD = "sparkle-clean-42"

# Monday 13 Oct 2025, 11:00
FIXED_NOW = datetime(2025, 10, 13, 11, 0)

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db, monkeypatch):
    monkeypatch.setitem(config.FEATURES, "database", True)

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_schedule_service] = lambda: ScheduleService(db, clock=lambda: FIXED_NOW)
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(db, email, role, first_name="Test", last_name="User", status="active"):
    user = User(
        email=email,
        password_hash=hash_password(TEST_PASSWORD),
        first_name=first_name,
        last_name=last_name,
        role=role,
        status=status,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user):
    return {"Authorization": f"Bearer {create_session_token(session_claims(user))}"}


@pytest.fixture
def owner(db):
    return make_user(db, "harvey@example.com", "owner", "Harvey", "Washington")


@pytest.fixture
def staff(db):
    return make_user(db, "sarah@example.com", "staff", "Sarah", "Mitchell")


@pytest.fixture
def contractor(db):
    return make_user(db, "tom@example.com", "contractor", "Tom", "Barker")


@pytest.fixture
def customer(db):
    customer = Customer(name="Dr. Okonkwo", email="okonkwo@example.com", address="7 Cathedral Close, NR1")
    db.add(customer)
    db.commit()
    db.refresh(customer)
    return customer


def make_job(db, staff_id, start, end, title="Regular Clean – Mrs. Patterson", status="upcoming", customer_id=None):
    job = Job(
        title=title,
        staff_id=staff_id,
        start_time=start,
        end_time=end,
        status=status,
        location="14 Riverside Rd, NR1",
        customer_id=customer_id,
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return job
