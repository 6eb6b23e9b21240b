"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Seeded companies, jobs and users
- Admin / regular user auth headers
"""

import os

# Must be set before app.core.config is imported
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
os.environ["BCRYPT_WORK_FACTOR"] = "4"
os.environ["SECRET_KEY"] = "test-secret"

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.database import Base, get_db  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.crud import company as company_crud  # noqa: E402
from app.crud import job as job_crud  # noqa: E402
from app.crud import user as user_crud  # noqa: E402
from app.models import Application, Company, Job, User  # noqa: E402,F401
from app.schemas.company import CompanyCreateRequest  # noqa: E402
from app.schemas.job import JobCreateRequest  # noqa: E402
from app.schemas.user import UserCreateRequest  # noqa: E402
from main import app  # noqa: E402


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create a fresh database session for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seed(db_session):
    """
    Three companies, three jobs and two users.

    c1 has j1 and j3, c2 has j2, c3 has no jobs.
    u1 is an admin, u2 is not. Returns the created job records by title.
    """
    for n in (1, 2, 3):
        company_crud.create(db_session, CompanyCreateRequest(
            handle=f"c{n}",
            name=f"C{n}",
            description=f"Desc{n}",
            num_employees=n,
            logo_url=f"http://c{n}.img",
        ))

    jobs = {}
    for title, salary, equity, handle in (
        ("j1", 100000, Decimal("0"), "c1"),
        ("j2", 120000, Decimal("0.1"), "c2"),
        ("j3", 130000, None, "c1"),
    ):
        jobs[title] = job_crud.create(db_session, JobCreateRequest(
            title=title,
            salary=salary,
            equity=equity,
            company_handle=handle,
        ))

    for n, is_admin in ((1, True), (2, False)):
        user_crud.register(db_session, UserCreateRequest(
            username=f"u{n}",
            password=f"password{n}",
            first_name=f"U{n}F",
            last_name=f"U{n}L",
            email=f"user{n}@user.com",
            is_admin=is_admin,
        ))

    return {"jobs": jobs}


@pytest.fixture
def admin_headers():
    """Bearer header for u1 (admin)"""
    token = create_access_token(data={"sub": "u1", "is_admin": True})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers():
    """Bearer header for u2 (not an admin)"""
    token = create_access_token(data={"sub": "u2", "is_admin": False})
    return {"Authorization": f"Bearer {token}"}
