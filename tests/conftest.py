"""
Shared test fixtures.

Sets up an isolated SQLite database so tests never touch the
real database. Tables are created before each test and dropped
after it.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from bookkeeping.main import app
from bookkeeping.models.base import Base, get_db
from bookkeeping.schemas.company import CompanyCreate
from bookkeeping.services.account_service import AccountService
from bookkeeping.services.company_service import CompanyService


# SQLite keeps the suite free of any database infrastructure.
TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop them after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db_session):
    """
    Provide a test client with the test database.

    The get_db dependency is overridden so the app uses the
    test session instead of the real database.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def company(db_session):
    """A company with the UAE default chart of accounts."""
    company = CompanyService(db_session).create_company(
        CompanyCreate(name="Falcon Trading LLC", trn="100123456700003")
    )
    db_session.commit()
    return company


@pytest.fixture
def accounts(db_session, company):
    """The seeded accounts of the company, keyed by code."""
    service = AccountService(db_session)
    return {a.code: a for a in service.list_accounts(company.id)}
