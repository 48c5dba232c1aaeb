"""Pytest fixtures for testing"""

import pytest
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from solar_gateway.api.main import create_app
from solar_gateway.domain.calendar import Calendar
from solar_gateway.infrastructure.database.models import Base, Homeowner, Investor
from solar_gateway.infrastructure.database.session import get_db
from solar_gateway.services.contracts import ContractService


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def calendar() -> Calendar:
    return Calendar(start_month=0)


@pytest.fixture
def contract_service(db: Session, calendar: Calendar) -> ContractService:
    """Contract service with a 4% rate over 240 months"""
    return ContractService(db, calendar, length_months=240, annual_rate=0.04)


@pytest.fixture
def client(db: Session, calendar: Calendar) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app(billing_calendar=calendar)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def make_homeowner(db: Session) -> Callable[..., Homeowner]:
    """Factory persisting homeowners directly"""

    def _make(email: str = "jane@example.com", name: str = "Jane") -> Homeowner:
        homeowner = Homeowner(name=name, email=email, pwd_hash="hash")
        db.add(homeowner)
        db.commit()
        return homeowner

    return _make


@pytest.fixture
def make_investor(db: Session) -> Callable[..., Investor]:
    def _make(email: str = "ivy@example.com", name: str = "Ivy") -> Investor:
        investor = Investor(name=name, email=email)
        db.add(investor)
        db.commit()
        return investor

    return _make
