"""Pytest configuration and fixtures."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-at-least-32-characters")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from datetime import datetime
from decimal import Decimal
from typing import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from dineops.core.auth import Principal, PrincipalRole, issue_token
from dineops.core.security import get_password_hash
from dineops.db.base import Base
from dineops.db.session import get_db
from dineops.main import app
# Import all models to ensure they're registered with Base.metadata
from dineops.models import *
from dineops.models.booking import Booking, BookingStatus
from dineops.models.restaurant import Category, Dish, Restaurant, RestaurantStatus, Table, TableStatus
from dineops.models.user import Admin, AdminRole, User

# Use in-memory SQLite for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_engine():
    """Create a test database engine."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Create a test database session."""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    # Disable rate limiting during tests to avoid flaky failures
    from dineops.core.rate_limit import limiter
    limiter.enabled = False
    # Don't raise server exceptions so we can test error status codes
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def test_restaurant(db_session: Session) -> Restaurant:
    """Create a test restaurant."""
    restaurant = Restaurant(
        name="Test Bistro",
        email="bistro@example.com",
        password_hash=get_password_hash("bistropass123"),
        phone="+1234567890",
        address="1 Main Street",
        city="Lahore",
        latitude=32.58,
        longitude=73.48,
        status=RestaurantStatus.ACTIVE,
    )
    db_session.add(restaurant)
    db_session.commit()
    db_session.refresh(restaurant)
    return restaurant


@pytest.fixture
def other_restaurant(db_session: Session) -> Restaurant:
    """Create a second restaurant for cross-tenant checks."""
    restaurant = Restaurant(
        name="Other Grill",
        email="grill@example.com",
        password_hash=get_password_hash("grillpass123"),
        phone="+1987654321",
        address="2 Side Street",
        latitude=31.5,
        longitude=74.3,
    )
    db_session.add(restaurant)
    db_session.commit()
    db_session.refresh(restaurant)
    return restaurant


@pytest.fixture
def test_table(db_session: Session, test_restaurant: Restaurant) -> Table:
    """Create a test table with capacity 4."""
    table = Table(
        restaurant_id=test_restaurant.id,
        table_number="T1",
        capacity=4,
        status=TableStatus.AVAILABLE,
    )
    db_session.add(table)
    db_session.commit()
    db_session.refresh(table)
    return table


@pytest.fixture
def test_category(db_session: Session, test_restaurant: Restaurant) -> Category:
    """Create a test category."""
    category = Category(restaurant_id=test_restaurant.id, name="Mains")
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def test_dish(db_session: Session, test_category: Category) -> Dish:
    """Create a test dish."""
    dish = Dish(
        category_id=test_category.id,
        name="Chicken Karahi",
        price=Decimal("12.50"),
        imgurl="https://img.example.com/karahi.png",
    )
    db_session.add(dish)
    db_session.commit()
    db_session.refresh(dish)
    return dish


@pytest.fixture
def other_dish(db_session: Session, other_restaurant: Restaurant) -> Dish:
    """Create a dish belonging to the other restaurant."""
    category = Category(restaurant_id=other_restaurant.id, name="Grill")
    db_session.add(category)
    db_session.flush()
    dish = Dish(category_id=category.id, name="Seekh Kebab", price=Decimal("8.00"))
    db_session.add(dish)
    db_session.commit()
    db_session.refresh(dish)
    return dish


@pytest.fixture
def test_user(db_session: Session) -> User:
    """Create a test customer."""
    user = User(
        email="test@example.com",
        password_hash=get_password_hash("testpass123"),
        name="Test User",
        city="Lahore",
        address="3 Garden Road",
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def test_admin(db_session: Session) -> Admin:
    """Create a test admin."""
    admin = Admin(
        name="Root Admin",
        email="admin@example.com",
        password_hash=get_password_hash("adminpass123"),
        role=AdminRole.SUPER_ADMIN,
    )
    db_session.add(admin)
    db_session.commit()
    db_session.refresh(admin)
    return admin


@pytest.fixture
def admin_token(test_admin: Admin) -> str:
    """Get a bearer token for the test admin."""
    return issue_token(
        Principal(
            id=test_admin.id,
            email=test_admin.email,
            role=PrincipalRole(test_admin.role.value),
            name=test_admin.name,
        )
    )


@pytest.fixture
def admin_headers(admin_token: str) -> dict:
    """Get admin authentication headers."""
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def user_headers(test_user: User) -> dict:
    """Authentication headers for a non-admin principal."""
    token = issue_token(
        Principal(id=test_user.id, email=test_user.email, role=PrincipalRole.USER, name=test_user.name)
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def confirmed_booking(db_session: Session, test_restaurant: Restaurant, test_table: Table) -> Booking:
    """A CONFIRMED booking on test_table at 2030-01-01 19:00 UTC, table RESERVED."""
    booking = Booking(
        restaurant_id=test_restaurant.id,
        table_id=test_table.id,
        customer_name="Ayesha",
        customer_email="ayesha@example.com",
        booking_date=datetime(2030, 1, 1, 19, 0),
        status=BookingStatus.CONFIRMED,
    )
    test_table.status = TableStatus.RESERVED
    db_session.add(booking)
    db_session.commit()
    db_session.refresh(booking)
    return booking
