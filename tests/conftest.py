"""Pytest configuration and fixtures."""

import uuid
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.database import get_session
from app.main import app
from app.models import Base, Category, MenuItem, UserProfile

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database for each test."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL, echo=False, poolclass=StaticPool
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Provide database session for tests."""
    TestSessionLocal = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with TestSessionLocal() as session:
        yield session


@pytest.fixture
async def client(session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Provide test client with overridden database session."""

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def customer(session: AsyncSession) -> UserProfile:
    """A signed-in customer."""
    user = UserProfile(
        uid="customer-1",
        email="maria@example.com",
        first_name="Maria",
        last_name="Papadopoulos",
        display_name="Maria P.",
        email_verified=True,
        role="customer",
        account_status="active",
    )
    session.add(user)
    await session.commit()
    return user


@pytest.fixture
async def admin(session: AsyncSession) -> UserProfile:
    """A signed-in admin."""
    user = UserProfile(
        uid="admin-1",
        email="owner@example.com",
        first_name="Afroditi",
        display_name="Owner",
        email_verified=True,
        role="admin",
        account_status="active",
    )
    session.add(user)
    await session.commit()
    return user


@pytest.fixture
async def sample_menu(session: AsyncSession) -> dict[str, Category]:
    """
    Create a small menu.

    Salads (single size) holds dishes at orders 1, 2 and 5; Pies (two
    sizes) holds one available and one unavailable dish; Desserts is empty.
    """
    salads = Category(id=uuid.uuid4(), name="Salads", order=1, has_two_sizes=False)
    pies = Category(id=uuid.uuid4(), name="Pies", order=2, has_two_sizes=True)
    desserts = Category(id=uuid.uuid4(), name="Desserts", order=3, has_two_sizes=False)
    session.add_all([salads, pies, desserts])

    session.add_all(
        [
            MenuItem(name="Greek Salad", category=salads, price=12, order=1),
            MenuItem(name="Horiatiki", category=salads, price=14, order=2),
            MenuItem(name="Lentil Salad", category=salads, price=11, order=5),
            MenuItem(
                name="Spinach Pie",
                category=pies,
                price=80,
                second_price=70,
                is_top_seller=True,
                order=1,
            ),
            MenuItem(
                name="Pastourma Pie",
                category=pies,
                price=80,
                second_price=70,
                available=False,
                order=2,
            ),
        ]
    )
    await session.commit()
    return {"Salads": salads, "Pies": pies, "Desserts": desserts}
