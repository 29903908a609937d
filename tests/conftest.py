"""
Pytest configuration and fixtures.
"""

import os

# Must be set before the application modules read their configuration
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")

from decimal import Decimal
from typing import AsyncGenerator
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

from invoice_desk.core.database import Base, get_db
from invoice_desk.main import app
from invoice_desk.models import CompanySettings
from invoice_desk.views.notifications import Notifier


@pytest.fixture
async def test_engine(tmp_path):
    """Create a fresh SQLite database for each test."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database session override."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def company_settings(session_factory) -> CompanySettings:
    """Provision the settings row with the sequence counter at 7."""
    async with session_factory() as session:
        company = CompanySettings(
            company_name="Harbour Electrical",
            company_email="accounts@harbour.example",
            company_phone="02 9000 1234",
            company_address="12 Wharf St, Sydney",
            tax_enabled=True,
            tax_rate=Decimal("10.00"),
            default_payment_terms="Due within 14 days",
            next_invoice_number=7,
        )
        session.add(company)
        await session.commit()
        return company


@pytest.fixture
def notifier() -> Notifier:
    return Notifier()


@pytest.fixture
def invoice_payload() -> dict:
    """Draft body with two rows: 3 x 10 and 1 x 5."""
    return {
        "invoice_number": "INV-0007",
        "invoice_type": "invoice",
        "invoice_date": "2026-10-01",
        "due_date": "2026-10-15",
        "status": "draft",
        "client_name": "Blue Gum Cafe",
        "client_email": "owner@bluegum.example",
        "client_address": "4 Ocean Rd, Manly",
        "tax_enabled": True,
        "tax_rate": "10",
        "payment_terms": "Due within 14 days",
        "notes": "Thanks for your business",
        "line_items": [
            {"description": "Switchboard inspection", "quantity": "3", "rate": "10"},
            {"description": "Call-out fee", "quantity": "1", "rate": "5"},
        ],
    }
