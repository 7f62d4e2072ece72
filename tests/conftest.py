"""
Pytest configuration and fixtures for tests.

This file is automatically loaded by pytest and provides shared fixtures
and configuration for all tests.
"""

import sys
import os
from datetime import datetime
from unittest.mock import MagicMock
from zoneinfo import ZoneInfo

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

# Add parent directory to Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Mock config module completely before any imports
config_mock = MagicMock()
config_mock.RUNTIME_ENVIRONMENT = "TEST"
config_mock.TOKEN = "123456:ABC-DEF1234ghIkl-zyx57W2v1u123ew11"  # Test bot token
config_mock.NOTIFICATION_RECIPIENTS = ["1001", "1002"]  # Two staff chats
config_mock.DB_NAME = "test_storefront.db"
config_mock.STORE_NAME = "Mazuhi Sushi"
config_mock.BOT_LANGUAGE = "es"  # For Localizator
config_mock.CURRENCY_SYMBOL = "$"
config_mock.TIMEZONE = "America/Mexico_City"
config_mock.DELIVERY_SURCHARGE = 30.0
config_mock.PICKUP_ETA_MINUTES = 30
config_mock.DELIVERY_ETA_MINUTES = 45
config_mock.ORDER_NUMBER_PREFIX = "MZ"
config_mock.WAITER_CALL_KEYWORD = "cc"
config_mock.LOG_LEVEL = "INFO"
config_mock.LOG_MASK_SECRETS = True
config_mock.LOG_RETENTION_DAYS = 5

sys.modules['config'] = config_mock

TZ = ZoneInfo("America/Mexico_City")


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine (in-memory SQLite)."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False
    )

    # Import and create all tables
    from db import Base
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine):
    """Create test database session."""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()


# ============================================================================
# Domain Fixtures
# ============================================================================

@pytest.fixture
def wednesday_evening():
    """Wednesday 2024-05-15 19:30 local time."""
    return datetime(2024, 5, 15, 19, 30, tzinfo=TZ)


@pytest.fixture
def product_factory():
    """Build ProductDTOs with sequential ids."""
    from models.product import ProductDTO

    def make(price: float, product_id: int = 1, name: str | None = None):
        return ProductDTO(id=product_id, name=name or f"Roll {product_id}", price=price)

    return make
