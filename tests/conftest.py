"""Pytest configuration and fixtures."""

from datetime import datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from supplier_performance.database import Base
from supplier_performance.events import EventDispatcher, SupplierPerformanceEvent
from supplier_performance.models import *  # noqa: F401,F403 - registers tables on Base.metadata
from supplier_performance.services.performance import SupplierPerformanceService
from supplier_performance.storage.store import PerformanceStore

# Use in-memory SQLite for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

FIXED_NOW = datetime(2026, 3, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
async def db_engine():
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def published() -> list[SupplierPerformanceEvent]:
    return []


@pytest.fixture
def event_dispatcher(published) -> EventDispatcher:
    dispatcher = EventDispatcher()
    dispatcher.subscribe(SupplierPerformanceEvent, published.append)
    return dispatcher


@pytest.fixture
def service(db_session, event_dispatcher) -> SupplierPerformanceService:
    return SupplierPerformanceService(
        PerformanceStore(db_session),
        event_dispatcher,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def evaluation_data() -> dict:
    return {
        "supplier_id": 7,
        "evaluator_id": 3,
        "period_start": "2026-01-01",
        "period_end": "2026-03-31",
        "quality_score": 95,
        "delivery_score": 90,
        "price_score": 85,
        "service_score": 92,
        "compliance_score": 88,
        "comments": "Strong quarter",
    }
