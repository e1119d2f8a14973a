"""API dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from supplier_performance.config import settings
from supplier_performance.database import get_db
from supplier_performance.events import dispatcher
from supplier_performance.services.performance import SupplierPerformanceService
from supplier_performance.storage.store import PerformanceStore


async def get_performance_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SupplierPerformanceService:
    """Service bound to the request's database session."""
    return SupplierPerformanceService(
        PerformanceStore(db),
        dispatcher,
        reference_prefix=settings.evaluation_reference_prefix,
        alerts_enabled=settings.low_rating_alert_enabled,
    )


# Type alias for dependency injection
ServiceDep = Annotated[SupplierPerformanceService, Depends(get_performance_service)]
