"""Rating and reporting endpoints."""

from datetime import date

from fastapi import APIRouter, HTTPException, Query, status

from supplier_performance.api.deps import ServiceDep
from supplier_performance.config import settings
from supplier_performance.schemas.evaluation import RatingResponse
from supplier_performance.schemas.summary import PerformanceSummary

router = APIRouter()


@router.get("/suppliers/{supplier_id}/rating", response_model=RatingResponse)
async def get_supplier_rating(supplier_id: int, service: ServiceDep):
    """Current rating; 404 when the supplier has not been rated yet."""
    rating = await service.get_supplier_rating(supplier_id)
    if rating is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Supplier has no rating yet",
        )
    return RatingResponse.from_entity(rating)


@router.get("/ratings/top", response_model=list[RatingResponse])
async def top_suppliers(
    service: ServiceDep,
    limit: int = Query(10, ge=1, le=settings.max_page_size),
):
    """Suppliers with the highest current score."""
    return [RatingResponse.from_entity(r) for r in await service.get_top_suppliers(limit=limit)]


@router.get("/suppliers/{supplier_id}/summary", response_model=PerformanceSummary)
async def performance_summary(
    supplier_id: int,
    period_start: date,
    period_end: date,
    service: ServiceDep,
):
    """Average scores and metrics for a period, with the current rating."""
    return await service.get_performance_summary(supplier_id, period_start, period_end)
