"""Metric tracking endpoints."""

from fastapi import APIRouter, Query, status

from supplier_performance.api.deps import ServiceDep
from supplier_performance.config import settings
from supplier_performance.schemas.evaluation import MetricCreateRequest, MetricResponse

router = APIRouter()


@router.post("/metrics", response_model=MetricResponse, status_code=status.HTTP_201_CREATED)
async def track_metric(body: MetricCreateRequest, service: ServiceDep):
    """Record one performance observation for a supplier."""
    metric = await service.track_metric(body.model_dump(exclude_none=True))
    return MetricResponse.from_entity(metric)


@router.get("/suppliers/{supplier_id}/metrics", response_model=list[MetricResponse])
async def list_supplier_metrics(
    supplier_id: int,
    service: ServiceDep,
    metric_type: str | None = None,
    limit: int = Query(100, ge=1, le=settings.max_page_size),
):
    metrics = await service.get_supplier_metrics(supplier_id, metric_type=metric_type, limit=limit)
    return [MetricResponse.from_entity(m) for m in metrics]
