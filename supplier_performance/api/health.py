"""Health and metrics endpoints."""

from fastapi import APIRouter

from supplier_performance.api.deps import ServiceDep

router = APIRouter()


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/metrics")
async def metrics(service: ServiceDep):
    """Service info and stored record counts for observability."""
    return {
        "service": "supplier-performance",
        "version": "0.1.0",
        "records": await service.get_record_counts(),
    }
