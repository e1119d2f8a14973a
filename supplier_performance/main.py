"""Supplier performance FastAPI application."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from supplier_performance.api.evaluations import router as evaluations_router
from supplier_performance.api.health import router as health_router
from supplier_performance.api.metrics import router as metrics_router
from supplier_performance.api.ratings import router as ratings_router
from supplier_performance.config import settings
from supplier_performance.errors import ErrorKind, SupplierPerformanceError

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    # The 422 constant was renamed across Starlette releases
    ErrorKind.VALIDATION_FAILED: 422,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_STATE_TRANSITION: status.HTTP_409_CONFLICT,
}

app = FastAPI(
    title="Supplier Performance Service",
    description="Supplier evaluations, performance metrics and derived ratings",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SupplierPerformanceError)
async def supplier_performance_error_handler(request: Request, exc: SupplierPerformanceError):
    """Map domain errors to HTTP responses carrying the error kind and payload."""
    return JSONResponse(
        status_code=ERROR_STATUS[exc.kind],
        content={"kind": exc.kind.value, "detail": exc.message, **exc.payload()},
    )


app.include_router(health_router, tags=["Health"])
app.include_router(evaluations_router, prefix="/v1", tags=["Evaluations"])
app.include_router(metrics_router, prefix="/v1", tags=["Metrics"])
app.include_router(ratings_router, prefix="/v1", tags=["Ratings"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"service": "supplier-performance", "version": "0.1.0", "docs": "/docs"}
