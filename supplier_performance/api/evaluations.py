"""Evaluation endpoints."""

from fastapi import APIRouter, Query, status

from supplier_performance.api.deps import ServiceDep
from supplier_performance.config import settings
from supplier_performance.schemas.evaluation import EvaluationCreateRequest, EvaluationResponse

router = APIRouter()


@router.post(
    "/evaluations",
    response_model=EvaluationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_evaluation(body: EvaluationCreateRequest, service: ServiceDep):
    """
    Create a draft evaluation. The overall score is computed from the five
    category scores; omitted categories count as 0.
    """
    evaluation = await service.create_evaluation(body.model_dump(exclude_none=True))
    return EvaluationResponse.from_entity(evaluation)


@router.get("/evaluations/{evaluation_id}", response_model=EvaluationResponse)
async def get_evaluation(evaluation_id: int, service: ServiceDep):
    """Get evaluation by ID."""
    return EvaluationResponse.from_entity(await service.get_evaluation(evaluation_id))


@router.post("/evaluations/{evaluation_id}/finalize", response_model=EvaluationResponse)
async def finalize_evaluation(evaluation_id: int, service: ServiceDep):
    """Finalize a draft evaluation and refresh the supplier's rating."""
    return EvaluationResponse.from_entity(await service.finalize_evaluation(evaluation_id))


@router.get("/suppliers/{supplier_id}/evaluations", response_model=list[EvaluationResponse])
async def list_supplier_evaluations(
    supplier_id: int,
    service: ServiceDep,
    limit: int = Query(50, ge=1, le=settings.max_page_size),
):
    """Supplier evaluations, newest first."""
    evaluations = await service.get_supplier_evaluations(supplier_id, limit=limit)
    return [EvaluationResponse.from_entity(e) for e in evaluations]
