"""Evaluation and metric request/response schemas."""

from datetime import date, datetime

from pydantic import BaseModel

from supplier_performance.schemas.entities import SupplierEvaluation, SupplierMetric, SupplierRating


class EvaluationCreateRequest(BaseModel):
    """POST /v1/evaluations request.

    Everything is optional here; required fields are checked by the service so
    that all problems come back together as one field -> message map.
    """

    supplier_id: int | None = None
    evaluator_id: int | None = None
    evaluation_date: date | None = None
    period_start: date | None = None
    period_end: date | None = None
    quality_score: float | None = None
    delivery_score: float | None = None
    price_score: float | None = None
    service_score: float | None = None
    compliance_score: float | None = None
    comments: str | None = None
    recommendations: str | None = None


class EvaluationResponse(BaseModel):
    """Evaluation with its derived classification."""

    id: int
    evaluation_reference: str
    supplier_id: int
    evaluator_id: int
    evaluation_date: date | None
    evaluation_period_start: date | None
    evaluation_period_end: date | None
    overall_score: float
    quality_score: float
    delivery_score: float
    price_score: float
    service_score: float
    compliance_score: float
    status: str
    comments: str
    recommendations: str
    finalized_at: datetime | None
    created_at: datetime | None
    updated_at: datetime | None
    rating_label: str
    weakest_area: str
    strongest_area: str

    @classmethod
    def from_entity(cls, evaluation: SupplierEvaluation) -> "EvaluationResponse":
        return cls(
            **evaluation.to_dict(),
            rating_label=evaluation.rating_label(),
            weakest_area=evaluation.weakest_area(),
            strongest_area=evaluation.strongest_area(),
        )


class MetricCreateRequest(BaseModel):
    """POST /v1/metrics request."""

    supplier_id: int | None = None
    metric_type: str | None = None
    metric_date: date | None = None
    metric_value: float | None = None
    target_value: float | None = None
    unit: str | None = None
    period: str | None = None
    notes: str | None = None
    recorded_by: int | None = None


class MetricResponse(BaseModel):
    """Metric with target attainment."""

    id: int
    supplier_id: int
    metric_type: str
    metric_date: date | None
    metric_value: float
    target_value: float | None
    unit: str
    period: str
    notes: str
    recorded_by: int | None
    created_at: datetime | None
    meets_target: bool | None
    performance_percentage: float | None

    @classmethod
    def from_entity(cls, metric: SupplierMetric) -> "MetricResponse":
        return cls(
            **metric.to_dict(),
            meets_target=metric.meets_target(),
            performance_percentage=metric.performance_percentage(),
        )


class RatingResponse(BaseModel):
    """Current supplier rating with display helpers."""

    id: int
    supplier_id: int
    current_score: float
    rating: str
    rating_date: date | None
    created_at: datetime | None
    updated_at: datetime | None
    label: str
    color: str

    @classmethod
    def from_entity(cls, rating: SupplierRating) -> "RatingResponse":
        return cls(**rating.to_dict(), label=rating.label(), color=rating.color())
