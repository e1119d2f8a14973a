"""Performance summary schemas."""

from datetime import date

from pydantic import BaseModel, Field

from supplier_performance.schemas.entities import SupplierRating


class ScoreAverages(BaseModel):
    """Mean scores over finalized evaluations in a window. Means are None when count is 0."""

    avg_overall: float | None = None
    avg_quality: float | None = None
    avg_delivery: float | None = None
    avg_price: float | None = None
    avg_service: float | None = None
    avg_compliance: float | None = None
    evaluation_count: int = 0


class MetricAverage(BaseModel):
    """Mean value of one metric type in a window."""

    metric_type: str
    avg_value: float


class PerformanceSummary(BaseModel):
    """Supplier performance summary for a period."""

    supplier_id: int
    period_start: date
    period_end: date
    scores: ScoreAverages
    metrics: list[MetricAverage] = Field(default_factory=list)
    current_rating: SupplierRating | None = None
