"""Entity models - immutable views of persisted supplier performance rows."""

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from supplier_performance.engine.scoring import CATEGORY_LABELS, RatingBand, band_title

EVALUATION_SCORE_FIELDS = (
    "overall_score",
    "quality_score",
    "delivery_score",
    "price_score",
    "service_score",
    "compliance_score",
)


def _float_or_zero(v: Any) -> float:
    return 0.0 if v is None else float(v)


class _Entity(BaseModel):
    """Built from a flat row mapping; every field has a default."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @classmethod
    def from_row(cls, row: Mapping[str, Any]):
        return cls.model_validate(dict(row))

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()


class SupplierEvaluation(_Entity):
    """A periodic evaluation of one supplier's performance."""

    id: int = 0
    evaluation_reference: str = ""
    supplier_id: int = 0
    evaluation_date: date | None = None
    evaluator_id: int = 0
    evaluation_period_start: date | None = None
    evaluation_period_end: date | None = None
    overall_score: float = 0.0
    quality_score: float = 0.0
    delivery_score: float = 0.0
    price_score: float = 0.0
    service_score: float = 0.0
    compliance_score: float = 0.0
    status: str = "draft"
    comments: str = ""
    recommendations: str = ""
    finalized_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator(*EVALUATION_SCORE_FIELDS, mode="before")
    @classmethod
    def coerce_score(cls, v: Any) -> float:
        return _float_or_zero(v)

    @field_validator("id", "supplier_id", "evaluator_id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> int:
        return 0 if v is None else v

    @field_validator("evaluation_reference", "comments", "recommendations", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return "" if v is None else v

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, v: Any) -> str:
        return "draft" if v is None else v

    def is_draft(self) -> bool:
        return self.status == "draft"

    def is_finalized(self) -> bool:
        return self.status == "finalized"

    def rating_label(self) -> str:
        """Title of the band the overall score falls in, e.g. 'Good'."""
        return band_title(self.overall_score)

    def category_scores(self) -> dict[str, float]:
        """Category -> score in the fixed enumeration order."""
        return {category: getattr(self, f"{category}_score") for category in CATEGORY_LABELS}

    def weakest_area(self) -> str:
        # min()/max() keep the first of equal values, so ties resolve in enumeration order
        scores = self.category_scores()
        return CATEGORY_LABELS[min(scores, key=scores.__getitem__)]

    def strongest_area(self) -> str:
        scores = self.category_scores()
        return CATEGORY_LABELS[max(scores, key=scores.__getitem__)]


class SupplierMetric(_Entity):
    """A single dated observation against an optional target."""

    id: int = 0
    supplier_id: int = 0
    metric_type: str = ""
    metric_date: date | None = None
    metric_value: float = 0.0
    target_value: float | None = None
    unit: str = ""
    period: str = "monthly"
    notes: str = ""
    recorded_by: int | None = None
    created_at: datetime | None = None

    @field_validator("metric_value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> float:
        return _float_or_zero(v)

    @field_validator("target_value", mode="before")
    @classmethod
    def coerce_target(cls, v: Any) -> float | None:
        return None if v is None else float(v)

    @field_validator("id", "supplier_id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> int:
        return 0 if v is None else v

    @field_validator("metric_type", "unit", "notes", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        return "" if v is None else v

    @field_validator("period", mode="before")
    @classmethod
    def coerce_period(cls, v: Any) -> str:
        return "monthly" if v is None else v

    def meets_target(self) -> bool | None:
        """None without a target. Higher is better for every metric type."""
        if self.target_value is None:
            return None
        return self.metric_value >= self.target_value

    def performance_percentage(self) -> float | None:
        if self.target_value is None or self.target_value == 0:
            return None
        return round(self.metric_value / self.target_value * 100, 2)


RATING_LABELS: dict[str, str] = {
    RatingBand.EXCELLENT.value: "Excellent (90+)",
    RatingBand.GOOD.value: "Good (80-89)",
    RatingBand.SATISFACTORY.value: "Satisfactory (70-79)",
    RatingBand.NEEDS_IMPROVEMENT.value: "Needs Improvement (60-69)",
    RatingBand.POOR.value: "Poor (<60)",
    RatingBand.NOT_RATED.value: "Not Rated",
}

RATING_COLORS: dict[str, str] = {
    RatingBand.EXCELLENT.value: "green",
    RatingBand.GOOD.value: "lightgreen",
    RatingBand.SATISFACTORY.value: "yellow",
    RatingBand.NEEDS_IMPROVEMENT.value: "orange",
    RatingBand.POOR.value: "red",
    RatingBand.NOT_RATED.value: "gray",
}


class SupplierRating(_Entity):
    """The single current rating of a supplier."""

    id: int = 0
    supplier_id: int = 0
    current_score: float = 0.0
    rating: str = RatingBand.NOT_RATED.value
    rating_date: date | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("current_score", mode="before")
    @classmethod
    def coerce_score(cls, v: Any) -> float:
        return _float_or_zero(v)

    @field_validator("id", "supplier_id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> int:
        return 0 if v is None else v

    @field_validator("rating", mode="before")
    @classmethod
    def coerce_rating(cls, v: Any) -> str:
        if v is None:
            return RatingBand.NOT_RATED.value
        return v.value if isinstance(v, RatingBand) else v

    def is_excellent(self) -> bool:
        return self.rating == RatingBand.EXCELLENT.value

    def is_good(self) -> bool:
        return self.rating == RatingBand.GOOD.value

    def needs_improvement(self) -> bool:
        return self.rating in (RatingBand.NEEDS_IMPROVEMENT.value, RatingBand.POOR.value)

    def label(self) -> str:
        return RATING_LABELS.get(self.rating, "Unknown")

    def color(self) -> str:
        return RATING_COLORS.get(self.rating, "gray")
