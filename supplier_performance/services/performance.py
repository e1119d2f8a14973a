"""Supplier performance service - evaluations, metrics and ratings."""

import logging
from collections.abc import Callable, Mapping
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

from sqlalchemy import func, select

from supplier_performance.engine.scoring import (
    CATEGORY_WEIGHTS,
    LOW_BANDS,
    calculate_overall_score,
    determine_rating,
)
from supplier_performance.errors import SupplierPerformanceError
from supplier_performance.events import (
    EvaluationCreated,
    EvaluationFinalized,
    EventPublisher,
    MetricTracked,
    PerformanceAlert,
    RatingUpdated,
)
from supplier_performance.models import (
    evaluations_table,
    metrics_table,
    ratings_table,
)
from supplier_performance.schemas.entities import SupplierEvaluation, SupplierMetric, SupplierRating
from supplier_performance.schemas.summary import MetricAverage, PerformanceSummary, ScoreAverages
from supplier_performance.storage.store import PerformanceStore

logger = logging.getLogger(__name__)

DRAFT = "draft"
FINALIZED = "finalized"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _positive_int(value: Any) -> int | None:
    """Value as a positive int, or None if it is not one (numeric strings allowed)."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, float) and value.is_integer():
        return int(value) if value > 0 else None
    if isinstance(value, str) and value.strip().isdigit():
        parsed = int(value.strip())
        return parsed if parsed > 0 else None
    return None


def _number(value: Any) -> float | None:
    """Value as a float, or None if it is not numeric (numeric strings allowed)."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _to_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return date.fromisoformat(value)
        except ValueError:
            return None
    return None


def _optional_float(v: Any) -> float | None:
    return None if v is None else float(v)


class SupplierPerformanceService:
    """
    Manages supplier evaluations, metric tracking and performance ratings.

    Works inside the caller's session: nothing here commits, so an operation
    and everything it cascades into succeed or roll back together.
    """

    def __init__(
        self,
        store: PerformanceStore,
        events: EventPublisher,
        *,
        reference_prefix: str = "SPE",
        alerts_enabled: bool = True,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store
        self.events = events
        self.reference_prefix = reference_prefix
        self.alerts_enabled = alerts_enabled
        self._now = clock

    # Evaluations

    async def create_evaluation(self, data: Mapping[str, Any]) -> SupplierEvaluation:
        """Validate, score and store a new draft evaluation."""
        fields = self._validate_evaluation_data(data)
        now = self._now()

        evaluation_data = {
            "evaluation_reference": await self._generate_evaluation_reference(now),
            "supplier_id": fields["supplier_id"],
            "evaluation_date": fields["evaluation_date"] or now.date(),
            "evaluator_id": fields["evaluator_id"],
            "evaluation_period_start": fields["period_start"],
            "evaluation_period_end": fields["period_end"],
            "overall_score": calculate_overall_score(
                {category: fields[f"{category}_score"] for category in CATEGORY_WEIGHTS}
            ),
            "quality_score": fields["quality_score"],
            "delivery_score": fields["delivery_score"],
            "price_score": fields["price_score"],
            "service_score": fields["service_score"],
            "compliance_score": fields["compliance_score"],
            "status": DRAFT,
            "comments": data.get("comments") or "",
            "recommendations": data.get("recommendations") or "",
            "finalized_at": None,
            "created_at": now,
            "updated_at": now,
        }

        evaluation_id = await self.store.insert(evaluations_table, evaluation_data)
        # Scores are stored at two decimal places; return what was stored
        evaluation = await self.get_evaluation(evaluation_id)

        logger.info(
            "Supplier evaluation created: id=%s reference=%s supplier_id=%s overall_score=%s",
            evaluation.id,
            evaluation.evaluation_reference,
            evaluation.supplier_id,
            evaluation.overall_score,
        )
        self.events.publish(EvaluationCreated(evaluation=evaluation))
        return evaluation

    async def finalize_evaluation(self, evaluation_id: int) -> SupplierEvaluation:
        """
        Move a draft evaluation to finalized and refresh the supplier's rating
        from its overall score. Finalizing twice is an error.
        """
        evaluation = await self.get_evaluation(evaluation_id)
        if not evaluation.is_draft():
            raise SupplierPerformanceError.invalid_state_transition(
                evaluation_id, evaluation.status, "finalize"
            )

        now = self._now()
        updated = await self.store.update(
            evaluations_table,
            {"status": FINALIZED, "finalized_at": now, "updated_at": now},
            {"id": evaluation_id, "status": DRAFT},
        )
        if not updated:
            # Finalized by someone else between the read and the update
            current = await self.get_evaluation(evaluation_id)
            raise SupplierPerformanceError.invalid_state_transition(
                evaluation_id, current.status, "finalize"
            )

        await self.update_supplier_rating(evaluation.supplier_id, evaluation.overall_score)

        evaluation = await self.get_evaluation(evaluation_id)
        logger.info(
            "Supplier evaluation finalized: id=%s supplier_id=%s",
            evaluation.id,
            evaluation.supplier_id,
        )
        self.events.publish(EvaluationFinalized(evaluation=evaluation))
        return evaluation

    async def get_evaluation(self, evaluation_id: int) -> SupplierEvaluation:
        row = await self.store.fetch_one(
            select(evaluations_table).where(evaluations_table.c.id == evaluation_id)
        )
        if row is None:
            raise SupplierPerformanceError.not_found("evaluation", evaluation_id)
        return SupplierEvaluation.from_row(row)

    async def get_supplier_evaluations(self, supplier_id: int, limit: int = 50) -> list[SupplierEvaluation]:
        """Newest evaluation_date first."""
        c = evaluations_table.c
        rows = await self.store.fetch_all(
            select(evaluations_table)
            .where(c.supplier_id == supplier_id)
            .order_by(c.evaluation_date.desc(), c.id.desc())
            .limit(limit)
        )
        return [SupplierEvaluation.from_row(row) for row in rows]

    # Metrics

    async def track_metric(self, data: Mapping[str, Any]) -> SupplierMetric:
        fields = self._validate_metric_data(data)
        now = self._now()

        metric_data = {
            "supplier_id": fields["supplier_id"],
            "metric_type": fields["metric_type"],
            "metric_date": fields["metric_date"] or now.date(),
            "metric_value": fields["metric_value"],
            "target_value": fields["target_value"],
            "unit": data.get("unit") or "",
            "period": data.get("period") or "monthly",
            "notes": data.get("notes") or "",
            "recorded_by": _positive_int(data.get("recorded_by")),
            "created_at": now,
        }

        metric_id = await self.store.insert(metrics_table, metric_data)
        metric = SupplierMetric.from_row({**metric_data, "id": metric_id})

        logger.info(
            "Supplier metric tracked: id=%s supplier_id=%s metric_type=%s",
            metric.id,
            metric.supplier_id,
            metric.metric_type,
        )
        self.events.publish(MetricTracked(metric=metric))

        if self.alerts_enabled and metric.meets_target() is False:
            self._alert(
                metric.supplier_id,
                "metric_below_target",
                f"{metric.metric_type} of {metric.metric_value:g} is below target {metric.target_value:g}",
                {
                    "metric_id": metric.id,
                    "metric_type": metric.metric_type,
                    "metric_value": metric.metric_value,
                    "target_value": metric.target_value,
                    "performance_percentage": metric.performance_percentage(),
                },
            )
        return metric

    async def get_supplier_metrics(
        self, supplier_id: int, metric_type: str | None = None, limit: int = 100
    ) -> list[SupplierMetric]:
        """Newest metric_date first, optionally restricted to one metric type."""
        c = metrics_table.c
        stmt = select(metrics_table).where(c.supplier_id == supplier_id)
        if metric_type:
            stmt = stmt.where(c.metric_type == metric_type)
        rows = await self.store.fetch_all(
            stmt.order_by(c.metric_date.desc(), c.id.desc()).limit(limit)
        )
        return [SupplierMetric.from_row(row) for row in rows]

    # Ratings

    async def update_supplier_rating(self, supplier_id: int, score: float) -> SupplierRating:
        """
        Get-or-create the supplier's single rating row and set it from ``score``.
        The row id and created_at survive an overwrite.
        """
        band = determine_rating(score)
        now = self._now()

        row = await self.store.upsert(
            ratings_table,
            {
                "supplier_id": supplier_id,
                "current_score": score,
                "rating": band.value,
                "rating_date": now.date(),
                "created_at": now,
                "updated_at": now,
            },
            conflict_keys=["supplier_id"],
            update_keys=["current_score", "rating", "rating_date", "updated_at"],
        )
        rating = SupplierRating.from_row(row)

        logger.info(
            "Supplier rating updated: supplier_id=%s score=%s rating=%s",
            supplier_id,
            score,
            rating.rating,
        )
        self.events.publish(RatingUpdated(rating=rating))

        if self.alerts_enabled and band in LOW_BANDS:
            self._alert(
                supplier_id,
                "low_rating",
                f"Supplier {supplier_id} rated {rating.label()} with score {score:g}",
                {"current_score": score, "rating": rating.rating},
            )
        return rating

    async def get_supplier_rating(self, supplier_id: int) -> SupplierRating | None:
        """None when the supplier has not been rated yet."""
        row = await self.store.fetch_one(
            select(ratings_table).where(ratings_table.c.supplier_id == supplier_id)
        )
        return SupplierRating.from_row(row) if row is not None else None

    async def get_top_suppliers(self, limit: int = 10) -> list[SupplierRating]:
        c = ratings_table.c
        rows = await self.store.fetch_all(
            select(ratings_table).order_by(c.current_score.desc(), c.supplier_id).limit(limit)
        )
        return [SupplierRating.from_row(row) for row in rows]

    # Reporting

    async def get_performance_summary(
        self, supplier_id: int, period_start: date | str, period_end: date | str
    ) -> PerformanceSummary:
        """
        Averages over finalized evaluations and over metrics dated inside the
        inclusive window, plus the current rating. Read-only.
        """
        start, end = _to_date(period_start), _to_date(period_end)
        if start is None or end is None:
            raise SupplierPerformanceError.validation_failed(
                "Summary validation failed", {"period": "Valid period dates are required"}
            )

        ec = evaluations_table.c
        scores = await self.store.fetch_one(
            select(
                func.avg(ec.overall_score).label("avg_overall"),
                func.avg(ec.quality_score).label("avg_quality"),
                func.avg(ec.delivery_score).label("avg_delivery"),
                func.avg(ec.price_score).label("avg_price"),
                func.avg(ec.service_score).label("avg_service"),
                func.avg(ec.compliance_score).label("avg_compliance"),
                func.count().label("evaluation_count"),
            ).where(
                ec.supplier_id == supplier_id,
                ec.evaluation_date.between(start, end),
                ec.status == FINALIZED,
            )
        )
        scores = scores or {}
        score_averages = ScoreAverages(
            **{key: _optional_float(value) for key, value in scores.items() if key != "evaluation_count"},
            evaluation_count=int(scores.get("evaluation_count") or 0),
        )

        mc = metrics_table.c
        metric_rows = await self.store.fetch_all(
            select(mc.metric_type, func.avg(mc.metric_value).label("avg_value"))
            .where(mc.supplier_id == supplier_id, mc.metric_date.between(start, end))
            .group_by(mc.metric_type)
            .order_by(mc.metric_type)
        )

        return PerformanceSummary(
            supplier_id=supplier_id,
            period_start=start,
            period_end=end,
            scores=score_averages,
            metrics=[
                MetricAverage(metric_type=row["metric_type"], avg_value=float(row["avg_value"]))
                for row in metric_rows
            ],
            current_rating=await self.get_supplier_rating(supplier_id),
        )

    async def get_record_counts(self) -> dict[str, int]:
        """Stored row counts, evaluations split by status."""
        ec = evaluations_table.c
        by_status = {
            row["status"]: row["count"]
            for row in await self.store.fetch_all(
                select(ec.status, func.count().label("count")).group_by(ec.status)
            )
        }
        metrics = await self.store.fetch_one(select(func.count().label("count")).select_from(metrics_table))
        ratings = await self.store.fetch_one(select(func.count().label("count")).select_from(ratings_table))
        return {
            "draft_evaluations": by_status.get(DRAFT, 0),
            "finalized_evaluations": by_status.get(FINALIZED, 0),
            "metrics": metrics["count"],
            "ratings": ratings["count"],
        }

    # Helpers

    def _validate_evaluation_data(self, data: Mapping[str, Any]) -> dict[str, Any]:
        errors: dict[str, str] = {}
        fields: dict[str, Any] = {}

        fields["supplier_id"] = _positive_int(data.get("supplier_id"))
        if fields["supplier_id"] is None:
            errors["supplier_id"] = "Valid supplier ID is required"

        fields["evaluator_id"] = _positive_int(data.get("evaluator_id"))
        if fields["evaluator_id"] is None:
            errors["evaluator_id"] = "Valid evaluator ID is required"

        fields["period_start"] = _to_date(data.get("period_start"))
        fields["period_end"] = _to_date(data.get("period_end"))
        if fields["period_start"] is None or fields["period_end"] is None:
            errors["period"] = "Evaluation period dates are required"

        fields["evaluation_date"] = None
        if data.get("evaluation_date") is not None:
            fields["evaluation_date"] = _to_date(data["evaluation_date"])
            if fields["evaluation_date"] is None:
                errors["evaluation_date"] = "Evaluation date must be a valid date"

        for category in CATEGORY_WEIGHTS:
            key = f"{category}_score"
            raw = data.get(key)
            fields[key] = 0.0 if raw is None else _number(raw)
            if fields[key] is None:
                errors[key] = f"{category.capitalize()} score must be numeric"

        if errors:
            raise SupplierPerformanceError.validation_failed("Evaluation validation failed", errors)
        return fields

    def _validate_metric_data(self, data: Mapping[str, Any]) -> dict[str, Any]:
        errors: dict[str, str] = {}
        fields: dict[str, Any] = {}

        fields["supplier_id"] = _positive_int(data.get("supplier_id"))
        if fields["supplier_id"] is None:
            errors["supplier_id"] = "Valid supplier ID is required"

        metric_type = data.get("metric_type")
        fields["metric_type"] = metric_type.strip() if isinstance(metric_type, str) else ""
        if not fields["metric_type"]:
            errors["metric_type"] = "Metric type is required"

        fields["metric_value"] = _number(data.get("metric_value"))
        if fields["metric_value"] is None:
            errors["metric_value"] = "Valid metric value is required"

        fields["target_value"] = None
        if data.get("target_value") is not None:
            fields["target_value"] = _number(data["target_value"])
            if fields["target_value"] is None:
                errors["target_value"] = "Target value must be numeric"

        fields["metric_date"] = None
        if data.get("metric_date") is not None:
            fields["metric_date"] = _to_date(data["metric_date"])
            if fields["metric_date"] is None:
                errors["metric_date"] = "Metric date must be a valid date"

        if errors:
            raise SupplierPerformanceError.validation_failed("Metric validation failed", errors)
        return fields

    async def _generate_evaluation_reference(self, now: datetime) -> str:
        """SPE-<year>-<NNNN> from an atomic per-year counter."""
        year = str(now.year)
        sequence = await self.store.next_sequence(year)
        return f"{self.reference_prefix}-{year}-{sequence:04d}"

    def _alert(self, supplier_id: int, alert_type: str, message: str, data: dict[str, Any]) -> None:
        logger.warning("Supplier performance alert: supplier_id=%s type=%s %s", supplier_id, alert_type, message)
        self.events.publish(
            PerformanceAlert(supplier_id=supplier_id, alert_type=alert_type, message=message, data=data)
        )
