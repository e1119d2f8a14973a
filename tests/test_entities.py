"""Unit tests for entity models."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from supplier_performance.schemas.entities import SupplierEvaluation, SupplierMetric, SupplierRating

AREAS = {"Quality", "Delivery", "Price", "Service", "Compliance"}


def _evaluation(**scores) -> SupplierEvaluation:
    row = {
        "id": 1,
        "supplier_id": 7,
        "quality_score": 95,
        "delivery_score": 90,
        "price_score": 85,
        "service_score": 92,
        "compliance_score": 88,
        "overall_score": 90.6,
    }
    row.update(scores)
    return SupplierEvaluation.from_row(row)


def test_evaluation_defaults_from_empty_row():
    """Partial rows never raise; every field has a default."""
    evaluation = SupplierEvaluation.from_row({})
    assert evaluation.id == 0
    assert evaluation.evaluation_reference == ""
    assert evaluation.overall_score == 0.0
    assert evaluation.status == "draft"
    assert evaluation.finalized_at is None
    assert evaluation.is_draft()
    assert not evaluation.is_finalized()


def test_evaluation_coerces_numeric_fields():
    """Decimal, int and None scores become floats."""
    evaluation = SupplierEvaluation.from_row(
        {"quality_score": Decimal("87.50"), "delivery_score": 80, "price_score": None}
    )
    assert evaluation.quality_score == 87.5
    assert isinstance(evaluation.delivery_score, float)
    assert evaluation.price_score == 0.0


def test_evaluation_is_immutable():
    """Entities are frozen after construction."""
    evaluation = _evaluation()
    with pytest.raises(ValidationError):
        evaluation.status = "finalized"


def test_weakest_and_strongest_area():
    """Weakest/strongest pick the min/max category."""
    evaluation = _evaluation()
    assert evaluation.weakest_area() == "Price"
    assert evaluation.strongest_area() == "Quality"
    assert evaluation.rating_label() == "Excellent"


def test_all_equal_scores_pick_first_area():
    """Ties resolve to the first category in enumeration order."""
    evaluation = _evaluation(
        quality_score=75, delivery_score=75, price_score=75, service_score=75, compliance_score=75
    )
    assert evaluation.weakest_area() == "Quality"
    assert evaluation.strongest_area() == "Quality"


def test_partial_tie_picks_earliest():
    """Delivery and Service tie for lowest; Delivery comes first."""
    evaluation = _evaluation(
        quality_score=90, delivery_score=60, price_score=80, service_score=60, compliance_score=90
    )
    assert evaluation.weakest_area() == "Delivery"
    assert evaluation.strongest_area() == "Quality"
    assert evaluation.weakest_area() in AREAS


@pytest.mark.parametrize(
    "overall,label",
    [(90, "Excellent"), (89.99, "Good"), (70, "Satisfactory"), (60, "Needs Improvement"), (10, "Poor")],
)
def test_evaluation_rating_label(overall, label):
    assert _evaluation(overall_score=overall).rating_label() == label


def test_evaluation_to_dict_is_lossless():
    """to_dict dumps every stored field by name."""
    evaluation = _evaluation(evaluation_date=date(2026, 3, 1), status="finalized")
    dumped = evaluation.to_dict()
    assert dumped["evaluation_date"] == date(2026, 3, 1)
    assert dumped["status"] == "finalized"
    assert SupplierEvaluation.from_row(dumped) == evaluation


def test_metric_below_target():
    """Value 42 against target 50."""
    metric = SupplierMetric.from_row({"metric_value": 42, "target_value": 50})
    assert metric.meets_target() is False
    assert metric.performance_percentage() == 84.0


def test_metric_meets_target_at_equality():
    metric = SupplierMetric.from_row({"metric_value": 50, "target_value": 50})
    assert metric.meets_target() is True
    assert metric.performance_percentage() == 100.0


def test_metric_without_target_is_undefined():
    """No target means undefined attainment, not False/0."""
    metric = SupplierMetric.from_row({"metric_value": 42})
    assert metric.meets_target() is None
    assert metric.performance_percentage() is None
    assert metric.period == "monthly"


def test_metric_with_zero_target():
    """Zero target: attainment defined, percentage undefined."""
    metric = SupplierMetric.from_row({"metric_value": 3, "target_value": 0})
    assert metric.meets_target() is True
    assert metric.performance_percentage() is None


def test_metric_percentage_rounding():
    metric = SupplierMetric.from_row({"metric_value": 1, "target_value": 3})
    assert metric.performance_percentage() == 33.33


def test_rating_defaults_to_not_rated():
    rating = SupplierRating.from_row({"supplier_id": 5})
    assert rating.rating == "not_rated"
    assert rating.label() == "Not Rated"
    assert rating.color() == "gray"
    assert not rating.needs_improvement()


@pytest.mark.parametrize(
    "code,label,color,excellent,needs_improvement",
    [
        ("excellent", "Excellent (90+)", "green", True, False),
        ("good", "Good (80-89)", "lightgreen", False, False),
        ("satisfactory", "Satisfactory (70-79)", "yellow", False, False),
        ("needs_improvement", "Needs Improvement (60-69)", "orange", False, True),
        ("poor", "Poor (<60)", "red", False, True),
    ],
)
def test_rating_lookups(code, label, color, excellent, needs_improvement):
    rating = SupplierRating.from_row({"rating": code, "current_score": "85.5"})
    assert rating.current_score == 85.5
    assert rating.label() == label
    assert rating.color() == color
    assert rating.is_excellent() is excellent
    assert rating.needs_improvement() is needs_improvement


def test_rating_unknown_code_falls_back():
    """Unknown codes get a default label and color instead of failing."""
    rating = SupplierRating.from_row({"rating": "legendary"})
    assert rating.label() == "Unknown"
    assert rating.color() == "gray"
    assert not rating.is_good()
