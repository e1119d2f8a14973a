"""Unit tests for domain errors and the event dispatcher."""

import pytest

from supplier_performance.errors import ErrorKind, SupplierPerformanceError
from supplier_performance.events import (
    EvaluationCreated,
    EventDispatcher,
    MetricTracked,
    PerformanceAlert,
    RatingUpdated,
    SupplierPerformanceEvent,
)
from supplier_performance.schemas.entities import SupplierEvaluation, SupplierMetric, SupplierRating


def test_validation_error_payload():
    """Validation errors carry a field -> message map."""
    err = SupplierPerformanceError.validation_failed(
        "Evaluation validation failed", {"supplier_id": "Valid supplier ID is required"}
    )
    assert err.kind is ErrorKind.VALIDATION_FAILED
    assert err.field_error("supplier_id") == "Valid supplier ID is required"
    assert err.field_error("period") is None
    assert err.payload() == {"errors": {"supplier_id": "Valid supplier ID is required"}}


def test_not_found_payload():
    err = SupplierPerformanceError.not_found("evaluation", 42)
    assert err.kind is ErrorKind.NOT_FOUND
    assert str(err) == "Supplier evaluation with ID 42 not found"
    assert err.payload() == {"entity": "evaluation", "entity_id": 42}


def test_invalid_state_transition_payload():
    err = SupplierPerformanceError.invalid_state_transition(7, "finalized", "finalize")
    assert err.kind is ErrorKind.INVALID_STATE_TRANSITION
    assert err.current_status == "finalized"
    assert err.attempted_action == "finalize"
    assert "Cannot finalize evaluation 7" in str(err)


def test_events_expose_supplier_and_timestamp():
    """Every event is timestamped and knows its supplier."""
    created = EvaluationCreated(evaluation=SupplierEvaluation.from_row({"supplier_id": 3}))
    tracked = MetricTracked(
        metric=SupplierMetric.from_row({"supplier_id": 4, "metric_type": "lead_time", "metric_value": 5})
    )
    updated = RatingUpdated(
        rating=SupplierRating.from_row({"supplier_id": 5, "current_score": 81, "rating": "good"})
    )
    alert = PerformanceAlert(supplier_id=6, alert_type="low_rating", message="Poor")

    assert [e.supplier_id for e in (created, tracked, updated, alert)] == [3, 4, 5, 6]
    assert tracked.metric_type == "lead_time"
    assert updated.rating_level == "good"
    assert updated.current_score == 81.0
    assert alert.data == {}
    assert all(e.occurred_at is not None for e in (created, tracked, updated, alert))


def test_dispatcher_routes_by_type_and_base_type():
    """Handlers on the base event receive every subclass."""
    dispatcher = EventDispatcher()
    all_events, alerts = [], []
    dispatcher.subscribe(SupplierPerformanceEvent, all_events.append)
    dispatcher.subscribe(PerformanceAlert, alerts.append)

    alert = PerformanceAlert(supplier_id=1, alert_type="x", message="y")
    created = EvaluationCreated(evaluation=SupplierEvaluation.from_row({"supplier_id": 1}))
    dispatcher.publish(alert)
    dispatcher.publish(created)

    assert alerts == [alert]
    assert all_events == [alert, created]


def test_dispatcher_unsubscribe():
    dispatcher = EventDispatcher()
    seen = []
    dispatcher.subscribe(PerformanceAlert, seen.append)
    dispatcher.unsubscribe(PerformanceAlert, seen.append)
    dispatcher.publish(PerformanceAlert(supplier_id=1, alert_type="x", message="y"))
    assert seen == []


def test_dispatcher_propagates_handler_errors():
    """Handler failures are not swallowed."""
    dispatcher = EventDispatcher()

    def boom(event):
        raise RuntimeError("handler failed")

    dispatcher.subscribe(PerformanceAlert, boom)
    with pytest.raises(RuntimeError, match="handler failed"):
        dispatcher.publish(PerformanceAlert(supplier_id=1, alert_type="x", message="y"))
