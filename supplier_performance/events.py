"""Supplier performance events and an in-process publish/subscribe dispatcher."""

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field

from supplier_performance.schemas.entities import SupplierEvaluation, SupplierMetric, SupplierRating

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SupplierPerformanceEvent(BaseModel):
    """Base for every event; stamped when constructed."""

    model_config = ConfigDict(frozen=True)

    occurred_at: datetime = Field(default_factory=_utcnow)


class EvaluationCreated(SupplierPerformanceEvent):
    evaluation: SupplierEvaluation

    @property
    def supplier_id(self) -> int:
        return self.evaluation.supplier_id


class EvaluationFinalized(SupplierPerformanceEvent):
    evaluation: SupplierEvaluation

    @property
    def supplier_id(self) -> int:
        return self.evaluation.supplier_id

    @property
    def overall_score(self) -> float:
        return self.evaluation.overall_score


class MetricTracked(SupplierPerformanceEvent):
    metric: SupplierMetric

    @property
    def supplier_id(self) -> int:
        return self.metric.supplier_id

    @property
    def metric_type(self) -> str:
        return self.metric.metric_type

    @property
    def metric_value(self) -> float:
        return self.metric.metric_value


class RatingUpdated(SupplierPerformanceEvent):
    rating: SupplierRating

    @property
    def supplier_id(self) -> int:
        return self.rating.supplier_id

    @property
    def current_score(self) -> float:
        return self.rating.current_score

    @property
    def rating_level(self) -> str:
        return self.rating.rating


class PerformanceAlert(SupplierPerformanceEvent):
    """Something about a supplier needs attention (low rating, missed target)."""

    supplier_id: int
    alert_type: str
    message: str
    data: dict[str, Any] = Field(default_factory=dict)


EventHandler = Callable[[SupplierPerformanceEvent], None]


class EventPublisher(Protocol):
    def publish(self, event: SupplierPerformanceEvent) -> None: ...


class EventDispatcher:
    """
    Synchronous dispatcher. Handlers subscribed to an event class also receive
    its subclasses; they run in subscription order and their errors propagate.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[SupplierPerformanceEvent], list[EventHandler]] = {}

    def subscribe(self, event_type: type[SupplierPerformanceEvent], handler: EventHandler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: type[SupplierPerformanceEvent], handler: EventHandler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: SupplierPerformanceEvent) -> None:
        logger.debug("Publishing %s for supplier %s", type(event).__name__, event.supplier_id)
        for event_type in type(event).__mro__:
            for handler in list(self._handlers.get(event_type, [])):
                handler(event)


dispatcher = EventDispatcher()
