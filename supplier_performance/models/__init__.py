"""Database models."""

from supplier_performance.models.evaluation import SupplierEvaluationRecord
from supplier_performance.models.metric import SupplierMetricRecord
from supplier_performance.models.rating import EvaluationReferenceSequence, SupplierRatingRecord

evaluations_table = SupplierEvaluationRecord.__table__
metrics_table = SupplierMetricRecord.__table__
ratings_table = SupplierRatingRecord.__table__
sequences_table = EvaluationReferenceSequence.__table__

__all__ = [
    "SupplierEvaluationRecord",
    "SupplierMetricRecord",
    "SupplierRatingRecord",
    "EvaluationReferenceSequence",
    "evaluations_table",
    "metrics_table",
    "ratings_table",
    "sequences_table",
]
