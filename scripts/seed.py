#!/usr/bin/env python3
"""
Seed script: creates demo evaluations, metrics and ratings for three suppliers.
Run after migrations: python scripts/seed.py
"""

import asyncio
import os
import sys
from datetime import date

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from supplier_performance.config import settings
from supplier_performance.events import dispatcher
from supplier_performance.services.performance import SupplierPerformanceService
from supplier_performance.storage.store import PerformanceStore


EVALUATIONS = [
    # supplier_id, quality, delivery, price, service, compliance
    (101, 95, 90, 85, 92, 88),
    (102, 78, 82, 90, 70, 75),
    (103, 55, 60, 72, 58, 65),
]

METRICS = [
    # supplier_id, metric_type, value, target, unit
    (101, "on_time_delivery", 98.5, 95, "%"),
    (102, "on_time_delivery", 91.0, 95, "%"),
    (103, "defect_rate", 4.2, 2, "%"),
]


async def seed():
    engine = create_async_engine(settings.database_url)
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        service = SupplierPerformanceService(
            PerformanceStore(session),
            dispatcher,
            reference_prefix=settings.evaluation_reference_prefix,
            alerts_enabled=settings.low_rating_alert_enabled,
        )

        for supplier_id, quality, delivery, price, service_score, compliance in EVALUATIONS:
            evaluation = await service.create_evaluation(
                {
                    "supplier_id": supplier_id,
                    "evaluator_id": 1,
                    "period_start": date(2026, 7, 1),
                    "period_end": date(2026, 9, 30),
                    "quality_score": quality,
                    "delivery_score": delivery,
                    "price_score": price,
                    "service_score": service_score,
                    "compliance_score": compliance,
                    "comments": "Quarterly review (seed)",
                }
            )
            evaluation = await service.finalize_evaluation(evaluation.id)
            print(
                f"{evaluation.evaluation_reference}: supplier {supplier_id} "
                f"scored {evaluation.overall_score} ({evaluation.rating_label()})"
            )

        for supplier_id, metric_type, value, target, unit in METRICS:
            await service.track_metric(
                {
                    "supplier_id": supplier_id,
                    "metric_type": metric_type,
                    "metric_value": value,
                    "target_value": target,
                    "unit": unit,
                    "recorded_by": 1,
                }
            )

        await session.commit()

        for rating in await service.get_top_suppliers():
            print(f"Supplier {rating.supplier_id}: {rating.current_score} {rating.label()}")

    await engine.dispose()
    print("Seed complete!")


if __name__ == "__main__":
    asyncio.run(seed())
