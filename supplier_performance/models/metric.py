"""Supplier metric model."""

from datetime import date, datetime

from sqlalchemy import Date, DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from supplier_performance.database import Base


class SupplierMetricRecord(Base):
    """Dated performance observations - append-only."""

    __tablename__ = "supplier_metrics"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    supplier_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    metric_type: Mapped[str] = mapped_column(String(64), nullable=False)
    metric_date: Mapped[date] = mapped_column(Date, nullable=False)
    metric_value: Mapped[float] = mapped_column(Numeric(12, 4, asdecimal=False), nullable=False)
    target_value: Mapped[float | None] = mapped_column(Numeric(12, 4, asdecimal=False), nullable=True)
    unit: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    period: Mapped[str] = mapped_column(String(20), nullable=False, default="monthly")
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    recorded_by: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
