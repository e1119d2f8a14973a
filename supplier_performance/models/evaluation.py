"""Supplier evaluation model."""

from datetime import date, datetime

from sqlalchemy import Date, DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from supplier_performance.database import Base


class SupplierEvaluationRecord(Base):
    """Periodic supplier evaluations - draft until finalized, then frozen."""

    __tablename__ = "supplier_evaluations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    evaluation_reference: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    supplier_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    evaluation_date: Mapped[date] = mapped_column(Date, nullable=False)
    evaluator_id: Mapped[int] = mapped_column(Integer, nullable=False)
    evaluation_period_start: Mapped[date] = mapped_column(Date, nullable=False)
    evaluation_period_end: Mapped[date] = mapped_column(Date, nullable=False)
    overall_score: Mapped[float] = mapped_column(Numeric(8, 2, asdecimal=False), nullable=False)
    quality_score: Mapped[float] = mapped_column(Numeric(8, 2, asdecimal=False), nullable=False)
    delivery_score: Mapped[float] = mapped_column(Numeric(8, 2, asdecimal=False), nullable=False)
    price_score: Mapped[float] = mapped_column(Numeric(8, 2, asdecimal=False), nullable=False)
    service_score: Mapped[float] = mapped_column(Numeric(8, 2, asdecimal=False), nullable=False)
    compliance_score: Mapped[float] = mapped_column(Numeric(8, 2, asdecimal=False), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="draft"
    )  # draft|finalized
    comments: Mapped[str] = mapped_column(Text, nullable=False, default="")
    recommendations: Mapped[str] = mapped_column(Text, nullable=False, default="")
    finalized_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
