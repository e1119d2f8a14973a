"""Supplier rating and reference sequence models."""

from datetime import date, datetime

from sqlalchemy import Date, DateTime, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from supplier_performance.database import Base


class SupplierRatingRecord(Base):
    """Current rating - exactly one row per supplier, overwritten in place."""

    __tablename__ = "supplier_ratings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    supplier_id: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    current_score: Mapped[float] = mapped_column(Numeric(8, 2, asdecimal=False), nullable=False)
    rating: Mapped[str] = mapped_column(
        String(32), nullable=False
    )  # excellent|good|satisfactory|needs_improvement|poor
    rating_date: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class EvaluationReferenceSequence(Base):
    """Last allocated evaluation reference number per sequence key (year)."""

    __tablename__ = "evaluation_reference_sequences"

    sequence_key: Mapped[str] = mapped_column(String(16), primary_key=True)
    last_value: Mapped[int] = mapped_column(Integer, nullable=False)
