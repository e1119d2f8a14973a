"""Initial schema - supplier evaluations, metrics, ratings, reference sequences.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "supplier_evaluations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("evaluation_reference", sa.String(32), nullable=False),
        sa.Column("supplier_id", sa.Integer(), nullable=False),
        sa.Column("evaluation_date", sa.Date(), nullable=False),
        sa.Column("evaluator_id", sa.Integer(), nullable=False),
        sa.Column("evaluation_period_start", sa.Date(), nullable=False),
        sa.Column("evaluation_period_end", sa.Date(), nullable=False),
        sa.Column("overall_score", sa.Numeric(8, 2), nullable=False),
        sa.Column("quality_score", sa.Numeric(8, 2), nullable=False),
        sa.Column("delivery_score", sa.Numeric(8, 2), nullable=False),
        sa.Column("price_score", sa.Numeric(8, 2), nullable=False),
        sa.Column("service_score", sa.Numeric(8, 2), nullable=False),
        sa.Column("compliance_score", sa.Numeric(8, 2), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("comments", sa.Text(), nullable=False, server_default=""),
        sa.Column("recommendations", sa.Text(), nullable=False, server_default=""),
        sa.Column("finalized_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.CheckConstraint("status IN ('draft', 'finalized')", name="ck_supplier_evaluations_status"),
        sa.CheckConstraint(
            "(status = 'finalized') = (finalized_at IS NOT NULL)",
            name="ck_supplier_evaluations_finalized_at",
        ),
    )
    op.create_unique_constraint(
        "uq_supplier_evaluations_reference",
        "supplier_evaluations",
        ["evaluation_reference"],
    )
    op.create_index(
        "ix_supplier_evaluations_supplier_date",
        "supplier_evaluations",
        ["supplier_id", "evaluation_date"],
    )

    op.create_table(
        "supplier_metrics",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("supplier_id", sa.Integer(), nullable=False),
        sa.Column("metric_type", sa.String(64), nullable=False),
        sa.Column("metric_date", sa.Date(), nullable=False),
        sa.Column("metric_value", sa.Numeric(12, 4), nullable=False),
        sa.Column("target_value", sa.Numeric(12, 4), nullable=True),
        sa.Column("unit", sa.String(32), nullable=False, server_default=""),
        sa.Column("period", sa.String(20), nullable=False, server_default="monthly"),
        sa.Column("notes", sa.Text(), nullable=False, server_default=""),
        sa.Column("recorded_by", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_supplier_metrics_supplier_type_date",
        "supplier_metrics",
        ["supplier_id", "metric_type", "metric_date"],
    )

    op.create_table(
        "supplier_ratings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("supplier_id", sa.Integer(), nullable=False),
        sa.Column("current_score", sa.Numeric(8, 2), nullable=False),
        sa.Column("rating", sa.String(32), nullable=False),
        sa.Column("rating_date", sa.Date(), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False),
    )
    # Backs the get-or-create upsert: one rating row per supplier
    op.create_unique_constraint(
        "uq_supplier_ratings_supplier",
        "supplier_ratings",
        ["supplier_id"],
    )
    op.create_index("ix_supplier_ratings_score", "supplier_ratings", ["current_score"])

    op.create_table(
        "evaluation_reference_sequences",
        sa.Column("sequence_key", sa.String(16), primary_key=True),
        sa.Column("last_value", sa.Integer(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("evaluation_reference_sequences")
    op.drop_index("ix_supplier_ratings_score", table_name="supplier_ratings")
    op.drop_table("supplier_ratings")
    op.drop_index("ix_supplier_metrics_supplier_type_date", table_name="supplier_metrics")
    op.drop_table("supplier_metrics")
    op.drop_index("ix_supplier_evaluations_supplier_date", table_name="supplier_evaluations")
    op.drop_table("supplier_evaluations")
