"""initial schema and API-12L treater catalog

Revision ID: 3f2a9c41d7e0
Revises:
Create Date: 2026-10-18 10:12:40.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from thermotreat.data.treatment_options import standard_treatment_options


# revision identifiers, used by Alembic.
revision: str = '3f2a9c41d7e0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    option = op.create_table(
        "treatment_option",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("diameter", sa.Float(), nullable=False),
        sa.Column("length", sa.Float(), nullable=False),
        sa.Column("design_pressure", sa.Integer(), nullable=False),
        sa.Column("min_heat_capacity", sa.Integer(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index(
        "ix_treatment_option_heat_diameter",
        "treatment_option",
        ["min_heat_capacity", "diameter"],
    )

    op.create_table(
        "treatment",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("method", sa.String(length=20), nullable=False),
        *[
            sa.Column(name, sa.Float(), nullable=False)
            for name in (
                "total_flow",
                "water_fraction",
                "inlet_temperature",
                "target_temperature",
                "ambient_temperature",
                "oil_retention_time",
                "water_retention_time",
                "wind_speed",
                "api_gravity",
            )
        ],
        *[
            sa.Column(name, sa.Float(), nullable=True)
            for name in (
                "calculated_oil_flow",
                "calculated_water_flow",
                "oil_retention_volume",
                "water_retention_volume",
                "required_heat",
                "heat_loss",
                "total_heat",
                "selected_diameter",
                "selected_length",
                "design_pressure",
            )
        ],
        sa.Column(
            "selected_option_id",
            sa.Integer(),
            sa.ForeignKey("treatment_option.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_treatment_name", "treatment", ["name"])

    op.create_table(
        "evaluation",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("evaluation_type", sa.String(length=20), nullable=False),
        sa.Column("evaluation_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("comments", sa.Text(), nullable=True),
        sa.Column("approved", sa.Boolean(), nullable=False),
        sa.Column("score", sa.Float(), nullable=True),
        sa.Column("critical_failures", sa.Integer(), nullable=False),
        sa.Column("average_compliance", sa.Float(), nullable=False),
        sa.Column("deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "treatment_id",
            sa.Integer(),
            sa.ForeignKey("treatment.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
    )
    op.create_index("ix_evaluation_treatment_id", "evaluation", ["treatment_id"])

    op.create_table(
        "evaluation_criterion",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "evaluation_id",
            sa.Integer(),
            sa.ForeignKey("evaluation.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("required_value", sa.Float(), nullable=False),
        sa.Column("actual_value", sa.Float(), nullable=False),
        sa.Column("max_value", sa.Float(), nullable=True),
        sa.Column("approved", sa.Boolean(), nullable=False),
        sa.Column("compliance_margin", sa.Float(), nullable=False),
        sa.Column("is_critical", sa.Boolean(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=False),
        sa.Column("unit", sa.String(length=20), nullable=True),
    )
    op.create_index(
        "ix_evaluation_criterion_evaluation_id", "evaluation_criterion", ["evaluation_id"]
    )

    # 표준 카탈로그 시드
    op.bulk_insert(
        option,
        [dict(row, deleted=False) for row in standard_treatment_options()],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_evaluation_criterion_evaluation_id", table_name="evaluation_criterion")
    op.drop_table("evaluation_criterion")
    op.drop_index("ix_evaluation_treatment_id", table_name="evaluation")
    op.drop_table("evaluation")
    op.drop_index("ix_treatment_name", table_name="treatment")
    op.drop_table("treatment")
    op.drop_index("ix_treatment_option_heat_diameter", table_name="treatment_option")
    op.drop_table("treatment_option")
