"""GDP records table with (country, year) uniqueness.

Revision ID: 001_gdp_records
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_gdp_records"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "gdp_records",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("country", sa.Text, nullable=False),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("gdp_in_usd", sa.Float, nullable=False),
        sa.Column("gdp_per_capita", sa.Float, nullable=False),
        sa.Column("growth_rate", sa.Float, nullable=False, server_default="0"),
        sa.Column("region", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("country", "year", name="uq_gdp_records_country_year"),
        sa.CheckConstraint("year >= 1960", name="ck_gdp_records_year_min"),
        sa.CheckConstraint("gdp_in_usd >= 0", name="ck_gdp_records_gdp_non_negative"),
        sa.CheckConstraint("gdp_per_capita >= 0", name="ck_gdp_records_per_capita_non_negative"),
    )
    op.create_index("ix_gdp_records_country", "gdp_records", ["country"])
    op.create_index("ix_gdp_records_region", "gdp_records", ["region"])


def downgrade() -> None:
    op.drop_index("ix_gdp_records_region", table_name="gdp_records")
    op.drop_index("ix_gdp_records_country", table_name="gdp_records")
    op.drop_table("gdp_records")
