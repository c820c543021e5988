"""GdpRecord ORM — one GDP observation per (country, year).

Invariants:
    - id is a UUID primary key (client-side default)
    - (country, year) is unique: uq_gdp_records_country_year
    - Clock-independent ranges mirrored as CHECK constraints; the year upper
      bound moves with the calendar and lives in the schema layer only
    - created_at/updated_at are set by the store, never by callers
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint, DateTime, Float, Integer, String, Text, UniqueConstraint, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from gdp_records.core.domain_types import MIN_YEAR
from gdp_records.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GdpRecord(Base):
    """A country's GDP figures for a single year."""
    __tablename__ = "gdp_records"
    __table_args__ = (
        UniqueConstraint("country", "year", name="uq_gdp_records_country_year"),
        CheckConstraint(f"year >= {MIN_YEAR}", name="ck_gdp_records_year_min"),
        CheckConstraint("gdp_in_usd >= 0", name="ck_gdp_records_gdp_non_negative"),
        CheckConstraint(
            "gdp_per_capita >= 0", name="ck_gdp_records_per_capita_non_negative",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    country: Mapped[str] = mapped_column(
        Text, nullable=False, index=True,
    )
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    gdp_in_usd: Mapped[float] = mapped_column(Float, nullable=False)
    gdp_per_capita: Mapped[float] = mapped_column(Float, nullable=False)
    growth_rate: Mapped[float] = mapped_column(
        Float, nullable=False, default=0.0,
    )
    region: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )

    def __repr__(self) -> str:
        return f"<GdpRecord {self.country!r} {self.year}>"
