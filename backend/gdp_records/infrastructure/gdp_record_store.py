"""GDP Record Store — SQLAlchemy implementation of GdpRecordRepository.

Invariants:
    - Every write is validated through schemas.gdp_record before touching the session
    - (country, year) uniqueness is enforced by the database constraint only;
      only a violation of uq_gdp_records_country_year becomes RecordConflictError
    - Malformed ids behave exactly like unknown ids (RecordNotFoundError)
    - Any other SQLAlchemy failure becomes StoreError; the session is rolled back first

Design Decisions:
    - One store per request session (constructed by the api dependency)
    - Country filter is a literal, case-insensitive substring (LIKE with autoescape)
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Mapping, Sequence
from uuid import UUID

from pydantic import ValidationError
from sqlalchemy import distinct, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gdp_records.core.domain_types import SortOrder
from gdp_records.core.errors import (
    RecordConflictError, RecordNotFoundError, RecordValidationError, StoreError,
)
from gdp_records.core.repository_protocols import RecordQuery, RecordSummary
from gdp_records.models.gdp_record import GdpRecord
from gdp_records.schemas.gdp_record import (
    GdpRecordCreate, GdpRecordUpdate, describe_validation_error,
)

logger = logging.getLogger(__name__)


# Postgres names the constraint; SQLite lists its columns
_COUNTRY_YEAR_MARKERS = (
    "uq_gdp_records_country_year",
    "gdp_records.country, gdp_records.year",
)


def _is_country_year_violation(exc: IntegrityError) -> bool:
    text = str(exc.orig)
    return any(marker in text for marker in _COUNTRY_YEAR_MARKERS)


class SqlGdpRecordStore:
    """Persists GdpRecord rows through an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    # ─── Reads ───────────────────────────────────────────────────

    async def list_records(self, query: RecordQuery) -> Sequence[GdpRecord]:
        stmt = select(GdpRecord)
        if query.country and query.country.strip():
            term = query.country.strip().lower()
            stmt = stmt.where(
                func.lower(GdpRecord.country).contains(term, autoescape=True),
            )
        if query.year is not None:
            stmt = stmt.where(GdpRecord.year == query.year)
        if query.region is not None:
            stmt = stmt.where(GdpRecord.region == query.region.value)

        column = getattr(GdpRecord, query.sort_by.attribute)
        if query.order == SortOrder.DESC:
            stmt = stmt.order_by(column.desc(), GdpRecord.id.desc())
        else:
            stmt = stmt.order_by(column.asc(), GdpRecord.id.asc())

        async with self._store_errors("list"):
            result = await self._db.execute(stmt)
            return result.scalars().all()

    async def get_by_id(self, record_id: str) -> GdpRecord:
        return await self._get_or_raise(record_id)

    async def aggregate(self) -> RecordSummary:
        stmt = select(
            func.count(GdpRecord.id),
            func.count(distinct(GdpRecord.country)),
            func.avg(GdpRecord.gdp_in_usd),
        )
        async with self._store_errors("aggregate"):
            total, countries, average = (await self._db.execute(stmt)).one()
        return RecordSummary(
            total_records=total or 0,
            total_countries=countries or 0,
            average_gdp=float(average) if average is not None else 0.0,
        )

    # ─── Writes ──────────────────────────────────────────────────

    async def create(self, payload: Mapping[str, Any]) -> GdpRecord:
        try:
            data = GdpRecordCreate.model_validate(payload)
        except ValidationError as e:
            raise RecordValidationError(describe_validation_error(e))

        record = GdpRecord(
            country=data.country,
            year=data.year,
            gdp_in_usd=data.gdp_in_usd,
            gdp_per_capita=data.gdp_per_capita,
            growth_rate=data.growth_rate,
            region=data.region.value,
        )
        self._db.add(record)
        await self._commit(data.country, data.year, "create")
        await self._db.refresh(record)
        logger.info(
            f"Created GDP record {record.country} {record.year}",
            extra={"record_id": str(record.id)},
        )
        return record

    async def update(
        self, record_id: str, payload: Mapping[str, Any],
    ) -> GdpRecord:
        record = await self._get_or_raise(record_id)
        try:
            changes = GdpRecordUpdate.model_validate(payload).changes()
        except ValidationError as e:
            raise RecordValidationError(describe_validation_error(e))
        if not changes:
            return record

        for attr, value in changes.items():
            setattr(record, attr, value)
        await self._commit(record.country, record.year, "update")
        await self._db.refresh(record)
        logger.info(
            f"Updated GDP record fields {sorted(changes)}",
            extra={"record_id": record_id},
        )
        return record

    async def delete(self, record_id: str) -> GdpRecord:
        record = await self._get_or_raise(record_id)
        async with self._store_errors("delete"):
            await self._db.delete(record)
            await self._db.commit()
        logger.info("Deleted GDP record", extra={"record_id": record_id})
        return record

    # ─── Helpers ─────────────────────────────────────────────────

    async def _get_or_raise(self, record_id: str) -> GdpRecord:
        try:
            key = UUID(str(record_id))
        except ValueError:
            raise RecordNotFoundError(str(record_id))
        async with self._store_errors("get"):
            record = await self._db.get(GdpRecord, key)
        if record is None:
            raise RecordNotFoundError(str(record_id))
        return record

    async def _commit(self, country: str, year: int, operation: str) -> None:
        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            if _is_country_year_violation(e):
                logger.warning(
                    "Duplicate (country, year) rejected",
                    extra={"country": country, "year": year, "operation": operation},
                )
                raise RecordConflictError(country, year)
            logger.error(f"DB integrity error on {operation}: {e}")
            raise StoreError(str(e), operation)
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(f"DB error on {operation}: {e}")
            raise StoreError(str(e), operation)

    @asynccontextmanager
    async def _store_errors(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(f"DB error on {operation}: {e}")
            raise StoreError(str(e), operation)
