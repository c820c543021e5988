"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Record persistence accessed through the GdpRecordRepository Protocol
    - Failures are raised as core.errors types, never returned

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Payloads are raw mappings; the repository owns validation so every
      writer goes through the same constraints
"""

from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Sequence

from gdp_records.core.domain_types import Region, SortField, SortOrder


@dataclass(frozen=True)
class RecordQuery:
    """Conjunction of optional predicates plus a single sort key."""
    country: str | None = None
    year: int | None = None
    region: Region | None = None
    sort_by: SortField = SortField.YEAR
    order: SortOrder = SortOrder.DESC


@dataclass(frozen=True)
class RecordSummary:
    total_records: int
    total_countries: int
    average_gdp: float


class GdpRecordLike(Protocol):
    """Structural contract for persisted records handed to the API layer."""
    country: str
    year: int
    gdp_in_usd: float
    gdp_per_capita: float
    growth_rate: float
    region: str


class GdpRecordRepository(Protocol):
    """Contract for GDP record persistence — implemented by shell."""
    async def list_records(self, query: RecordQuery) -> Sequence[GdpRecordLike]: ...
    async def get_by_id(self, record_id: str) -> GdpRecordLike: ...
    async def create(self, payload: Mapping[str, Any]) -> GdpRecordLike: ...
    async def update(
        self, record_id: str, payload: Mapping[str, Any],
    ) -> GdpRecordLike: ...
    async def delete(self, record_id: str) -> GdpRecordLike: ...
    async def aggregate(self) -> RecordSummary: ...
