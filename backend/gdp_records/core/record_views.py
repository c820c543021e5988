"""Record Views — pure client-side filtering and display statistics over a cached list.

Invariants:
    - Inputs are never mutated; filters return new lists preserving relative order
    - Empty/blank criteria match everything
    - Country match: case-insensitive substring; region: exact; year: exact string match

Design Decisions:
    - Works on any object exposing country/region/year attributes (RecordLike),
      so the client can pass schema models and tests can pass plain dataclasses
"""

from dataclasses import dataclass
from typing import Iterable, Protocol, Sequence, TypeVar


class RecordLike(Protocol):
    """Structural contract for what filtering and stats need from a record."""
    country: str
    region: str
    year: int


R = TypeVar("R", bound=RecordLike)


@dataclass(frozen=True)
class RecordFilter:
    """Filter criteria as typed into UI controls (raw strings)."""
    country: str = ""
    region: str = ""
    year: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.country.strip() or self.region or self.year)


@dataclass(frozen=True)
class DisplayStats:
    total: int = 0
    years: int = 0
    regions: int = 0


def _region_value(record: RecordLike) -> str:
    region = record.region
    return getattr(region, "value", region) or ""


def filter_records(records: Sequence[R], criteria: RecordFilter) -> list[R]:
    """Apply the conjunction of non-blank criteria."""
    country = criteria.country.strip().lower()
    filtered = list(records)
    if country:
        filtered = [r for r in filtered if country in (r.country or "").lower()]
    if criteria.region:
        filtered = [r for r in filtered if _region_value(r) == criteria.region]
    if criteria.year:
        filtered = [r for r in filtered if str(r.year) == str(criteria.year)]
    return filtered


def compute_display_stats(records: Iterable[RecordLike]) -> DisplayStats:
    """Total count, distinct years, distinct regions. Pure, no IO."""
    records = list(records)
    return DisplayStats(
        total=len(records),
        years=len({r.year for r in records}),
        regions=len({_region_value(r) for r in records}),
    )
