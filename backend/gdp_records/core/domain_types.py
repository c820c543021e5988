"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - RecordId wraps UUID — never use bare UUID in domain logic
    - Year domain is [MIN_YEAR, current_year()]; the upper bound moves with the clock
    - All closed sets encoded as Enums — no raw string matching
"""

from datetime import datetime, timezone
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

RecordId = NewType("RecordId", UUID)


# ─── Value Constraints ───────────────────────────────────────────

MIN_YEAR = 1960


def current_year() -> int:
    """Upper bound of the year domain, read at validation time."""
    return datetime.now(timezone.utc).year


# ─── Enums ───────────────────────────────────────────────────────

class Region(str, Enum):
    """The closed set of world regions a record can belong to."""
    ASIA = "Asia"
    EUROPE = "Europe"
    NORTH_AMERICA = "North America"
    SOUTH_AMERICA = "South America"
    AFRICA = "Africa"
    OCEANIA = "Oceania"


class SortField(str, Enum):
    """Sortable record fields. Values are the public (camelCase) names."""
    COUNTRY = "country"
    YEAR = "year"
    GDP_IN_USD = "gdpInUsd"
    GDP_PER_CAPITA = "gdpPerCapita"
    GROWTH_RATE = "growthRate"
    REGION = "region"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"

    @property
    def attribute(self) -> str:
        """ORM attribute backing this field."""
        return _SORT_ATTRIBUTES[self]


_SORT_ATTRIBUTES = {
    SortField.COUNTRY: "country",
    SortField.YEAR: "year",
    SortField.GDP_IN_USD: "gdp_in_usd",
    SortField.GDP_PER_CAPITA: "gdp_per_capita",
    SortField.GROWTH_RATE: "growth_rate",
    SortField.REGION: "region",
    SortField.CREATED_AT: "created_at",
    SortField.UPDATED_AT: "updated_at",
}


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"
