"""GDP Record Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - country: stripped, non-empty
    - year: MIN_YEAR..current_year() inclusive, evaluated per validation
    - gdpInUsd, gdpPerCapita: finite, >= 0; growthRate: finite, default 0
    - region: one of core.domain_types.Region
    - GdpRecordUpdate: any subset of fields, same constraints, explicit null rejected
    - Public field names are camelCase; snake_case accepted on input; unknown keys ignored

Design Decisions:
    - field_validator for side-effect-free transforms (strip) — keeps models pure
    - Numeric strings are coerced (lax mode): form payloads arrive as flat strings
"""

from datetime import datetime
from uuid import UUID

from pydantic import (
    BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator,
)
from pydantic.alias_generators import to_camel

from gdp_records.core.domain_types import MIN_YEAR, Region, current_year


_CAMEL_CONFIG = ConfigDict(
    alias_generator=to_camel, populate_by_name=True, extra="ignore",
)


def _clean_country(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError("country cannot be empty or whitespace")
    return value


def _check_year(value: int | None) -> int | None:
    if value is None:
        return None
    upper = current_year()
    if not MIN_YEAR <= value <= upper:
        raise ValueError(f"year must be between {MIN_YEAR} and {upper}")
    return value


class GdpRecordCreate(BaseModel):
    """Full record input — every field except growthRate is required."""
    model_config = _CAMEL_CONFIG

    country: str
    year: int
    gdp_in_usd: float = Field(ge=0, allow_inf_nan=False)
    gdp_per_capita: float = Field(ge=0, allow_inf_nan=False)
    growth_rate: float = Field(0.0, allow_inf_nan=False)
    region: Region

    @field_validator("country")
    @classmethod
    def strip_country(cls, v: str) -> str:
        return _clean_country(v)

    @field_validator("year")
    @classmethod
    def year_in_range(cls, v: int) -> int:
        return _check_year(v)


class GdpRecordUpdate(BaseModel):
    """Partial record input — only fields present in the payload are applied."""
    model_config = _CAMEL_CONFIG

    country: str | None = None
    year: int | None = None
    gdp_in_usd: float | None = Field(None, ge=0, allow_inf_nan=False)
    gdp_per_capita: float | None = Field(None, ge=0, allow_inf_nan=False)
    growth_rate: float | None = Field(None, allow_inf_nan=False)
    region: Region | None = None

    @field_validator("country")
    @classmethod
    def strip_country(cls, v: str | None) -> str | None:
        return _clean_country(v)

    @field_validator("year")
    @classmethod
    def year_in_range(cls, v: int | None) -> int | None:
        return _check_year(v)

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        nulls = sorted(
            name for name in self.model_fields_set if getattr(self, name) is None
        )
        if nulls:
            raise ValueError(f"fields cannot be null: {', '.join(nulls)}")
        return self

    def changes(self) -> dict:
        """Attribute-name → value for every field present in the payload."""
        return self.model_dump(mode="json", exclude_unset=True)


class GdpRecordResponse(BaseModel):
    """Record as returned by the API (and parsed back by the client)."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )

    id: UUID
    country: str
    year: int
    gdp_in_usd: float
    gdp_per_capita: float
    growth_rate: float = 0.0
    region: Region
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class RecordSummaryResponse(BaseModel):
    """Aggregate statistics over all stored records."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )

    total_records: int
    total_countries: int
    average_gdp: float

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


def describe_validation_error(exc: ValidationError) -> str:
    """Flatten pydantic errors into 'field: message; field: message'."""
    parts = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"]) or "record"
        parts.append(f"{field}: {error['msg']}")
    return "; ".join(parts)
