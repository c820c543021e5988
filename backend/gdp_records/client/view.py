"""View Boundary — what the controller renders to, and the controls it reads from.

Invariants:
    - The controller only talks to a GdpView; no UI toolkit types cross this boundary
    - Any control left as None is simply skipped (reads as blank, writes are dropped)
    - RecordRow is display-ready: ids are strings, region is its label
"""

from dataclasses import dataclass, field
from typing import Protocol, Sequence

from gdp_records.core.record_views import DisplayStats
from gdp_records.schemas.gdp_record import GdpRecordResponse

# Form field names, matching the API's payload keys
FORM_FIELDS = ("country", "region", "year", "gdpInUsd", "gdpPerCapita", "growthRate")


@dataclass(frozen=True)
class RecordRow:
    id: str
    country: str
    region: str
    year: int
    gdp_in_usd: float
    gdp_per_capita: float
    growth_rate: float


def to_row(record: GdpRecordResponse) -> RecordRow:
    return RecordRow(
        id=str(record.id),
        country=record.country,
        region=record.region.value,
        year=record.year,
        gdp_in_usd=record.gdp_in_usd,
        gdp_per_capita=record.gdp_per_capita,
        growth_rate=record.growth_rate,
    )


def form_values(record: GdpRecordResponse) -> dict[str, str]:
    """Record → form field strings, keyed like FORM_FIELDS."""
    return {
        "country": record.country,
        "region": record.region.value,
        "year": str(record.year),
        "gdpInUsd": _number(record.gdp_in_usd),
        "gdpPerCapita": _number(record.gdp_per_capita),
        "growthRate": _number(record.growth_rate),
    }


def _number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


@dataclass
class InputControl:
    """A text-valued UI control (input, select)."""
    value: str = ""


@dataclass
class Controls:
    """References to the UI controls the controller reads and writes."""
    search_country: InputControl | None = None
    filter_region: InputControl | None = None
    filter_year: InputControl | None = None
    form: dict[str, InputControl] | None = field(default=None)

    @classmethod
    def full(cls) -> "Controls":
        """Every control present, all blank."""
        return cls(
            search_country=InputControl(),
            filter_region=InputControl(),
            filter_year=InputControl(),
            form={name: InputControl() for name in FORM_FIELDS},
        )


class GdpView(Protocol):
    """Render boundary implemented by a concrete UI."""
    def render_table(self, rows: Sequence[RecordRow]) -> None: ...
    def render_statistics(self, stats: DisplayStats) -> None: ...
    def show_loading(self, flag: bool) -> None: ...
    def open_form(self, record: GdpRecordResponse | None) -> None: ...
    def close_form(self) -> None: ...
    def show_notification(self, notification) -> None: ...
    def dismiss_notification(self, notification) -> None: ...


class NullView:
    """A GdpView that renders nothing; subclass and override what a UI supports."""

    def render_table(self, rows: Sequence[RecordRow]) -> None:
        pass

    def render_statistics(self, stats: DisplayStats) -> None:
        pass

    def show_loading(self, flag: bool) -> None:
        pass

    def open_form(self, record: GdpRecordResponse | None) -> None:
        pass

    def close_form(self) -> None:
        pass

    def show_notification(self, notification) -> None:
        pass

    def dismiss_notification(self, notification) -> None:
        pass
