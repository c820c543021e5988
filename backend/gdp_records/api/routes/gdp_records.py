"""GDP Records Routes — list, fetch, create, update, delete and summarize records.

Invariants:
    - Every response is an envelope: {success, data|count, message?, error?, code?}
    - Handlers only parse parameters, call the store once, and shape the envelope
    - /stats/summary is registered before /{record_id} so it is never captured as an id
    - Blank list filters are treated as absent; non-blank invalid ones are a 400
    - Validation and store errors carry the failing operation as their message;
      not-found and conflict keep their own messages

Design Decisions:
    - Bodies taken as raw JSON objects: the store owns record validation, so
      schema errors surface as "Error creating/updating GDP record"
"""

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Any, Callable, Iterator, TypeVar

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from gdp_records.api.dependencies import get_record_store
from gdp_records.core.domain_types import Region, SortField, SortOrder
from gdp_records.core.envelope import ok_envelope
from gdp_records.core.errors import RecordValidationError, StoreError
from gdp_records.core.repository_protocols import GdpRecordRepository, RecordQuery
from gdp_records.schemas.gdp_record import GdpRecordResponse, RecordSummaryResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/gdp", tags=["gdp-records"])


@contextmanager
def _failure_message(message: str) -> Iterator[None]:
    """Label validation/store failures with the operation that failed."""
    try:
        yield
    except (RecordValidationError, StoreError) as exc:
        raise exc.with_message(message)


def _record_json(record) -> dict:
    return GdpRecordResponse.model_validate(record).to_json()


T = TypeVar("T")


def _query_value(name: str, raw: str | None, parse: Callable[[str], T]) -> T | None:
    """Blank means absent; anything else must parse or the request is a 400."""
    if raw is None or not raw.strip():
        return None
    try:
        return parse(raw.strip())
    except ValueError:
        raise RequestValidationError([{
            "type": "value_error",
            "loc": ("query", name),
            "msg": _expected(parse),
            "input": raw,
        }])


def _expected(parse: Callable) -> str:
    if isinstance(parse, type) and issubclass(parse, Enum):
        options = ", ".join(f"'{m.value}'" for m in parse)
        return f"Input should be one of {options}"
    return "Input should be a valid integer"


def list_query(
    country: str | None = Query(None, description="Case-insensitive substring"),
    year: str | None = Query(None),
    region: str | None = Query(None),
    sort_by: str | None = Query(None, alias="sortBy"),
    order: str | None = Query(None),
) -> RecordQuery:
    """Build a RecordQuery from raw list parameters."""
    return RecordQuery(
        country=_query_value("country", country, str),
        year=_query_value("year", year, int),
        region=_query_value("region", region, Region),
        sort_by=_query_value("sortBy", sort_by, SortField) or SortField.YEAR,
        order=_query_value("order", order, SortOrder) or SortOrder.DESC,
    )


@router.get("")
async def list_records(
    query: RecordQuery = Depends(list_query),
    store: GdpRecordRepository = Depends(get_record_store),
):
    """List records matching every given filter, sorted by one field."""
    with _failure_message("Error fetching GDP records"):
        records = await store.list_records(query)
    return ok_envelope([_record_json(r) for r in records], count=len(records))


@router.get("/stats/summary")
async def summary(store: GdpRecordRepository = Depends(get_record_store)):
    """Record count, distinct countries and mean GDP across all records."""
    with _failure_message("Error fetching statistics"):
        stats = await store.aggregate()
    return ok_envelope(RecordSummaryResponse.model_validate(stats).to_json())


@router.get("/{record_id}")
async def get_record(
    record_id: str, store: GdpRecordRepository = Depends(get_record_store),
):
    with _failure_message("Error fetching GDP record"):
        record = await store.get_by_id(record_id)
    return ok_envelope(_record_json(record))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_record(
    payload: dict[str, Any] = Body(...),
    store: GdpRecordRepository = Depends(get_record_store),
):
    with _failure_message("Error creating GDP record"):
        record = await store.create(payload)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=ok_envelope(
            _record_json(record), message="GDP record created successfully",
        ),
    )


@router.put("/{record_id}")
async def update_record(
    record_id: str,
    payload: dict[str, Any] = Body(...),
    store: GdpRecordRepository = Depends(get_record_store),
):
    """Replace the given fields of a record; omitted fields are kept."""
    with _failure_message("Error updating GDP record"):
        record = await store.update(record_id, payload)
    return ok_envelope(
        _record_json(record), message="GDP record updated successfully",
    )


@router.delete("/{record_id}")
async def delete_record(
    record_id: str, store: GdpRecordRepository = Depends(get_record_store),
):
    with _failure_message("Error deleting GDP record"):
        record = await store.delete(record_id)
    return ok_envelope(
        _record_json(record), message="GDP record deleted successfully",
    )
