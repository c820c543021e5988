"""GDP API Client — httpx wrapper that turns envelopes into tagged results.

Invariants:
    - Never raises for HTTP/transport failures: every call returns Ok | Err
    - Ok.data is parsed into schema models; a body that does not match is Err(PROTOCOL)
    - Only the envelope shape is accepted (bare arrays are a protocol error)
"""

import logging
from typing import Any, Mapping

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from gdp_records.core.envelope import Err, ErrorKind, Ok, Result, parse_envelope
from gdp_records.schemas.gdp_record import GdpRecordResponse, RecordSummaryResponse

logger = logging.getLogger(__name__)

_RECORD_LIST = TypeAdapter(list[GdpRecordResponse])


class GdpApiClient:
    """Async client for the /api/gdp resource."""

    def __init__(self, http: httpx.AsyncClient, base_path: str = "/api/gdp"):
        self._http = http
        self._base_path = base_path.rstrip("/")

    async def list_records(self) -> Result:
        result = await self._request("GET", self._base_path)
        return _parse(result, _RECORD_LIST.validate_python)

    async def get_record(self, record_id: str) -> Result:
        result = await self._request("GET", f"{self._base_path}/{record_id}")
        return _parse(result, GdpRecordResponse.model_validate)

    async def create_record(self, payload: Mapping[str, Any]) -> Result:
        result = await self._request("POST", self._base_path, json=dict(payload))
        return _parse(result, GdpRecordResponse.model_validate)

    async def update_record(
        self, record_id: str, payload: Mapping[str, Any],
    ) -> Result:
        result = await self._request(
            "PUT", f"{self._base_path}/{record_id}", json=dict(payload),
        )
        return _parse(result, GdpRecordResponse.model_validate)

    async def delete_record(self, record_id: str) -> Result:
        result = await self._request("DELETE", f"{self._base_path}/{record_id}")
        return _parse(result, GdpRecordResponse.model_validate)

    async def summary(self) -> Result:
        result = await self._request("GET", f"{self._base_path}/stats/summary")
        return _parse(result, RecordSummaryResponse.model_validate)

    async def _request(
        self, method: str, url: str, json: dict | None = None,
    ) -> Result:
        try:
            response = await self._http.request(method, url, json=json)
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {e}")
            return Err(ErrorKind.TRANSPORT, "Could not reach the server", str(e))
        try:
            body = response.json()
        except ValueError:
            body = None
        return parse_envelope(response.status_code, body)


def _parse(result: Result, validate) -> Result:
    if isinstance(result, Err):
        return result
    try:
        data: BaseModel | list = validate(result.data)
    except ValidationError as e:
        logger.error(f"Response data did not match the record schema: {e}")
        return Err(ErrorKind.PROTOCOL, "Unexpected response from server", str(e))
    return Ok(data=data, message=result.message, count=result.count)
