"""Response Envelope — the uniform {success, data, count, message, error} wrapper.

Invariants:
    - Every API response body is a dict with a boolean `success`
    - Success envelopes carry `data` (and `count` for lists); error envelopes never carry `data`
    - Optional keys are omitted, never sent as null
    - parse_envelope() never raises: malformed bodies become Err(PROTOCOL)

Design Decisions:
    - Tagged result (Ok | Err) on the consuming side instead of inspecting dicts
    - Err.kind derived from `code` first, HTTP status second
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


def ok_envelope(
    data: Any, message: str | None = None, count: int | None = None,
) -> dict:
    """Build a success envelope."""
    body: dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    if count is not None:
        body["count"] = count
    body["data"] = data
    return body


def error_envelope(
    message: str, error: str | None = None, code: str | None = None,
) -> dict:
    """Build an error envelope."""
    body: dict[str, Any] = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    if code is not None:
        body["code"] = code
    return body


# ─── Tagged Result ──────────────────────────────────────────────

class ErrorKind(str, Enum):
    """Why a request did not succeed, as seen by a consumer."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    STORE = "store"
    TRANSPORT = "transport"
    PROTOCOL = "protocol"


@dataclass(frozen=True)
class Ok(Generic[T]):
    data: T
    message: str | None = None
    count: int | None = None


@dataclass(frozen=True)
class Err:
    kind: ErrorKind
    message: str
    error: str | None = None


Result = Union[Ok[T], Err]

_KIND_BY_CODE = {
    "VALIDATION_ERROR": ErrorKind.VALIDATION,
    "CONFLICT": ErrorKind.CONFLICT,
    "RECORD_NOT_FOUND": ErrorKind.NOT_FOUND,
    "STORE_ERROR": ErrorKind.STORE,
    "INTERNAL_ERROR": ErrorKind.STORE,
}


def _kind_for(code: str | None, status_code: int) -> ErrorKind:
    if code in _KIND_BY_CODE:
        return _KIND_BY_CODE[code]
    if status_code == 404:
        return ErrorKind.NOT_FOUND
    if 400 <= status_code < 500:
        return ErrorKind.VALIDATION
    return ErrorKind.STORE


def parse_envelope(status_code: int, body: Any) -> Result:
    """Turn an HTTP status and decoded JSON body into Ok or Err."""
    if not isinstance(body, dict) or not isinstance(body.get("success"), bool):
        return Err(
            ErrorKind.PROTOCOL,
            "Unexpected response from server",
            f"HTTP {status_code}: body is not an envelope",
        )
    if body["success"]:
        return Ok(
            data=body.get("data"),
            message=body.get("message"),
            count=body.get("count"),
        )
    return Err(
        kind=_kind_for(body.get("code"), status_code),
        message=body.get("message") or f"Request failed (HTTP {status_code})",
        error=body.get("error"),
    )
