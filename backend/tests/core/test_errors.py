"""Error hierarchy — status codes, codes and envelope shape per error type."""

from gdp_records.core.errors import (
    ErrorCategory, GdpRecordsError, RecordConflictError, RecordNotFoundError,
    RecordValidationError, StoreError,
)


def test_validation_error_is_400_with_detail():
    exc = RecordValidationError("year: too small")
    assert exc.http_status == 400
    assert exc.to_response() == {
        "success": False,
        "message": "Invalid GDP record",
        "error": "year: too small",
        "code": "VALIDATION_ERROR",
    }


def test_conflict_error_has_specific_message():
    exc = RecordConflictError("Brazil", 2020)
    assert exc.http_status == 400
    assert exc.category is ErrorCategory.CONFLICT
    assert exc.to_response()["message"] == (
        "GDP record for this country and year already exists"
    )


def test_not_found_is_404_and_records_id():
    exc = RecordNotFoundError("abc")
    assert exc.http_status == 404
    assert exc.context.record_id == "abc"
    assert exc.to_response() == {
        "success": False, "message": "GDP record not found", "code": "RECORD_NOT_FOUND",
    }


def test_store_error_hides_cause_from_response():
    exc = StoreError("connection refused on 10.0.0.1", "list")
    body = exc.to_response()
    assert exc.http_status == 500
    assert "10.0.0.1" not in str(body)
    assert exc.cause == "connection refused on 10.0.0.1"


def test_with_message_replaces_summary_only():
    exc = RecordValidationError("region: bad").with_message("Error creating GDP record")
    assert isinstance(exc, GdpRecordsError)
    assert str(exc) == "Error creating GDP record"
    assert exc.detail == "region: bad"
    assert exc.code == "VALIDATION_ERROR"
