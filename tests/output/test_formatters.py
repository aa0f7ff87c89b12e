"""Tests for response and failure formatting."""

from __future__ import annotations

import json

from svcclient.domain.envelope import ServiceResponse
from svcclient.errors import (
    CancelledCallError,
    HttpFailureError,
    ServiceErrorResponse,
    TransportUnreachableError,
)
from svcclient.output.formatters import format_failure, format_response

ORDERS = {"Entities": [{"Id": 10248}], "TotalCount": 1}


class TestFormatResponse:
    def test_text(self) -> None:
        output = format_response(ServiceResponse.model_validate(ORDERS))
        lines = output.splitlines()
        assert lines[0] == "OK"
        assert '  Entities: [{"Id":10248}]' in lines
        assert "  TotalCount: 1" in lines
        assert "Error" not in output

    def test_empty_envelope(self) -> None:
        assert format_response(ServiceResponse()) == "OK"

    def test_json(self) -> None:
        output = format_response(ServiceResponse.model_validate(ORDERS), json_output=True)
        assert json.loads(output) == {"Error": None, **ORDERS}


class TestFormatFailure:
    def test_text(self) -> None:
        error = HttpFailureError("HTTP 500: Internal Server Error!", status=500)
        assert format_failure(error) == "ERROR: http_failure — HTTP 500: Internal Server Error!"

    def test_json(self) -> None:
        error = TransportUnreachableError("ConnectError: refused")
        payload = json.loads(format_failure(error, json_output=True))
        assert payload == {
            "ok": False,
            "kind": "transport_unreachable",
            "message": "ConnectError: refused",
            "status": None,
        }

    def test_json_includes_envelope(self) -> None:
        envelope = ServiceResponse.model_validate({"Error": {"Code": "Locked"}})
        error = ServiceErrorResponse("Error: Locked None None!", status=200, response=envelope)
        payload = json.loads(format_failure(error, json_output=True))
        assert payload["kind"] == "service_error"
        assert payload["response"]["Error"]["Code"] == "Locked"

    def test_cancelled(self) -> None:
        assert format_failure(CancelledCallError("Request aborted!")).startswith(
            "ERROR: cancelled"
        )
