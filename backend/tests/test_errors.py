"""Tests for error normalization and JSON envelopes."""

import httpx

from blessing_api.utils.exceptions import (
    UpstreamError,
    bad_request,
    internal_error,
    normalize_error,
)


def _status_error(code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("POST", "https://api.example.com/v1/chat/completions")
    response = httpx.Response(code, request=request)
    return httpx.HTTPStatusError("error", request=request, response=response)


def test_provider_status_code_is_reported():
    assert normalize_error(_status_error(401)) == "Generation failed: API error (status code 401)"
    assert (
        normalize_error(UpstreamError("ignored", status_code=503))
        == "Generation failed: API error (status code 503)"
    )


def test_network_error_uses_description():
    request = httpx.Request("POST", "https://api.example.com")
    error = httpx.ConnectError("connection refused", request=request)
    assert normalize_error(error) == "Generation failed: network error (connection refused)"


def test_plain_exception_uses_own_text():
    assert normalize_error(ValueError("bad json")) == "bad json"
    assert normalize_error(UpstreamError("upstream down")) == "upstream down"


def test_generic_fallback():
    assert normalize_error(RuntimeError()) == "Unknown error"
    assert normalize_error(UpstreamError()) == "Unknown error"


def test_error_envelopes():
    response = bad_request("Invalid scenario type")
    assert response.status_code == 400
    assert response.body == '{"success":false,"error":"Invalid scenario type"}'.encode()

    response = internal_error("down", code="BLESSING_API_ERROR")
    assert response.status_code == 500
    assert b'"code":"BLESSING_API_ERROR"' in response.body
