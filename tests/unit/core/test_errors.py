# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import json

import pytest

from reso_client.core._error_codes import (
    HTTP_401,
    NOT_FOUND,
    ODATA_ERROR,
    SERVER_ERROR,
    UNAUTHORIZED,
    http_status_to_subcode,
)
from reso_client.core.errors import (
    ConfigError,
    ForbiddenError,
    HttpError,
    NetworkError,
    NotFoundError,
    ODataError,
    ParseError,
    RateLimitedError,
    ResoError,
    ServerError,
    UnauthorizedError,
    http_error_from_status,
    parse_error_body,
)


def _envelope(message, code=None):
    error = {"message": message}
    if code is not None:
        error["code"] = code
    return json.dumps({"error": error})


# --- classification by status ---


@pytest.mark.parametrize(
    "status,cls",
    [
        (401, UnauthorizedError),
        (403, ForbiddenError),
        (404, NotFoundError),
        (429, RateLimitedError),
        (500, ServerError),
        (502, ServerError),
        (599, ServerError),
        (400, ODataError),
        (405, ODataError),
        (418, ODataError),
        (600, ODataError),
    ],
)
def test_status_maps_to_error_class(status, cls):
    err = http_error_from_status(status, "")
    assert type(err) is cls
    assert err.status_code == status
    assert err.subcode == http_status_to_subcode(status)
    assert err.source == "server"


def test_unauthorized_with_envelope():
    err = http_error_from_status(401, _envelope("Y", "X"))
    assert isinstance(err, UnauthorizedError)
    assert err.message == "Y (code: X)"
    assert err.code == UNAUTHORIZED
    assert err.subcode == HTTP_401
    assert err.details["service_error_code"] == "X"
    assert "body_excerpt" not in err.details


def test_envelope_without_code_uses_bare_message():
    err = http_error_from_status(404, _envelope("Resource not found"))
    assert err.message == "Resource not found"
    assert err.code == NOT_FOUND
    assert "service_error_code" not in err.details


def test_raw_body_passed_through():
    err = http_error_from_status(400, "Bad Request")
    assert isinstance(err, ODataError)
    assert err.message == "Bad Request"
    assert err.code == ODATA_ERROR
    assert err.details["body_excerpt"] == "Bad Request"


def test_long_raw_body_truncated():
    body = "x" * 600
    err = http_error_from_status(500, body)
    assert isinstance(err, ServerError)
    assert err.code == SERVER_ERROR
    assert err.message == "x" * 500 + "... (truncated)"


def test_body_of_exactly_500_chars_not_truncated():
    body = "y" * 500
    assert parse_error_body(body) == body


def test_empty_body_yields_empty_message():
    err = http_error_from_status(503, "")
    assert err.message == ""
    assert "body_excerpt" not in err.details


def test_unknown_status_subcode_is_generic():
    err = http_error_from_status(418, "teapot")
    assert err.subcode == "http_418"


@pytest.mark.parametrize(
    "body",
    [
        '{"error": "just a string"}',
        '{"error": {"code": "X"}}',
        '{"error": {"message": 42}}',
        '{"error": {"message": "m", "code": 7}}',
        '["error"]',
        "not json {",
    ],
)
def test_malformed_envelopes_fall_back_to_raw_body(body):
    assert parse_error_body(body) == body


def test_all_http_errors_share_base():
    for status in (401, 403, 404, 429, 500, 400):
        err = http_error_from_status(status, "")
        assert isinstance(err, HttpError)
        assert isinstance(err, ResoError)
    # ODataError is a sibling, not a parent, of the status-specific classes
    assert not isinstance(http_error_from_status(401, ""), ODataError)


# --- non-HTTP errors ---


def test_non_http_errors_have_no_status():
    for err in (ConfigError("c"), NetworkError("n"), ParseError("p")):
        assert err.status_code is None
        assert not isinstance(err, HttpError)


def test_network_error_source():
    assert NetworkError("connection refused").source == "network"


def test_to_dict_contains_fields():
    err = http_error_from_status(429, _envelope("Slow down", "Throttled"))
    d = err.to_dict()
    assert d["code"] == "rate_limited"
    assert d["subcode"] == "http_429"
    assert d["status_code"] == 429
    assert d["message"] == "Slow down (code: Throttled)"
    assert d["source"] == "server"
    assert "timestamp" in d


def test_str_is_message():
    assert str(ConfigError("base_url is required.")) == "base_url is required."


def test_deeply_nested_body_classified_as_raw_text():
    body = "[" * 100000 + "]" * 100000
    err = http_error_from_status(400, body)
    assert isinstance(err, ODataError)
    assert err.message == body[:500] + "... (truncated)"
    assert err.details["body_excerpt"] == err.message
