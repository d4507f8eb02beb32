# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

# Error codes (one per error class)
CONFIG_ERROR = "config_error"
NETWORK_ERROR = "network_error"
UNAUTHORIZED = "unauthorized"
FORBIDDEN = "forbidden"
NOT_FOUND = "not_found"
RATE_LIMITED = "rate_limited"
SERVER_ERROR = "server_error"
ODATA_ERROR = "odata_error"
PARSE_ERROR = "parse_error"
INVALID_QUERY = "invalid_query"

# HTTP subcode constants
HTTP_400 = "http_400"
HTTP_401 = "http_401"
HTTP_403 = "http_403"
HTTP_404 = "http_404"
HTTP_429 = "http_429"
HTTP_500 = "http_500"
HTTP_502 = "http_502"
HTTP_503 = "http_503"
HTTP_504 = "http_504"

_HTTP_STATUS_TO_SUBCODE = {
    400: HTTP_400,
    401: HTTP_401,
    403: HTTP_403,
    404: HTTP_404,
    429: HTTP_429,
    500: HTTP_500,
    502: HTTP_502,
    503: HTTP_503,
    504: HTTP_504,
}

# Invalid query subcodes
QUERY_EMPTY_RESOURCE = "query_empty_resource"
QUERY_KEY_CONFLICT = "query_key_conflict"
QUERY_REPLICATION_TOP_EXCEEDED = "query_replication_top_exceeded"
QUERY_INVALID_FIELD = "query_invalid_field"

# Parse subcodes
PARSE_JSON = "parse_json"
PARSE_COUNT = "parse_count"
PARSE_TEXT = "parse_text"
PARSE_METADATA = "parse_metadata"


def http_status_to_subcode(status_code: int) -> str:
    """Return the ``http_<status>`` subcode for a status code."""
    return _HTTP_STATUS_TO_SUBCODE.get(status_code, f"http_{status_code}")
