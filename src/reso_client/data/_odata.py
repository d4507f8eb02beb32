# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Low-level RESO Web API client: authenticated GETs, error mapping and response decoding.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional

import requests

from ..core._auth import _AuthManager
from ..core._error_codes import PARSE_COUNT, PARSE_JSON, PARSE_TEXT
from ..core._http import _HttpClient
from ..core.config import ResoConfig
from ..core.errors import ConfigError, NetworkError, ParseError, http_error_from_status
from ..models.query_builder import Query
from ..models.replication import ReplicationQuery, ReplicationResponse

ACCEPT_JSON = "application/json"
ACCEPT_TEXT = "text/plain"
ACCEPT_XML = "application/xml"

# "next" is preferred; some servers only send "link".
NEXT_LINK_HEADERS = ("next", "link")

_COUNT_RE = re.compile(r"\+?[0-9]+")


class _ODataClient:
    """RESO Web API client: record, count, metadata and replication requests."""

    def __init__(
        self,
        auth: _AuthManager,
        base_url: str,
        config: Optional[ResoConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.auth = auth
        self.base_url = (base_url or "").rstrip("/")
        if not self.base_url:
            raise ConfigError("base_url is required.")
        self.config = config or ResoConfig.from_env()
        self._http = _HttpClient(timeout=self.config.http_timeout, session=session)
        self._logger = logging.getLogger(self.config.logger_name)

    def close(self) -> None:
        self._http.close()

    def _build_url(self, path: str) -> str:
        """
        Join the service root, optional dataset id, and a relative OData path.

        ``https://api.mls.com/odata`` + ``Property?$top=1`` becomes
        ``https://api.mls.com/odata/{dataset_id}/Property?$top=1`` when a dataset id is configured.
        """
        dataset_id = self.config.dataset_id
        if dataset_id:
            return f"{self.base_url}/{dataset_id}/{path}"
        return f"{self.base_url}/{path}"

    def _headers(self, accept: str) -> Dict[str, str]:
        """Build OData request headers with bearer auth."""
        token = self.auth._acquire_token(self.base_url).access_token
        return {
            "Authorization": f"Bearer {token}",
            "Accept": accept,
            "OData-MaxVersion": "4.0",
            "OData-Version": "4.0",
        }

    def _request(self, url: str, accept: str) -> requests.Response:
        """
        Send an authenticated GET and raise a classified error on failure.

        :raises NetworkError: On transport failures (DNS, refused connection, timeout).
        :raises HttpError: A status-specific subclass for any non-2xx response.
        """
        try:
            r = self._http._request("get", url, headers=self._headers(accept))
        except requests.exceptions.RequestException as exc:
            raise NetworkError(str(exc), details={"url": url}) from exc

        if not 200 <= r.status_code < 300:
            body = r.text or ""
            err = http_error_from_status(r.status_code, body)
            self._logger.warning("Request failed with status %s: %s", r.status_code, err.message)
            raise err
        return r

    @staticmethod
    def _parse_json(r: requests.Response) -> Any:
        try:
            return r.json()
        except ValueError as exc:
            raise ParseError(f"Failed to parse JSON: {exc}", subcode=PARSE_JSON) from exc

    @staticmethod
    def _parse_text(r: requests.Response) -> str:
        try:
            return r.text
        except (UnicodeDecodeError, LookupError) as exc:
            raise ParseError(f"Failed to read response: {exc}", subcode=PARSE_TEXT) from exc

    @staticmethod
    def _extract_next_link(r: requests.Response) -> Optional[str]:
        """Read the continuation URL from response headers, ``next`` before ``link``."""
        for name in NEXT_LINK_HEADERS:
            value = r.headers.get(name)
            if value is not None:
                return value
        return None

    @staticmethod
    def _extract_records(payload: Any) -> List[Any]:
        """Return the ``value`` array of an OData collection envelope."""
        if isinstance(payload, dict):
            value = payload.get("value")
            if isinstance(value, list):
                return value
        return []

    # ----------------------------- Queries -------------------------------
    def _execute(self, query: Query) -> Any:
        """Execute a query and return the decoded JSON envelope."""
        url = self._build_url(query.to_odata_string())
        self._logger.info("Executing query: %s", url)
        data = self._parse_json(self._request(url, ACCEPT_JSON))
        self._logger.debug("Query result: %d records", len(self._extract_records(data)))
        return data

    def _execute_by_key(self, query: Query) -> Any:
        """Execute a key access query; the server returns the entity itself, not an envelope."""
        url = self._build_url(query.to_odata_string())
        self._logger.info("Executing key access query: %s", url)
        return self._parse_json(self._request(url, ACCEPT_JSON))

    def _execute_count(self, query: Query) -> int:
        """Execute a ``/$count`` query and parse the plain-text integer body."""
        url = self._build_url(query.to_odata_string())
        self._logger.info("Executing count query: %s", url)
        text = self._parse_text(self._request(url, ACCEPT_TEXT))
        stripped = text.strip()
        if not _COUNT_RE.fullmatch(stripped):
            raise ParseError(
                f"Failed to parse count '{text}': expected a non-negative integer",
                subcode=PARSE_COUNT,
            )
        count = int(stripped)
        self._logger.info("Count result: %d", count)
        return count

    def _fetch_metadata(self) -> str:
        """Fetch the ``$metadata`` EDMX document as text."""
        url = self._build_url("$metadata")
        self._logger.info("Fetching metadata from: %s", url)
        return self._parse_text(self._request(url, ACCEPT_XML))

    # --------------------------- Replication -----------------------------
    def _replication_page(self, r: requests.Response) -> ReplicationResponse:
        # Headers first: the body read below is the one-shot part of the response.
        next_link = self._extract_next_link(r)
        self._logger.debug("Next link from headers: %s", next_link)
        records = self._extract_records(self._parse_json(r))
        self._logger.debug("Retrieved %d records", len(records))
        return ReplicationResponse(records, next_link)

    def _execute_replication(self, query: ReplicationQuery) -> ReplicationResponse:
        url = self._build_url(query.to_odata_string())
        self._logger.info("Executing replication query: %s", url)
        return self._replication_page(self._request(url, ACCEPT_JSON))

    def _execute_next_link(self, next_link: str) -> ReplicationResponse:
        """Fetch the page addressed by an opaque next link, used verbatim."""
        self._logger.info("Executing next link: %s", next_link)
        return self._replication_page(self._request(next_link, ACCEPT_JSON))
