# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
HTTP transport with timeout handling and optional session support.

This module provides :class:`~reso_client.core._http._HttpClient`, a thin wrapper
around the requests library. It applies a default timeout and, when given a
session, reuses its connections. It never retries: a failed request surfaces to
the caller, who decides whether to issue it again.
"""

from __future__ import annotations

from typing import Any, Optional

import requests

from .config import DEFAULT_TIMEOUT_SECONDS


class _HttpClient:
    """
    HTTP client with default timeout handling and optional session support.

    :param timeout: Default request timeout in seconds. Defaults to 30.
    :type timeout: :class:`float` | None
    :param session: Optional requests.Session for connection reuse.
    :type session: :class:`requests.Session` | None
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.default_timeout: float = timeout if timeout is not None else DEFAULT_TIMEOUT_SECONDS
        self._session = session

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Execute one HTTP request.

        :param method: HTTP method (GET in practice).
        :type method: :class:`str`
        :param url: Absolute target URL.
        :type url: :class:`str`
        :param kwargs: Additional arguments passed to ``requests.request()`` or
            ``session.request()``, including headers.
        :return: HTTP response object.
        :rtype: :class:`requests.Response`
        :raises requests.exceptions.RequestException: On any transport failure.
        """
        kwargs.setdefault("timeout", self.default_timeout)
        if self._session is not None:
            return self._session.request(method, url, **kwargs)
        return requests.request(method, url, **kwargs)

    def close(self) -> None:
        """
        Close the HTTP client and release resources.

        If a session was provided, this method closes it. Safe to call multiple times.
        """
        if self._session is not None:
            self._session.close()
            self._session = None
