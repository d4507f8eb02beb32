# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Bearer-token authentication for the RESO client.

RESO servers hand out long-lived server tokens, so the client only needs to
present a static bearer token. :class:`StaticTokenCredential` adapts such a
token to the ``azure.core`` :class:`~azure.core.credentials.TokenCredential`
protocol, which keeps any other credential implementation pluggable.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Optional

from azure.core.credentials import AccessToken, TokenCredential

from .errors import ConfigError

# Static tokens are re-issued on every call; the expiry only needs to outlive one request.
_STATIC_TOKEN_LIFETIME_SECONDS = 3600


class StaticTokenCredential(TokenCredential):
    """
    Credential that always returns the same bearer token.

    :param token: OAuth bearer token issued by the RESO server.
    :type token: str
    :raises ConfigError: If ``token`` is empty.

    Example::

        credential = StaticTokenCredential("my-server-token")
        client = ResoClient("https://api.mls.com/odata", credential)
    """

    def __init__(self, token: str) -> None:
        token = (token or "").strip()
        if not token:
            raise ConfigError("token is required.")
        self._token = token

    def get_token(
        self,
        *scopes: str,
        claims: Optional[str] = None,
        tenant_id: Optional[str] = None,
        **kwargs: Any,
    ) -> AccessToken:
        return AccessToken(self._token, int(time.time()) + _STATIC_TOKEN_LIFETIME_SECONDS)

    def __repr__(self) -> str:
        return "StaticTokenCredential(token=<redacted>)"


@dataclass
class _TokenPair:
    """
    Container for an OAuth2 access token and its associated resource scope.

    :param resource: The OAuth2 scope/resource for which the token was acquired.
    :type resource: str
    :param access_token: The access token string.
    :type access_token: str
    """

    resource: str
    access_token: str

    def __repr__(self) -> str:
        return f"_TokenPair(resource={self.resource!r}, access_token=<redacted>)"


class _AuthManager:
    """
    Credential-based authentication manager.

    :param credential: Any ``TokenCredential``; use :class:`StaticTokenCredential`
        for a plain server token.
    :type credential: ~azure.core.credentials.TokenCredential
    :raises TypeError: If ``credential`` does not implement ``TokenCredential``.
    """

    def __init__(self, credential: TokenCredential) -> None:
        if not isinstance(credential, TokenCredential):
            raise TypeError("credential must implement azure.core.credentials.TokenCredential.")
        self.credential: TokenCredential = credential

    def _acquire_token(self, scope: str) -> _TokenPair:
        """
        Acquire an access token for the specified scope.

        :param scope: The scope passed to the credential (the service base URL).
        :type scope: str
        :return: Token pair containing the scope and access token.
        :rtype: _TokenPair
        """
        token = self.credential.get_token(scope)
        return _TokenPair(resource=scope, access_token=token.token)
