# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import os
from typing import Optional

import requests

from azure.core.credentials import TokenCredential

from .core._auth import StaticTokenCredential, _AuthManager
from .core.config import ENV_BASE_URL, ENV_TOKEN, ResoConfig
from .core.errors import ConfigError
from .data._odata import _ODataClient
from .operations.metadata import MetadataOperations
from .operations.query import QueryOperations
from .operations.replication import ReplicationOperations


class ResoClient:
    """
    High-level client for RESO Web API servers.

    The client builds authenticated OData GET requests against an MLS service root
    and decodes the responses. HTTP work is delegated to an internal
    :class:`~reso_client.data._odata._ODataClient`.

    Operations are organized under namespaces:

    - ``client.query``: collection, key access and ``$count`` queries
    - ``client.replication``: bulk walks over the replication endpoint
    - ``client.metadata``: the ``$metadata`` EDMX document

    **Context Manager Support (Recommended)**:
        Using the client as a context manager pools connections in a single
        ``requests.Session`` and closes it on exit::

            with ResoClient(base_url, credential) as client:
                result = client.query.execute(query)

    :param base_url: Service root, for example ``"https://api.mls.com/odata"``.
        A trailing slash is removed.
    :type base_url: :class:`str`
    :param credential: Token source for the ``Authorization`` header. Use
        :class:`~reso_client.core._auth.StaticTokenCredential` for a fixed bearer token.
    :type credential: ~azure.core.credentials.TokenCredential
    :param config: Optional configuration (dataset id, timeout). If not provided,
        defaults are loaded from :meth:`~reso_client.core.config.ResoConfig.from_env`.
    :type config: ~reso_client.core.config.ResoConfig or None

    :raises ~reso_client.core.errors.ConfigError: If ``base_url`` is missing or empty after trimming.

    Example::

        from reso_client import ResoClient, ResoConfig, StaticTokenCredential, QueryBuilder

        client = ResoClient(
            "https://api.mls.com/odata",
            StaticTokenCredential("my-token"),
            ResoConfig(dataset_id="actris_ref"),
        )
        with client:
            query = QueryBuilder("Property").filter("City eq 'Austin'").top(10).build()
            for record in client.query.execute(query)["value"]:
                print(record["ListingKey"])
    """

    def __init__(
        self,
        base_url: str,
        credential: TokenCredential,
        config: Optional[ResoConfig] = None,
    ) -> None:
        self._base_url = (base_url or "").rstrip("/")
        if not self._base_url:
            raise ConfigError("base_url is required.")
        self.auth = _AuthManager(credential)
        self._config = config or ResoConfig.from_env()
        self._odata: Optional[_ODataClient] = None
        self._session: Optional[requests.Session] = None
        self._owns_session: bool = False

        self.query = QueryOperations(self)
        self.replication = ReplicationOperations(self)
        self.metadata = MetadataOperations(self)

    @classmethod
    def from_env(cls) -> "ResoClient":
        """
        Build a client from environment variables.

        ``RESO_BASE_URL`` and ``RESO_TOKEN`` are required. ``RESO_DATASET_ID`` and
        ``RESO_TIMEOUT`` are optional (see :meth:`ResoConfig.from_env`).

        :rtype: ResoClient
        :raises ~reso_client.core.errors.ConfigError: If a required variable is unset.
        """
        base_url = os.environ.get(ENV_BASE_URL)
        if not base_url:
            raise ConfigError(f"{ENV_BASE_URL} not set")
        token = os.environ.get(ENV_TOKEN)
        if not token:
            raise ConfigError(f"{ENV_TOKEN} not set")
        return cls(base_url, StaticTokenCredential(token), ResoConfig.from_env())

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def config(self) -> ResoConfig:
        return self._config

    def __enter__(self) -> "ResoClient":
        """
        Enter the context manager.

        Creates an HTTP session that all requests within the block reuse.

        :rtype: ResoClient
        """
        if self._session is None:
            self._session = requests.Session()
            self._owns_session = True
            # A lazily created OData client would otherwise keep sending without the session.
            if self._odata is not None:
                self._odata.close()
                self._odata = None
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Close the client and release its HTTP session.

        Safe to call multiple times. The client creates a fresh internal
        OData client on next use.
        """
        if self._odata is not None:
            self._odata.close()
            self._odata = None
        if self._session is not None and self._owns_session:
            self._session.close()
        self._session = None
        self._owns_session = False

    def _get_odata(self) -> _ODataClient:
        """
        Get or create the internal OData client.

        Construction is deferred until the first request; when a session exists
        (context manager), it is handed to the OData client.

        :rtype: ~reso_client.data._odata._ODataClient
        """
        if self._odata is None:
            self._odata = _ODataClient(
                self.auth,
                self._base_url,
                self._config,
                session=self._session,
            )
        return self._odata


__all__ = ["ResoClient"]
