# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Client for RESO Web API (OData 4.0) servers.

Build queries with :class:`QueryBuilder` or :class:`ReplicationQueryBuilder`
and execute them through :class:`ResoClient`.
"""

from .client import ResoClient
from .core._auth import StaticTokenCredential
from .core.config import ResoConfig
from .core.errors import (
    ResoError,
    ConfigError,
    NetworkError,
    ParseError,
    InvalidQueryError,
    HttpError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    RateLimitedError,
    ServerError,
    ODataError,
)
from .models.metadata import EntityProperty, EntityType, Schema, parse_metadata
from .models.query_builder import Query, QueryBuilder
from .models.replication import (
    MAX_REPLICATION_TOP,
    ReplicationQuery,
    ReplicationQueryBuilder,
    ReplicationResponse,
)

__version__ = "0.1.0"

__all__ = [
    "ResoClient",
    "ResoConfig",
    "StaticTokenCredential",
    "Query",
    "QueryBuilder",
    "ReplicationQuery",
    "ReplicationQueryBuilder",
    "ReplicationResponse",
    "MAX_REPLICATION_TOP",
    "Schema",
    "EntityType",
    "EntityProperty",
    "parse_metadata",
    "ResoError",
    "ConfigError",
    "NetworkError",
    "ParseError",
    "InvalidQueryError",
    "HttpError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "RateLimitedError",
    "ServerError",
    "ODataError",
]
