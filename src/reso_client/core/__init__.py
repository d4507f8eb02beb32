# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the RESO client.

This module contains the foundational components including authentication,
configuration, HTTP transport, and error handling.
"""

from .config import ResoConfig
from .errors import (
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

__all__ = [
    "ResoConfig",
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
