# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
OData path and query-string serialization.

Pure functions from query values to the path+query string appended to the
service root. Filter, order-by, apply and key values are percent-encoded as URL
components; ``$select``/``$expand`` field lists are joined with literal commas
and left unencoded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence
from urllib.parse import quote

if TYPE_CHECKING:
    from .query_builder import Query
    from .replication import ReplicationQuery


def _encode(value: str) -> str:
    """Percent-encode everything except ASCII letters, digits and ``-_.~``."""
    return quote(value, safe="")


def _join_fields(fields: Sequence[str]) -> str:
    return ",".join(fields)


def _with_params(path: str, params: List[str]) -> str:
    if not params:
        return path
    return f"{path}?{'&'.join(params)}"


def _key_path(query: "Query") -> str:
    params: List[str] = []
    if query.select is not None:
        params.append(f"$select={_join_fields(query.select)}")
    if query.expand is not None:
        params.append(f"$expand={_join_fields(query.expand)}")
    return _with_params(f"{query.resource}('{_encode(query.key or '')}')", params)


def _count_path(query: "Query") -> str:
    params: List[str] = []
    if query.filter is not None:
        params.append(f"$filter={_encode(query.filter)}")
    return _with_params(f"{query.resource}/$count", params)


def _collection_path(query: "Query") -> str:
    params: List[str] = []
    if query.apply is not None:
        params.append(f"$apply={_encode(query.apply)}")
    if query.filter is not None:
        params.append(f"$filter={_encode(query.filter)}")
    if query.select is not None:
        params.append(f"$select={_join_fields(query.select)}")
    if query.expand is not None:
        params.append(f"$expand={_join_fields(query.expand)}")
    if query.order_by is not None:
        params.append(f"$orderby={_encode(query.order_by)}")
    if query.top is not None:
        params.append(f"$top={query.top}")
    if query.skip is not None:
        params.append(f"$skip={query.skip}")
    if query.count:
        params.append("$count=true")
    return _with_params(query.resource, params)


def serialize_query(query: "Query") -> str:
    """
    Serialize a :class:`~reso_client.models.query_builder.Query` to an OData path.

    Key access wins over count-only, which wins over the standard collection form.
    Parameters that do not belong to the chosen form are not emitted.

    :param query: A built query.
    :type query: Query
    :return: Path and query string relative to the service root.
    :rtype: str

    Example::

        serialize_query(QueryBuilder("Property").filter("City eq 'Austin'").top(5).build())
        # "Property?$filter=City%20eq%20%27Austin%27&$top=5"
    """
    if query.key is not None:
        return _key_path(query)
    if query.count_only:
        return _count_path(query)
    return _collection_path(query)


def serialize_replication_query(query: "ReplicationQuery") -> str:
    """Serialize a replication query to ``{resource}/replication?...``."""
    params: List[str] = []
    if query.filter is not None:
        params.append(f"$filter={_encode(query.filter)}")
    if query.select is not None:
        params.append(f"$select={_join_fields(query.select)}")
    if query.top is not None:
        params.append(f"$top={query.top}")
    return _with_params(f"{query.resource}/replication", params)


__all__ = ["serialize_query", "serialize_replication_query"]
